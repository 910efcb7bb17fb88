"""Pydantic models for relay requests."""

from datetime import datetime

from pydantic import BaseModel, model_validator


class ShareRequest(BaseModel):
    """Memo share metadata sent along with a relayed message."""

    memo_id: int | str
    to_user_id: int | str
    memo_text: str | None = None


class RelayRequest(BaseModel):
    """Message or document the Mini App wants the bot to send."""

    chat_id: int | str
    text: str | None = None
    document: str | None = None
    caption: str | None = None
    disable_web_page_preview: bool | None = None
    local_time: datetime | None = None
    timezone: str | None = None
    share: ShareRequest | None = None

    @model_validator(mode="after")
    def require_content(self) -> "RelayRequest":
        """Reject requests with neither text nor a document."""
        if not self.text and not self.document:
            raise ValueError("text or document is required")
        return self
