"""Relay memos and documents through the bot."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from seednote_api.adapters.telegram_client import TelegramClient
from seednote_api.domain.models import Principal
from seednote_api.domain.shares import DeliveryRecord

logger = logging.getLogger(__name__)


class DeliveryRepository(Protocol):
    """Persistence interface for delivered shares."""

    def find_memo_owner(self, memo_id: str) -> str | None:
        """Return the id of the user who created a memo, if present."""

    def create_delivery(self, record: DeliveryRecord) -> None:
        """Persist a delivery record."""


class MissingSender(ValueError):
    """A share was requested without an authenticated sender."""


class ShareNotPermitted(PermissionError):
    """The sender does not own the memo being shared."""


@dataclass(frozen=True)
class ShareTarget:
    """Memo share details attached to a relayed message."""

    memo_id: str
    to_user_id: str
    memo_text: str | None = None


@dataclass(frozen=True)
class RelayMessage:
    """Message or document to forward to a chat."""

    chat_id: int | str
    text: str | None = None
    document: str | None = None
    caption: str | None = None
    disable_web_page_preview: bool | None = None
    local_time: datetime | None = None
    timezone: str | None = None
    share: ShareTarget | None = None


@dataclass(frozen=True)
class RelayResult:
    """Outcome of a relayed message."""

    result: dict[str, object]
    sent_at: datetime
    timezone: str | None
    recorded: bool


@dataclass
class RelayService:
    """Forward messages to Telegram and record memo shares."""

    telegram_client: TelegramClient
    delivery_repository: DeliveryRepository

    async def relay(
        self, message: RelayMessage, sender: Principal | None = None
    ) -> RelayResult:
        """Send the message and persist a delivery record when sharing."""
        if message.share is not None and sender is None:
            raise MissingSender("sharing a memo requires an authenticated sender")
        if message.share is not None:
            self._check_memo_owner(message.share.memo_id, sender)
        sent_at = resolve_sent_at(message.local_time)

        if message.document:
            caption = message.caption if message.caption is not None else message.text
            result = await self.telegram_client.send_document(
                chat_id=message.chat_id,
                document=message.document,
                caption=caption,
            )
        else:
            result = await self.telegram_client.send_message(
                chat_id=message.chat_id,
                text=message.text or "",
                disable_web_page_preview=message.disable_web_page_preview,
            )

        recorded = False
        if message.share is not None and sender is not None:
            recorded = self._record_delivery(message, sender, sent_at)
        return RelayResult(
            result=result,
            sent_at=sent_at,
            timezone=message.timezone,
            recorded=recorded,
        )

    def _check_memo_owner(self, memo_id: str, sender: Principal) -> None:
        """Only the memo's creator may grant access to it."""
        try:
            owner_id = self.delivery_repository.find_memo_owner(memo_id)
        except Exception as exc:
            raise ShareNotPermitted(f"owner of memo {memo_id!r} is unknown") from exc
        if owner_id is None or str(owner_id).strip() != str(sender.id):
            raise ShareNotPermitted(f"user {sender.id} does not own memo {memo_id!r}")

    def _record_delivery(
        self, message: RelayMessage, sender: Principal, sent_at: datetime
    ) -> bool:
        share = message.share
        try:
            self.delivery_repository.create_delivery(
                DeliveryRecord(
                    memo_id=share.memo_id,
                    from_user_id=sender.id,
                    to_user_id=share.to_user_id,
                    memo_text=share.memo_text,
                    sent_at=sent_at,
                    timezone=message.timezone,
                )
            )
        except Exception:
            logger.exception(
                "Failed to record memo share",
                extra={"memo_id": share.memo_id, "from_user_id": sender.id},
            )
            return False
        return True


def resolve_sent_at(local_time: datetime | None) -> datetime:
    """Return the client send time in UTC, defaulting to now."""
    if local_time is None:
        return datetime.now(tz=UTC)
    if local_time.tzinfo is None:
        return local_time.replace(tzinfo=UTC)
    return local_time.astimezone(UTC)
