"""Bot relay endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from fastapi import APIRouter, Depends, Request, status

from seednote_api.adapters.telegram_client import TelegramApiError
from seednote_api.api.auth import optional_principal
from seednote_api.api.errors import api_error
from seednote_api.api.relay_models import RelayRequest  # noqa: TC001
from seednote_api.domain.models import Principal  # noqa: TC001
from seednote_api.services.relay import RelayMessage, ShareNotPermitted, ShareTarget

if TYPE_CHECKING:
    from seednote_api.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["relay"])


@router.post("/telegram")
async def relay_message(
    body: RelayRequest,
    request: Request,
    principal: Principal | None = Depends(optional_principal),
) -> dict[str, object]:
    """Forward a message or document through the bot."""
    container: AppContainer = request.app.state.container
    if body.share is not None and principal is None:
        raise api_error(
            status.HTTP_401_UNAUTHORIZED,
            "Unauthorized",
            "Sharing a memo requires Telegram init data",
        )
    try:
        outcome = await container.relay_service.relay(
            _to_relay_message(body), sender=principal
        )
    except ShareNotPermitted as exc:
        logger.info("Memo share denied: %s", exc)
        raise api_error(
            status.HTTP_403_FORBIDDEN,
            "Forbidden",
            "You can only share memos you created",
        ) from exc
    except TelegramApiError as exc:
        logger.warning("Telegram relay rejected: %s", exc)
        raise api_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Telegram API failed", str(exc)
        ) from exc
    except httpx.HTTPError as exc:
        # httpx messages include the bot URL, so only the type is reported.
        logger.warning("Telegram relay request failed: %s", type(exc).__name__)
        raise api_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to send message",
            type(exc).__name__,
        ) from exc
    return {
        "ok": True,
        "result": outcome.result,
        "sent_at": outcome.sent_at.isoformat(),
        "timezone": outcome.timezone,
        "recorded": outcome.recorded,
    }


def _to_relay_message(body: RelayRequest) -> RelayMessage:
    share = None
    if body.share is not None:
        share = ShareTarget(
            memo_id=str(body.share.memo_id),
            to_user_id=str(body.share.to_user_id),
            memo_text=body.share.memo_text,
        )
    return RelayMessage(
        chat_id=body.chat_id,
        text=body.text,
        document=body.document,
        caption=body.caption,
        disable_web_page_preview=body.disable_web_page_preview,
        local_time=body.local_time,
        timezone=body.timezone,
        share=share,
    )
