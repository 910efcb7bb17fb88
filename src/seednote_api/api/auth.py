"""Telegram init data dependencies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Header, Query, Request, status

from seednote_api.api.errors import api_error
from seednote_api.domain.models import Principal  # noqa: TC001
from seednote_api.services.identity import VerificationError

if TYPE_CHECKING:
    from seednote_api.containers import AppContainer

logger = logging.getLogger(__name__)

OPEN_IN_BOT_MESSAGE = "Please open this link in SeedNote Telegram bot"


async def optional_principal(
    request: Request,
    x_telegram_init_data: str | None = Header(default=None),
    init_data: str | None = Query(default=None, alias="initData"),
) -> Principal | None:
    """Return the verified principal when init data is supplied."""
    raw = x_telegram_init_data or init_data
    if not raw:
        return None
    container: AppContainer = request.app.state.container
    try:
        return container.identity_verifier.verify(raw)
    except VerificationError as exc:
        logger.info("Rejected Telegram init data: %s", type(exc).__name__)
        raise api_error(
            status.HTTP_401_UNAUTHORIZED, "Unauthorized", OPEN_IN_BOT_MESSAGE
        ) from exc


async def require_principal(
    request: Request,
    x_telegram_init_data: str | None = Header(default=None),
    init_data: str | None = Query(default=None, alias="initData"),
) -> Principal:
    """Ensure requests carry valid Telegram init data."""
    principal = await optional_principal(request, x_telegram_init_data, init_data)
    if principal is None:
        raise api_error(
            status.HTTP_401_UNAUTHORIZED, "Unauthorized", OPEN_IN_BOT_MESSAGE
        )
    return principal
