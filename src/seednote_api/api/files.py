"""Memo file download endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response, status

from seednote_api.api.auth import require_principal
from seednote_api.api.errors import api_error
from seednote_api.domain.access import AccessReason
from seednote_api.domain.models import Principal  # noqa: TC001
from seednote_api.services.access import MalformedResourceKey
from seednote_api.services.files import StorageDownloadError

if TYPE_CHECKING:
    from seednote_api.containers import AppContainer
    from seednote_api.domain.files import StoredFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.get("/file/{resource_key:path}")
def download_file(
    resource_key: str,
    request: Request,
    principal: Principal = Depends(require_principal),
) -> Response:
    """Stream a memo file to its owner or a user it was shared with."""
    container: AppContainer = request.app.state.container
    return _serve_file(container, principal, resource_key)


@router.get("/file")
@router.get("/download")
def download_file_by_query(
    request: Request,
    path: str | None = None,
    principal: Principal = Depends(require_principal),
) -> Response:
    """Query-string variant of the download endpoint."""
    container: AppContainer = request.app.state.container
    return _serve_file(container, principal, path or "")


def _serve_file(
    container: AppContainer, principal: Principal, resource_key: str
) -> Response:
    if not resource_key:
        raise api_error(status.HTTP_400_BAD_REQUEST, "Invalid path")
    try:
        decision = container.access_authorizer.authorize(principal, resource_key)
    except MalformedResourceKey as exc:
        raise api_error(status.HTTP_400_BAD_REQUEST, "Invalid path", str(exc)) from exc

    if not decision.allowed:
        if decision.reason is AccessReason.NO_GRANT:
            logger.info(
                "File access denied",
                extra={"user_id": principal.id, "resource_key": resource_key},
            )
            raise api_error(
                status.HTTP_403_FORBIDDEN,
                "Forbidden",
                "You do not have permission to access this file",
            )
        logger.warning(
            "File lookup failed: %s",
            decision.detail,
            extra={"user_id": principal.id, "resource_key": resource_key},
        )
        raise api_error(status.HTTP_404_NOT_FOUND, "File not found")

    try:
        stored = container.file_storage.download(resource_key)
    except StorageDownloadError as exc:
        logger.warning(
            "Storage download failed",
            exc_info=exc,
            extra={"resource_key": resource_key},
        )
        raise api_error(status.HTTP_404_NOT_FOUND, "File not found") from exc
    return _file_response(stored)


def _file_response(stored: StoredFile) -> Response:
    """Build an attachment response for downloaded file bytes."""
    return Response(
        content=stored.content,
        media_type=stored.content_type,
        headers={"Content-Disposition": content_disposition(stored.file_name)},
    )


def content_disposition(file_name: str) -> str:
    """Return an attachment header value safe for non-ASCII file names."""
    encoded = quote(file_name, safe="")
    return f"attachment; filename=\"{encoded}\"; filename*=UTF-8''{encoded}"
