"""JSON error responses shared by the API routers."""

from fastapi import HTTPException


def api_error(
    status_code: int, error: str, message: str | None = None
) -> HTTPException:
    """Build an HTTPException rendered as ``{"error", "message"}``."""
    detail: dict[str, str] = {"error": error}
    if message is not None:
        detail["message"] = message
    return HTTPException(status_code=status_code, detail=detail)
