"""Access control domain models."""

from dataclasses import dataclass
from enum import Enum


class AccessReason(Enum):
    """Why an authorization decision was reached."""

    OWNER_MATCH = "owner-match"
    GRANT_FOUND = "grant-found"
    NO_GRANT = "no-grant"
    LOOKUP_ERROR = "lookup-error"


@dataclass(frozen=True)
class AccessGrant:
    """A share row allowing a grantee to read another user's memo files."""

    record_id: str
    grantee_id: str


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of an access check for a single resource key."""

    allowed: bool
    reason: AccessReason
    detail: str | None = None

    @classmethod
    def allow(cls, reason: AccessReason) -> "AuthorizationDecision":
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(
        cls, reason: AccessReason, detail: str | None = None
    ) -> "AuthorizationDecision":
        return cls(allowed=False, reason=reason, detail=detail)
