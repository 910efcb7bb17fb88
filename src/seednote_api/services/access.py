"""Access checks for stored memo files."""

from dataclasses import dataclass
from typing import Protocol

from seednote_api.domain.access import AccessGrant, AccessReason, AuthorizationDecision
from seednote_api.domain.models import Principal


class MalformedResourceKey(ValueError):
    """Resource key has no owner segment or contains relative segments."""


class MetadataRepository(Protocol):
    """Lookup interface for file ownership and share metadata."""

    def find_owning_record(self, resource_key: str) -> str | None:
        """Return the memo id that owns a storage path, if present."""

    def find_grants(self, record_id: str, principal_id: int) -> list[AccessGrant]:
        """Return share rows for a memo granted to the principal."""


def validate_resource_key(resource_key: str) -> str:
    """Return the owner segment of a resource key or raise MalformedResourceKey."""
    if "/" not in resource_key:
        raise MalformedResourceKey(f"resource key {resource_key!r} has no owner")
    segments = resource_key.split("/")
    if not segments[0]:
        raise MalformedResourceKey(f"resource key {resource_key!r} has no owner")
    if any(segment in {".", ".."} for segment in segments):
        raise MalformedResourceKey(
            f"resource key {resource_key!r} has relative segments"
        )
    return segments[0]


@dataclass
class AccessAuthorizer:
    """Decide whether a principal may read a stored file.

    Ownership is checked first from the key itself; only foreign keys hit the
    metadata store. Grantee ids are compared in text form because share rows
    may store them as strings.
    """

    metadata: MetadataRepository

    def authorize(
        self, principal: Principal, resource_key: str
    ) -> AuthorizationDecision:
        """Return an allow/deny decision for ``resource_key``."""
        validate_resource_key(resource_key)
        if resource_key.startswith(f"{principal.id}/"):
            return AuthorizationDecision.allow(AccessReason.OWNER_MATCH)

        try:
            record_id = self.metadata.find_owning_record(resource_key)
        except Exception as exc:
            return AuthorizationDecision.deny(
                AccessReason.LOOKUP_ERROR, f"file lookup failed: {exc}"
            )
        if record_id is None:
            return AuthorizationDecision.deny(
                AccessReason.LOOKUP_ERROR, "file is not registered"
            )

        try:
            grants = self.metadata.find_grants(record_id, principal.id)
        except Exception as exc:
            return AuthorizationDecision.deny(
                AccessReason.LOOKUP_ERROR, f"share lookup failed: {exc}"
            )

        if any(_grant_matches(grant, record_id, principal) for grant in grants):
            return AuthorizationDecision.allow(AccessReason.GRANT_FOUND)
        return AuthorizationDecision.deny(AccessReason.NO_GRANT)


def _grant_matches(grant: AccessGrant, record_id: str, principal: Principal) -> bool:
    return str(grant.record_id) == str(record_id) and str(
        grant.grantee_id
    ).strip() == str(principal.id)
