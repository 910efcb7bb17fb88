"""Supabase-backed file and share metadata lookups."""

from dataclasses import dataclass

from supabase import Client

from seednote_api.domain.access import AccessGrant
from seednote_api.services.access import MetadataRepository


@dataclass
class SupabaseMetadataRepository(MetadataRepository):
    """Supabase implementation for file ownership and share lookups."""

    client: Client

    def find_owning_record(self, resource_key: str) -> str | None:
        """Return the memo id registered for a storage path, if present."""
        response = (
            self.client.table("files")
            .select("memo_id")
            .eq("storage_path", resource_key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        memo_id = response.data[0].get("memo_id")
        return str(memo_id) if memo_id is not None else None

    def find_grants(self, record_id: str, principal_id: int) -> list[AccessGrant]:
        """Return shares of a memo addressed to the principal."""
        response = (
            self.client.table("shares")
            .select("memo_id, to_user_id")
            .eq("memo_id", record_id)
            .eq("to_user_id", str(principal_id))
            .execute()
        )
        return [_parse_grant(row) for row in response.data or []]


def _parse_grant(row: dict[str, object]) -> AccessGrant:
    """Parse a share row into an access grant."""
    return AccessGrant(
        record_id=str(row["memo_id"]),
        grantee_id=str(row["to_user_id"]),
    )
