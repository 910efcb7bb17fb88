"""Supabase repository for delivered memo shares."""

from dataclasses import dataclass

from supabase import Client

from seednote_api.domain.shares import DeliveryRecord
from seednote_api.services.relay import DeliveryRepository


@dataclass
class SupabaseShareRepository(DeliveryRepository):
    """Supabase-backed share repository."""

    client: Client

    def find_memo_owner(self, memo_id: str) -> str | None:
        """Return the creator of a memo, if present."""
        response = (
            self.client.table("memos")
            .select("user_id")
            .eq("id", memo_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        user_id = response.data[0].get("user_id")
        return str(user_id) if user_id is not None else None

    def create_delivery(self, record: DeliveryRecord) -> None:
        """Create a share row for a delivered memo."""
        response = (
            self.client.table("shares")
            .insert(
                {
                    "memo_id": record.memo_id,
                    "from_user_id": str(record.from_user_id),
                    "to_user_id": record.to_user_id,
                    "memo_text": record.memo_text,
                    "sent_at": record.sent_at.isoformat(),
                    "timezone": record.timezone,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create share record")
