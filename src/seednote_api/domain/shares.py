"""Domain models for relayed memo shares."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DeliveryRecord:
    """Share row written after a memo has been delivered to another user."""

    memo_id: str
    from_user_id: int
    to_user_id: str
    memo_text: str | None
    sent_at: datetime
    timezone: str | None
