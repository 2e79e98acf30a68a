"""
Deletion grace period for account listings.

A listing moves from ``active`` to ``pending_deletion`` when an admin deletes it.
During the grace period it shows as sold and can be restored; afterwards a
cleanup pass purges the row and its stored images.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field

GRACE_PERIOD = timedelta(hours=24)


class ListingState(str, Enum):
    ACTIVE = "active"
    PENDING_DELETION = "pending_deletion"


class PurgeOutcome(str, Enum):
    PURGED = "purged"
    # Row no longer matched the purge filter (restored or already removed)
    SKIPPED = "skipped"
    FAILED = "failed"


class TimeRemaining(BaseModel):
    hours: int = 0
    minutes: int = 0


class PurgeResult(BaseModel):
    """Outcome of purging a single listing."""
    account_id: str
    outcome: PurgeOutcome
    images_deleted: int = 0
    image_errors: list[str] = Field(default_factory=list)
    error: str | None = None


class CleanupSummary(BaseModel):
    """Aggregated result of one cleanup pass."""
    cutoff: datetime
    results: list[PurgeResult] = Field(default_factory=list)

    @computed_field
    @property
    def accounts_deleted(self) -> int:
        return sum(1 for r in self.results if r.outcome == PurgeOutcome.PURGED)

    @computed_field
    @property
    def images_deleted(self) -> int:
        return sum(r.images_deleted for r in self.results)

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.outcome == PurgeOutcome.FAILED)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize a datetime the way the hosted service stores it."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_ts(value: str | datetime | None) -> datetime | None:
    """Parse an ISO 8601 timestamp from the database into an aware UTC datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    value = value.strip()
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def listing_state(row: dict[str, Any]) -> ListingState:
    if row.get("deleted_at"):
        return ListingState.PENDING_DELETION
    return ListingState.ACTIVE


def time_remaining(
    deleted_at: str | datetime | None,
    now: datetime,
    grace: timedelta = GRACE_PERIOD,
) -> TimeRemaining:
    """Whole hours and minutes left before a listing marked at ``deleted_at`` expires."""
    marked = parse_ts(deleted_at)
    if marked is None:
        return TimeRemaining()
    left = marked + grace - now
    if left <= timedelta(0):
        return TimeRemaining()
    total_minutes = int(left.total_seconds() // 60)
    return TimeRemaining(hours=total_minutes // 60, minutes=total_minutes % 60)


def cleanup_cutoff(now: datetime, grace: timedelta = GRACE_PERIOD) -> datetime:
    return now - grace


def is_expired(row: dict[str, Any], now: datetime, grace: timedelta = GRACE_PERIOD) -> bool:
    """True when the listing was marked strictly more than ``grace`` ago."""
    marked = parse_ts(row.get("deleted_at"))
    return marked is not None and marked < cleanup_cutoff(now, grace)


def mark_for_deletion_fields(now: datetime) -> dict[str, Any]:
    stamp = to_iso(now)
    return {"is_sold": True, "sold_at": stamp, "deleted_at": stamp}


def restore_fields() -> dict[str, Any]:
    return {"is_sold": False, "sold_at": None, "deleted_at": None}
