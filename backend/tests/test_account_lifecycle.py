"""Grace-period arithmetic and state helpers."""

from datetime import datetime, timedelta, timezone

from storefront.services.account_lifecycle import (
    CleanupSummary,
    ListingState,
    PurgeOutcome,
    PurgeResult,
    cleanup_cutoff,
    is_expired,
    listing_state,
    mark_for_deletion_fields,
    parse_ts,
    restore_fields,
    time_remaining,
    to_iso,
)

T = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_time_remaining_right_after_marking():
    left = time_remaining(T, T)
    assert (left.hours, left.minutes) == (24, 0)


def test_time_remaining_floors_hours_and_minutes():
    left = time_remaining(T, T + timedelta(hours=2, minutes=29, seconds=30))
    # 21h 30m 30s left
    assert (left.hours, left.minutes) == (21, 30)


def test_time_remaining_last_minute():
    left = time_remaining(T, T + timedelta(hours=23, minutes=59, seconds=1))
    assert (left.hours, left.minutes) == (0, 0)
    left = time_remaining(T, T + timedelta(hours=23, minutes=58))
    assert (left.hours, left.minutes) == (0, 2)


def test_time_remaining_is_zero_once_expired():
    for later in (timedelta(hours=24), timedelta(hours=25), timedelta(days=10)):
        left = time_remaining(T, T + later)
        assert (left.hours, left.minutes) == (0, 0)


def test_time_remaining_accepts_iso_strings():
    left = time_remaining("2026-03-01T12:00:00Z", T + timedelta(hours=1))
    assert (left.hours, left.minutes) == (23, 0)
    left = time_remaining("2026-03-01T12:00:00+00:00", T + timedelta(minutes=90))
    assert (left.hours, left.minutes) == (22, 30)


def test_time_remaining_without_mark():
    left = time_remaining(None, T)
    assert (left.hours, left.minutes) == (0, 0)


def test_parse_ts_handles_naive_and_garbage():
    assert parse_ts("2026-03-01T12:00:00") == T
    assert parse_ts("not a date") is None
    assert parse_ts("") is None


def test_expiry_is_strict():
    row = {"deleted_at": to_iso(T)}
    assert not is_expired(row, T + timedelta(hours=24))
    assert is_expired(row, T + timedelta(hours=24, seconds=1))
    assert not is_expired({"deleted_at": None}, T + timedelta(days=30))
    assert cleanup_cutoff(T) == T - timedelta(hours=24)


def test_listing_state():
    assert listing_state({"deleted_at": None}) == ListingState.ACTIVE
    assert listing_state({}) == ListingState.ACTIVE
    assert listing_state({"deleted_at": to_iso(T)}) == ListingState.PENDING_DELETION


def test_mark_and_restore_fields():
    marked = mark_for_deletion_fields(T)
    assert marked == {
        "is_sold": True,
        "sold_at": "2026-03-01T12:00:00Z",
        "deleted_at": "2026-03-01T12:00:00Z",
    }
    assert restore_fields() == {"is_sold": False, "sold_at": None, "deleted_at": None}


def test_cleanup_summary_counts():
    summary = CleanupSummary(
        cutoff=T,
        results=[
            PurgeResult(account_id="a", outcome=PurgeOutcome.PURGED, images_deleted=2),
            PurgeResult(account_id="b", outcome=PurgeOutcome.PURGED, images_deleted=1),
            PurgeResult(account_id="c", outcome=PurgeOutcome.SKIPPED),
            PurgeResult(account_id="d", outcome=PurgeOutcome.FAILED, error="boom"),
        ],
    )
    assert summary.accounts_deleted == 2
    assert summary.images_deleted == 3
    assert summary.failed == 1
    dumped = summary.model_dump()
    assert dumped["accounts_deleted"] == 2
    assert dumped["failed"] == 1
