from datetime import UTC, datetime, timedelta, timezone

from leadhub.app.core.time import ensure_utc, utc_now


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_ensure_utc_handles_naive_and_offset_values():
    assert ensure_utc(None) is None
    naive = datetime(2030, 5, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2030, 5, 1, 12, 0, tzinfo=UTC)
    offset = datetime(2030, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(offset) == datetime(2030, 5, 1, 12, 0, tzinfo=UTC)
