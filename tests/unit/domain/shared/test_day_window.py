"""Unit tests for calendar-day helpers."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from domain.shared.day_window import as_chart_date, day_window, local_midnight, today

ROME = ZoneInfo("Europe/Rome")


def test_utc_window_covers_one_day():
    start, end = day_window(date(2026, 10, 19), timezone.utc)

    assert start == datetime(2026, 10, 19, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 20, tzinfo=timezone.utc)


def test_window_follows_local_midnight():
    start, end = day_window(date(2026, 10, 19), ROME)

    assert start == datetime(2026, 10, 18, 22, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 19, 22, 0, tzinfo=timezone.utc)


def test_window_across_dst_change_is_25_hours():
    # Europe/Rome leaves summer time on 25 October 2026
    start, end = day_window(date(2026, 10, 25), ROME)

    assert (end - start).total_seconds() == 25 * 3600


def test_default_day_is_today_in_zone():
    # 23:30 UTC on the 19th is already the 20th in Rome
    now = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)

    assert today(ROME, now) == date(2026, 10, 20)
    start, _ = day_window(None, ROME, now)
    assert start == local_midnight(date(2026, 10, 20), ROME)


def test_as_chart_date_variants():
    assert as_chart_date(date(2026, 10, 19), timezone.utc) == datetime(
        2026, 10, 19, tzinfo=timezone.utc
    )
    # Naive datetimes are local wall-clock time
    assert as_chart_date(datetime(2026, 10, 19, 8, 0), ROME) == datetime(
        2026, 10, 19, 6, 0, tzinfo=timezone.utc
    )
    aware = datetime(2026, 10, 19, 8, 0, tzinfo=ROME)
    assert as_chart_date(aware, timezone.utc) == datetime(2026, 10, 19, 6, 0, tzinfo=timezone.utc)
