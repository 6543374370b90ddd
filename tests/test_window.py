from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from activity_window import NOT_APPLICABLE, Absolute, ParseError, Relative, Window, new_window
from activity_window.window import next_absolute_occurrence, previous_absolute_occurrence

MINUTE = timedelta(minutes=1)
INTERVAL = timedelta(minutes=30)


def _at(hh, mm, day=2):
    return datetime(2017, 1, day, hh, mm, tzinfo=timezone.utc)


def _clock(hh, mm):
    return lambda: _at(hh, mm)


def test_no_window():
    w = Window("00:00", "00:00")
    assert w.always_active
    assert w.active()


def test_same_start_end_is_always_active():
    w = Window("13:37", "13:37")
    for hh, mm in [(0, 0), (13, 36), (13, 37), (23, 59)]:
        now = _at(hh, mm)
        assert w.active(now)
        assert w.until(now) == timedelta(0)
        assert w.until_end(now) == timedelta(0)
        assert w.until_next_interval(INTERVAL, now) == NOT_APPLICABLE


def test_same_relative_specs_are_not_always_active():
    w = Window("1h", "1h")
    assert not w.always_active


def test_start_less_than_end():
    w = Window("09:10", "17:30")

    w.now = _clock(9, 9)
    assert not w.active()
    assert w.until() == MINUTE
    assert w.until_next_interval(INTERVAL) == NOT_APPLICABLE
    assert w.until_end() == timedelta(0)

    w.now = _clock(9, 10)
    assert w.active()
    assert w.until() == timedelta(0)
    assert w.until_next_interval(INTERVAL) == 30 * MINUTE

    w.now = _clock(12, 0)
    assert w.active()
    assert w.until() == timedelta(0)
    assert w.until_next_interval(INTERVAL) == 10 * MINUTE
    assert w.until_end() == timedelta(hours=5, minutes=30)

    w.now = _clock(17, 29)
    assert w.active()
    assert w.until() == timedelta(0)
    assert w.until_next_interval(INTERVAL) == NOT_APPLICABLE
    assert w.until_end() == MINUTE

    w.now = _clock(17, 30)
    assert not w.active()
    assert w.until() == 940 * MINUTE
    assert w.until_next_interval(INTERVAL) == NOT_APPLICABLE
    assert w.until_end() == timedelta(0)


def test_start_greater_than_end_crosses_midnight():
    w = Window("22:10", "09:50")

    w.now = _clock(22, 9)
    assert not w.active()
    assert w.until() == MINUTE
    assert w.until_next_interval(INTERVAL) == NOT_APPLICABLE

    w.now = _clock(22, 10)
    assert w.active()
    assert w.until() == timedelta(0)

    w.now = _clock(23, 59)
    assert w.active()
    assert w.until() == timedelta(0)
    assert w.until_next_interval(INTERVAL) == 11 * MINUTE
    assert w.until_end() == timedelta(hours=9, minutes=51)

    w.now = _clock(0, 0)
    assert w.active()
    assert w.until_next_interval(INTERVAL) == 10 * MINUTE

    w.now = _clock(0, 1)
    assert w.active()
    assert w.until_next_interval(INTERVAL) == 9 * MINUTE

    w.now = _clock(2, 0)
    assert w.active()
    assert w.until() == timedelta(0)

    w.now = _clock(9, 49)
    assert w.active()
    assert w.until_end() == MINUTE
    assert w.until_next_interval(INTERVAL) == NOT_APPLICABLE

    w.now = _clock(9, 50)
    assert not w.active()
    assert w.until() == 740 * MINUTE
    assert w.until_next_interval(INTERVAL) == NOT_APPLICABLE


def test_morning_to_morning():
    # Inactive only between 10:00 and 11:00 each day
    w = Window("11:00", "10:00")

    w.now = _clock(9, 59)
    assert w.active()
    assert w.until_end() == MINUTE

    w.now = _clock(10, 0)
    assert not w.active()
    assert w.until() == timedelta(hours=1)

    w.now = _clock(10, 59)
    assert not w.active()
    assert w.until() == MINUTE

    w.now = _clock(11, 0)
    assert w.active()
    assert w.until_end() == timedelta(hours=23)

    w.now = _clock(18, 0)
    assert w.active()
    assert w.until_end() == timedelta(hours=16)


def test_explicit_now_overrides_clock():
    w = Window("09:10", "17:30", now=_clock(3, 0))
    assert not w.active()
    assert w.active(_at(12, 0))


def test_naive_clock_values():
    w = Window("09:10", "17:30")
    now = datetime(2017, 1, 2, 12, 0)
    assert w.active(now)
    assert w.until_end(now) == timedelta(hours=5, minutes=30)
    assert w.next_start(now) == datetime(2017, 1, 3, 9, 10)


def test_default_clock_is_timezone_aware():
    w = Window("09:10", "17:30")
    assert w.now().tzinfo is not None


def test_setting_lat_long():
    w = Window("1h", "1h", 123.0, 80.0)
    assert w.latitude == 123.0
    assert w.longitude == 80.0


def test_parsing_of_window():
    w = Window("20:10", "08:00")
    assert w.start == Absolute(20, 10)
    assert w.end == Absolute(8, 0)

    w = new_window("-1h20m", "10:31")
    assert w.start == Relative(-timedelta(hours=1, minutes=20))
    assert w.end == Absolute(10, 31)

    w = Window("21:59", "3h")
    assert w.start == Absolute(21, 59)
    assert w.end == Relative(timedelta(hours=3))

    w = Window("30m", "-1h45m")
    assert w.start == Relative(timedelta(minutes=30))
    assert w.end == Relative(-timedelta(hours=1, minutes=45))


@pytest.mark.parametrize("start,end", [("abc", "1:30"), ("1:30", "abc"), ("-1a", "1:30")])
def test_invalid_window_specs(start, end):
    with pytest.raises(ParseError):
        Window(start, end)


def test_absolute_occurrence_helpers():
    now = _at(12, 0)
    assert next_absolute_occurrence(now, 12, 0) == _at(12, 0, day=3)
    assert next_absolute_occurrence(now, 12, 1) == _at(12, 1)
    assert next_absolute_occurrence(now, 1, 0) == _at(1, 0, day=3)
    assert previous_absolute_occurrence(now, 12, 0) == _at(12, 0)
    assert previous_absolute_occurrence(now, 12, 1) == _at(12, 1, day=1)
    assert previous_absolute_occurrence(now, 1, 0) == _at(1, 0)


def test_occurrence_rolls_over_month_end():
    now = datetime(2017, 1, 31, 23, 0, tzinfo=timezone.utc)
    assert next_absolute_occurrence(now, 6, 0) == datetime(2017, 2, 1, 6, 0, tzinfo=timezone.utc)


def test_dst_start_counts_real_elapsed_time():
    # Clocks in Auckland jump from 02:00 to 03:00 on 2017-09-24
    tz = ZoneInfo("Pacific/Auckland")
    w = Window("01:00", "05:00")
    now = datetime(2017, 9, 24, 1, 30, tzinfo=tz)
    assert w.active(now)
    assert w.until_end(now) == timedelta(hours=2, minutes=30)


def test_describe():
    assert Window("20:10", "08:00").describe() == "window starts at 20:10 and ends at 08:00"
    assert str(Window("-1h", "2h")) == "window starts at 1h0m0s before sunset and ends at 2h0m0s after sunrise"
    assert Window("0s", "7:05").describe() == "window starts at at sunset and ends at 07:05"
    assert Window("06:00", "06:00").describe() == "window is always active"


def test_new_window_forwards_clock_and_sun_source():
    def sun(latitude, longitude, year, month, day):
        base = datetime(year, month, day, tzinfo=timezone.utc)
        return base.replace(hour=6), base.replace(hour=20)

    w = new_window("-1h", "2h", 10.0, 20.0, now=_clock(21, 0), sunrise_sunset=sun)
    assert w.now() == _at(21, 0)
    assert w.sunrise_sunset is sun
    assert w.active()
    assert w.next_end() == _at(8, 0, day=3)
