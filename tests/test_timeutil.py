import time
from datetime import datetime, timedelta, timezone

import pytest

from imtools import timeutil

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_get_current_timestamp_by_second():
    now = int(time.time())
    assert timeutil.get_current_timestamp_by_second() >= now


def test_unix_second_to_time():
    now = int(time.time())
    got = timeutil.unix_second_to_time(now)
    assert int(got.timestamp()) == now


def test_unix_nano_second_to_time():
    now = time.time_ns()
    got = timeutil.unix_nano_second_to_time(now)
    assert (got - EPOCH) // timedelta(microseconds=1) == now // 1000


def test_unix_mill_second_to_time():
    now = time.time_ns() // 1_000_000
    got = timeutil.unix_mill_second_to_time(now)
    assert (got - EPOCH) // timedelta(milliseconds=1) == now


def test_get_current_timestamp_by_nano():
    now = time.time_ns()
    assert timeutil.get_current_timestamp_by_nano() >= now


def test_get_current_timestamp_by_mill():
    now = time.time_ns() // 1_000_000
    assert timeutil.get_current_timestamp_by_mill() >= now


def test_get_cur_day_half_timestamp():
    expected = timeutil.get_cur_day_zero_timestamp() + timeutil.HALF_OFFSET
    assert timeutil.get_cur_day_half_timestamp() == expected


def test_get_cur_day_zero_time_format_round_trip():
    text = timeutil.get_cur_day_zero_time_format()
    parsed = datetime.strptime(text, "%Y-%m-%d_%H-%M-%S")
    assert int(parsed.timestamp()) == timeutil.get_cur_day_zero_timestamp()


def test_get_cur_day_half_time_format_round_trip():
    text = timeutil.get_cur_day_half_time_format()
    parsed = datetime.strptime(text, "%Y-%m-%d_%H-%M-%S")
    assert int(parsed.timestamp()) == timeutil.get_cur_day_half_timestamp()


def test_get_timestamp_by_format_round_trip():
    ts = 1704110400
    text = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(ts))
    assert timeutil.get_timestamp_by_format(text) == str(ts)


def test_get_timestamp_by_format_invalid_gives_zero_time():
    assert timeutil.get_timestamp_by_format("not a date") == "-62135596800"


@pytest.mark.parametrize(
    "layout, source, expected",
    [
        ("2006-01-02", "2024-01-01", 1704067200),
        ("2006-01-02 15:04:05", "2024-01-01 12:00:00", 1704110400),
        ("2006-01-02T15:04:05Z07:00", "2024-01-01T20:00:00+08:00", 1704110400),
    ],
)
def test_time_string_format_time_unix(layout, source, expected):
    assert timeutil.time_string_format_time_unix(layout, source) == expected


def test_time_string_format_time_unix_invalid():
    assert timeutil.time_string_format_time_unix("2006-01-02", "garbage") == -62135596800


def test_time_string_to_time_and_back():
    parsed = timeutil.time_string_to_time("2024-03-05")
    assert parsed == datetime(2024, 3, 5, tzinfo=timezone.utc)
    assert timeutil.time_to_string(parsed) == "2024-03-05"


def test_time_string_to_time_invalid():
    with pytest.raises(ValueError):
        timeutil.time_string_to_time("2024-13-45")


def test_get_current_time_formatted_parses():
    text = timeutil.get_current_time_formatted()
    parsed = datetime.strptime(text, "%Y-%m-%d %H:%M:%S")
    assert abs(parsed.timestamp() - time.time()) < 5


def test_get_timestamp_by_timezone():
    now = int(time.time())
    assert timeutil.get_timestamp_by_timezone("UTC") >= now


def test_unknown_timezone_raises():
    with pytest.raises(timeutil.TimezoneError):
        timeutil.get_timestamp_by_timezone("No/Such_Zone")
    with pytest.raises(timeutil.TimezoneError):
        timeutil.is_nth_day_cycle("No/Such_Zone", 0, 1)


def test_days_between_timestamps():
    start = int(time.time()) - 3 * 86400 - 100
    assert timeutil.days_between_timestamps("UTC", start) == 3


def test_same_weekday_and_day_of_month_for_now():
    now = int(time.time())
    assert timeutil.is_same_weekday("Local", now) is True
    assert timeutil.is_same_day_of_month("Local", now) is True


def test_is_weekday():
    assert timeutil.is_weekday(1704283200) is True
    assert timeutil.is_weekday(1704542400) is False


def test_is_nth_day_cycle():
    now = int(time.time())
    assert timeutil.is_nth_day_cycle("UTC", now, 1) is True
    assert timeutil.is_nth_day_cycle("UTC", now - 2 * 86400 - 10, 2) is True
    assert timeutil.is_nth_day_cycle("UTC", now - 3 * 86400 - 10, 2) is False


def test_is_nth_day_cycle_zero_period():
    with pytest.raises(ZeroDivisionError):
        timeutil.is_nth_day_cycle("UTC", int(time.time()), 0)


def test_is_nth_week_cycle():
    now = int(time.time())
    assert timeutil.is_nth_week_cycle("UTC", now - 14 * 86400, 2) is True
    assert timeutil.is_nth_week_cycle("UTC", now - 7 * 86400, 2) is False


def test_is_nth_month_cycle():
    now = int(time.time())
    assert timeutil.is_nth_month_cycle("Local", now, 1) is True
    assert timeutil.is_nth_month_cycle("Local", now, 3) is True