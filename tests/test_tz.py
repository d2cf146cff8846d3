from datetime import date, timedelta, timezone

import pytest
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from praytimes.tz import get_timezone, is_dst, standard_offset, utc_offset


def _zone(name):
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        pytest.skip(f"time zone data for {name} not installed")


def test_fixed_offset():
    tz = timezone(timedelta(hours=5, minutes=30))
    assert utc_offset(date(2024, 7, 1), tz) == 5.5
    assert standard_offset(2024, tz) == 5.5
    assert is_dst(date(2024, 7, 1), tz) is False


def test_local_zone_is_default():
    assert get_timezone(None) is None
    assert get_timezone("") is None
    assert isinstance(utc_offset(date(2024, 7, 1)), float)


def test_new_york_dst():
    tz = _zone("America/New_York")
    assert standard_offset(2024, tz) == -5
    assert utc_offset(date(2024, 7, 1), tz) == -4
    assert is_dst(date(2024, 7, 1), tz) is True
    assert is_dst(date(2024, 1, 15), tz) is False


def test_southern_hemisphere_dst():
    tz = _zone("Australia/Sydney")
    assert standard_offset(2024, tz) == 10
    assert is_dst(date(2024, 1, 15), tz) is True
    assert is_dst(date(2024, 7, 1), tz) is False
