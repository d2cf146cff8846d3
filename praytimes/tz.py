from datetime import date, datetime
from zoneinfo import ZoneInfo


def get_timezone(tz_name):
    """Return a ZoneInfo for ``tz_name``, or None for the system local zone."""
    if tz_name:
        return ZoneInfo(tz_name)
    return None


def utc_offset(day, tzinfo=None):
    # noon keeps us clear of the DST switch hours
    dt = datetime(day.year, day.month, day.day, 12, 0, 0)
    if tzinfo is None:
        dt = dt.astimezone()
    else:
        dt = dt.replace(tzinfo=tzinfo)
    offset = dt.utcoffset()
    return offset.total_seconds() / 3600.0 if offset else 0.0


def standard_offset(year, tzinfo=None):
    t1 = utc_offset(date(year, 1, 1), tzinfo)
    t2 = utc_offset(date(year, 7, 1), tzinfo)
    return min(t1, t2)


def is_dst(day, tzinfo=None):
    return utc_offset(day, tzinfo) != standard_offset(day.year, tzinfo)
