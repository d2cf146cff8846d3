import math

J2000 = 2451545.0


def dtr(d):
    return (d * math.pi) / 180.0


def rtd(r):
    return (r * 180.0) / math.pi


def sin(d):
    return math.sin(dtr(d))


def cos(d):
    return math.cos(dtr(d))


def tan(d):
    return math.tan(dtr(d))


def arcsin(x):
    return rtd(math.asin(x))


def arccos(x):
    # outside the domain there is no solution for this date and place
    if not -1.0 <= x <= 1.0:
        return math.nan
    return rtd(math.acos(x))


def arccot(x):
    if x == 0:
        return 90.0
    return rtd(math.atan(1.0 / x))


def arctan2(y, x):
    return rtd(math.atan2(y, x))


def fix(a, b):
    """Reduce ``a`` into ``[0, b)``; NaN and infinities come back as NaN."""
    if not math.isfinite(a):
        return math.nan
    a = a - b * math.floor(a / b)
    if a < 0:
        a += b
    if a >= b:
        a -= b
    return a


def fix_angle(a):
    return fix(a, 360.0)


def fix_hour(h):
    return fix(h, 24.0)


def time_diff(time1, time2):
    return fix_hour(time2 - time1)


def julian_day(y, m, d):
    if m <= 2:
        y -= 1
        m += 12
    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + d + b - 1524.5


def sun_position(jd):
    """Return ``(declination, equation_of_time)`` for a Julian day.

    Declination is in degrees, equation of time in hours. Uses the low
    precision solar coordinates published by the USNO, good to about a
    minute of time between 1950 and 2050.
    """
    d = jd - J2000
    g = fix_angle(357.529 + 0.98560028 * d)
    q = fix_angle(280.459 + 0.98564736 * d)
    L = fix_angle(q + 1.915 * sin(g) + 0.020 * sin(2 * g))
    e = 23.439 - 0.00000036 * d
    ra = arctan2(cos(e) * sin(L), cos(L)) / 15.0
    eqt = q / 15.0 - fix_hour(ra)
    decl = arcsin(sin(e) * sin(L))
    return decl, eqt
