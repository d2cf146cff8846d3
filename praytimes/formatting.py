import math

from .astro import fix_hour

TIME_FORMATS = ("24h", "12h", "12hNS", "Float")
TIME_SUFFIXES = ["am", "pm"]
INVALID_TIME = "-----"


def format_time(time, time_format="24h", suffixes=None):
    if math.isnan(time):
        return INVALID_TIME
    if time_format == "Float":
        return str(time)

    suffixes = suffixes or TIME_SUFFIXES
    time = fix_hour(time + 0.5 / 60)  # add 0.5 minutes to round
    hours = math.floor(time)
    minutes = math.floor((time - hours) * 60)

    if time_format == "24h":
        return f"{hours:02d}:{minutes:02d}"
    suffix = ""
    if time_format == "12h":
        suffix = suffixes[0] if hours < 12 else suffixes[1]
    return f"{(hours + 12 - 1) % 12 + 1:02d}:{minutes:02d}{suffix}"


def format_times(times, time_format="24h", suffixes=None):
    return {name: format_time(value, time_format, suffixes) for name, value in times.items()}
