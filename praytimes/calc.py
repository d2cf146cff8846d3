"""Prayer times calculator.

``PrayTimes`` owns a configuration (method, settings, tuning offsets and
display format) and computes the nine daily times from it. An instance is
not safe to reconfigure while another thread computes with it; use one
instance per thread or per configuration instead.
"""
import logging
import math
from dataclasses import dataclass
from datetime import date

from .astro import arccos, arccot, cos, fix_hour, julian_day, sin, sun_position, tan, time_diff
from .formatting import TIME_FORMATS, format_times
from .methods import BASE_SETTINGS, DEFAULT_METHOD, TIME_NAMES, get_defaults, lookup
from .params import Minutes, angle_of, asr_factor, minutes_of, resolve_params, rule_of

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("imsak", "fajr", "dhuhr", "asr", "maghrib", "isha", "midnight", "highLats")

SEED_TIMES = {
    "imsak": 5,
    "fajr": 5,
    "sunrise": 6,
    "dhuhr": 12,
    "asr": 13,
    "sunset": 18,
    "maghrib": 18,
    "isha": 18
}


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float
    elv: float = 0.0

    @classmethod
    def from_value(cls, value):
        if isinstance(value, cls):
            return value
        values = [float(v) for v in value]
        if len(values) not in (2, 3):
            raise ValueError(f"Expected [lat, lng] or [lat, lng, elv], got {value!r}")
        return cls(*values)


@dataclass(frozen=True)
class TimesRequest:
    day: date
    coords: Coordinates
    timezone: float = 0.0
    dst: bool = False
    time_format: str = None

    def __post_init__(self):
        object.__setattr__(self, "coords", Coordinates.from_value(self.coords))
        object.__setattr__(self, "timezone", float(self.timezone))
        object.__setattr__(self, "dst", bool(self.dst))
        if self.time_format and self.time_format not in TIME_FORMATS:
            raise ValueError(f"Unknown time format: {self.time_format}")

    @property
    def tz_hours(self):
        return self.timezone + 1 if self.dst else self.timezone


class SolarSolver:
    def __init__(self, coords, jdate):
        self.lat = coords.lat
        self.lng = coords.lng
        self.elv = coords.elv
        self.jdate = jdate

    @classmethod
    def for_day(cls, day, coords):
        return cls(coords, julian_day(day.year, day.month, day.day) - coords.lng / (15 * 24))

    def mid_day(self, time):
        _, eqt = sun_position(self.jdate + time)
        return fix_hour(12 - eqt)

    def sun_angle_time(self, angle, time, direction="cw"):
        decl, _ = sun_position(self.jdate + time)
        noon = self.mid_day(time)
        numerator = -sin(angle) - sin(decl) * sin(self.lat)
        denominator = cos(decl) * cos(self.lat)
        t = arccos(numerator / denominator) / 15.0
        return noon - t if direction == "ccw" else noon + t

    def asr_time(self, factor, time):
        decl, _ = sun_position(self.jdate + time)
        angle = -arccot(factor + tan(abs(self.lat - decl)))
        return self.sun_angle_time(angle, time, "cw")

    def rise_set_angle(self):
        # apparent horizon dips with elevation
        return 0.833 + 0.0347 * math.sqrt(max(self.elv, 0.0))


class PrayTimes:
    def __init__(self, method=DEFAULT_METHOD, time_format="24h", iterations=1):
        self.method = None
        self.settings = resolve_params(BASE_SETTINGS)
        self.offsets = [0] * len(TIME_NAMES)
        self.time_format = "24h"
        self.iterations = int(iterations)
        self.set_time_format(time_format)
        if not self.set_method(method):
            raise ValueError(f"Unknown method: {method}")

    # configuration

    def set_method(self, name):
        """Switch to a catalog method, discarding earlier adjustments.

        Unlike ``adjust``, the method parameters are laid over the base
        settings (imsak, dhuhr, asr, highLats, midnight), so keys the method
        does not define keep their base values. Returns False and leaves the
        configuration alone when ``name`` is not in the catalog.
        """
        params = lookup(name)
        if params is None:
            logger.warning("Unknown calculation method %r, keeping %r", name, self.method)
            return False
        settings = dict(BASE_SETTINGS)
        settings.update(params)
        self.settings = resolve_params(settings)
        self.method = name
        logger.debug("Method set to %s: %s", name, self.describe_settings())
        return True

    def adjust(self, params):
        """Replace every setting with ``params``.

        Keys left out fall back to angle 0 (twilight events), ``0 min``
        (dhuhr), ``Standard`` (asr, midnight) and ``None`` (highLats).
        Use ``update`` to change a few keys and keep the rest.
        """
        settings = resolve_params(params)
        missing = [key for key in REQUIRED_KEYS if key not in settings]
        if missing:
            logger.warning("Settings replaced without %s, using fallbacks", ", ".join(missing))
        self.settings = settings

    def update(self, params):
        settings = dict(self.settings)
        settings.update(resolve_params(params))
        self.settings = settings

    def tune(self, offsets):
        if hasattr(offsets, "items"):
            unknown = set(offsets) - set(TIME_NAMES)
            if unknown:
                raise ValueError(f"Unknown time names: {', '.join(sorted(unknown))}")
            offsets = [offsets.get(name, 0) for name in TIME_NAMES]
        offsets = [int(minutes) for minutes in offsets]
        if len(offsets) != len(TIME_NAMES):
            raise ValueError(f"Expected {len(TIME_NAMES)} offsets, got {len(offsets)}")
        self.offsets = offsets

    def set_time_format(self, time_format):
        if time_format not in TIME_FORMATS:
            raise ValueError(f"Unknown time format: {time_format}")
        self.time_format = time_format

    def get_method(self):
        return self.method

    def get_settings(self):
        return dict(self.settings)

    def get_offsets(self):
        return list(self.offsets)

    def get_defaults(self):
        return get_defaults()

    def describe_settings(self):
        return ", ".join(f"{key}={value}" for key, value in self.settings.items())

    # computation

    def get_times(self, day, coords, timezone=0.0, dst=False, time_format=None):
        """Return the nine times formatted as strings.

        ``time_format`` applies to this call only; use ``set_time_format`` to
        change the format later calls get by default.
        """
        request = TimesRequest(day, coords, timezone, dst, time_format)
        times = self.compute(request)
        return format_times(times, request.time_format or self.time_format)

    def compute(self, request):
        solver = SolarSolver.for_day(request.day, request.coords)
        times = dict(SEED_TIMES)
        for _ in range(self.iterations):
            times = self._compute_prayer_times(solver, times)
        times = self._adjust_times(times, request.tz_hours, request.coords.lng)
        times["midnight"] = self._compute_midnight(times)
        times = self._tune_times(times)
        times = {name: fix_hour(times[name]) for name in TIME_NAMES}

        undefined = [name for name, value in times.items() if math.isnan(value)]
        if undefined:
            logger.debug("No solution for %s on %s at %s", ", ".join(undefined), request.day, request.coords)
        return times

    def _param(self, key):
        return self.settings.get(key)

    def _compute_prayer_times(self, solver, times):
        times = {k: v / 24 for k, v in times.items()}
        rise_set = solver.rise_set_angle()
        return {
            "imsak": solver.sun_angle_time(angle_of(self._param("imsak")), times["imsak"], "ccw"),
            "fajr": solver.sun_angle_time(angle_of(self._param("fajr")), times["fajr"], "ccw"),
            "sunrise": solver.sun_angle_time(rise_set, times["sunrise"], "ccw"),
            "dhuhr": solver.mid_day(times["dhuhr"]),
            "asr": solver.asr_time(asr_factor(self._param("asr")), times["asr"]),
            "sunset": solver.sun_angle_time(rise_set, times["sunset"]),
            "maghrib": solver.sun_angle_time(angle_of(self._param("maghrib")), times["maghrib"]),
            "isha": solver.sun_angle_time(angle_of(self._param("isha")), times["isha"])
        }

    def _adjust_times(self, times, tz_hours, lng):
        for key in list(times.keys()):
            times[key] = times[key] + tz_hours - lng / 15.0

        if self._high_lats_rule() != "None":
            times = self._adjust_high_lats(times)

        imsak = self._param("imsak")
        if isinstance(imsak, Minutes):
            times["imsak"] = times["fajr"] - minutes_of(imsak) / 60.0

        maghrib = self._param("maghrib")
        if isinstance(maghrib, Minutes):
            times["maghrib"] = times["sunset"] + minutes_of(maghrib) / 60.0

        isha = self._param("isha")
        if isinstance(isha, Minutes):
            times["isha"] = times["maghrib"] + minutes_of(isha) / 60.0

        times["dhuhr"] += minutes_of(self._param("dhuhr")) / 60.0
        return times

    def _high_lats_rule(self):
        return rule_of(self._param("highLats"), "None")

    def _adjust_high_lats(self, times):
        night = time_diff(times["sunset"], times["sunrise"])
        times["imsak"] = self._adjust_hl_time(times["imsak"], times["sunrise"], angle_of(self._param("imsak")), night, "ccw")
        times["fajr"] = self._adjust_hl_time(times["fajr"], times["sunrise"], angle_of(self._param("fajr")), night, "ccw")
        times["isha"] = self._adjust_hl_time(times["isha"], times["sunset"], angle_of(self._param("isha")), night)
        times["maghrib"] = self._adjust_hl_time(times["maghrib"], times["sunset"], angle_of(self._param("maghrib")), night)
        return times

    def _adjust_hl_time(self, time, base, angle, night, direction="cw"):
        portion = self.night_portion(angle, night)
        diff = time_diff(time, base) if direction == "ccw" else time_diff(base, time)
        if math.isnan(time) or diff > portion:
            time = base - portion if direction == "ccw" else base + portion
        return time

    def night_portion(self, angle, night):
        rule = self._high_lats_rule()
        portion = 1 / 2
        if rule == "AngleBased":
            portion = angle / 60
        elif rule == "OneSeventh":
            portion = 1 / 7
        return portion * night

    def _compute_midnight(self, times):
        if rule_of(self._param("midnight"), "Standard") == "Jafari":
            return times["sunset"] + time_diff(times["sunset"], times["fajr"]) / 2.0
        return times["sunset"] + time_diff(times["sunset"], times["sunrise"]) / 2.0

    def _tune_times(self, times):
        for name, minutes in zip(TIME_NAMES, self.offsets):
            times[name] += minutes / 60.0
        return times