import argparse
import json
import logging
import sys
from datetime import date

from tabulate import tabulate

from .calc import Coordinates, PrayTimes
from .config import CONFIG_PATH, load_config, save_config
from .formatting import TIME_FORMATS
from .logger import setup_logging
from .methods import DEFAULT_METHOD, METHODS, TIME_NAMES, list_methods
from .tz import get_timezone, is_dst, standard_offset

logger = logging.getLogger(__name__)


def build_calculator(config, method=None, time_format=None):
    pray = PrayTimes(
        method or config.get("method", DEFAULT_METHOD),
        time_format or config.get("time_format", "24h"),
        config.get("iterations", 1),
    )
    settings = config.get("settings") or {}
    if settings:
        pray.update(settings)
    pray.tune(config.get("offsets") or {})
    return pray


def resolve_location(config, args):
    loc = dict(config.get("location") or {})
    if args.lat is not None and args.lng is not None:
        loc = {
            "lat": args.lat,
            "lng": args.lng,
            "elv": args.elv or 0,
            "tz": args.tz,
            "label": f"{args.lat}, {args.lng}"
        }
    else:
        if args.elv is not None:
            loc["elv"] = args.elv
        if args.tz:
            loc["tz"] = args.tz
    if loc.get("lat") is None or loc.get("lng") is None:
        raise ValueError("No location configured, pass --lat and --lng")
    return loc


def resolve_timezone(tz, day, dst):
    """Return ``(hours, dst)`` for a numeric offset or an IANA zone name."""
    if tz in (None, "", "local"):
        return standard_offset(day.year), is_dst(day)
    try:
        return float(tz), dst
    except ValueError:
        pass
    tzinfo = get_timezone(tz)
    return standard_offset(day.year, tzinfo), is_dst(day, tzinfo)


def render_table(times, title):
    rows = [(name.capitalize(), times[name]) for name in TIME_NAMES]
    return title + "\n" + tabulate(rows, headers=["Time", "Value"], tablefmt="simple")


def show_times(config, args):
    day = args.date or date.today()
    loc = resolve_location(config, args)
    coords = Coordinates(lat=float(loc["lat"]), lng=float(loc["lng"]), elv=float(loc.get("elv") or 0))
    timezone, dst = resolve_timezone(loc.get("tz"), day, args.dst)

    pray = build_calculator(config, args.method, args.format)
    times = pray.get_times(day, coords, timezone, dst)
    logger.debug("Times for %s at %s (tz %+g, dst %s): %s", day, coords, timezone, dst, times)

    method_key = pray.get_method()
    label = loc.get("label") or f"{coords.lat}, {coords.lng}"
    if args.json:
        payload = {
            "date": day.isoformat(),
            "location": label,
            "method": method_key,
            "times": times
        }
        print(json.dumps(payload, ensure_ascii=True))
    else:
        asr = pray.get_settings().get("asr")
        title = f"{label} {day.isoformat()} ({METHODS[method_key]['name']}, Asr: {asr})"
        print(render_table(times, title))
    return 0


def handle_cli(args):
    config_path = args.config or CONFIG_PATH
    config = load_config(config_path)

    if args.list_methods:
        for key, name in list_methods():
            print(f"{key}: {name}")
        return 0

    if args.set_method:
        if args.set_method not in METHODS:
            raise ValueError(f"Unknown method: {args.set_method}")
        config["method"] = args.set_method
        save_config(config, config_path)
        return 0

    if args.set_offset:
        prayer, minutes = args.set_offset
        prayer_key = prayer.lower()
        if prayer_key not in TIME_NAMES:
            raise ValueError(f"Unknown prayer for offset: {prayer}")
        config.setdefault("offsets", {})[prayer_key] = int(minutes)
        save_config(config, config_path)
        return 0

    if args.set_format:
        config["time_format"] = args.set_format
        save_config(config, config_path)
        return 0

    if args.set_location:
        if args.lat is None or args.lng is None:
            raise ValueError("--set-location needs --lat and --lng")
        config["location"] = {
            "label": args.set_location,
            "lat": args.lat,
            "lng": args.lng,
            "elv": args.elv or 0,
            "tz": args.tz
        }
        save_config(config, config_path)
        return 0

    return show_times(config, args)


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Islamic prayer times calculator")
    parser.add_argument("--date", type=date.fromisoformat, help="Date as YYYY-MM-DD (default today)")
    parser.add_argument("--lat", type=float, help="Latitude in degrees")
    parser.add_argument("--lng", type=float, help="Longitude in degrees")
    parser.add_argument("--elv", type=float, help="Elevation in metres")
    parser.add_argument("--tz", help="UTC offset in hours or IANA time zone (default local)")
    parser.add_argument("--dst", action="store_true", help="Add one hour of daylight saving to a numeric --tz")
    parser.add_argument("--method", help="Calculation method for this run")
    parser.add_argument("--format", choices=TIME_FORMATS, help="Time format for this run")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--list-methods", action="store_true", help="List calculation methods")
    parser.add_argument("--set-method", help="Set calculation method")
    parser.add_argument("--set-offset", nargs=2, metavar=("PRAYER", "MIN"), help="Set prayer offset in minutes")
    parser.add_argument("--set-format", choices=TIME_FORMATS, help="Set time format")
    parser.add_argument("--set-location", metavar="LABEL", help="Save --lat/--lng/--elv/--tz as the location")
    parser.add_argument("--config", help=f"Config file (default {CONFIG_PATH})")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        return handle_cli(args)
    except Exception as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
