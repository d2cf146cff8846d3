import logging
import math
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[-+]?\d+(?:\.\d+)?")

RULES = {
    "midnight": ("Standard", "Jafari"),
    "asr": ("Standard", "Hanafi"),
    "highLats": ("None", "NightMiddle", "OneSeventh", "AngleBased")
}

ASR_FACTORS = {"Standard": 1, "Hanafi": 2}

# used when a rule key holds a name or number it does not know
RULE_FALLBACKS = {
    "midnight": "Standard",
    "asr": "Standard",
    "highLats": "NightMiddle"
}

# plain numbers for these keys are minutes, not angles
MINUTE_KEYS = ("dhuhr",)


@dataclass(frozen=True)
class Angle:
    """Degrees below the horizon. For ``asr`` it holds a raw shadow factor."""
    degrees: float

    def __str__(self):
        return f"{self.degrees:g}"


@dataclass(frozen=True)
class Minutes:
    """Offset in minutes from the event a parameter is anchored to."""
    minutes: float

    def __str__(self):
        return f"{self.minutes:g} min"


@dataclass(frozen=True)
class Rule:
    name: str

    def __str__(self):
        return self.name


def parse_number(text):
    match = _NUMBER_RE.search(text)
    if not match:
        return None
    return float(match.group())


def parse_value(key, raw):
    """Resolve a raw setting (number, ``"N min"`` string or rule name)."""
    if isinstance(raw, (Angle, Minutes, Rule)):
        return raw
    if isinstance(raw, bool):
        raise ValueError(f"Invalid value for {key}: {raw!r}")
    if isinstance(raw, (int, float)):
        if key in RULES and key != "asr":
            return _fallback_rule(key, raw)
        if key in MINUTE_KEYS:
            return Minutes(float(raw))
        return Angle(float(raw))
    if not isinstance(raw, str):
        raise ValueError(f"Invalid value for {key}: {raw!r}")

    text = raw.strip()
    if "min" in text:
        minutes = parse_number(text)
        if minutes is None:
            logger.warning("No number in %s=%r, using 0 minutes", key, raw)
            minutes = 0.0
        return Minutes(minutes)
    if key in RULES:
        if text in RULES[key]:
            return Rule(text)
        if key == "asr":
            factor = parse_number(text)
            if factor is not None:
                return Angle(factor)
        return _fallback_rule(key, raw)
    number = parse_number(text)
    if number is None:
        logger.warning("No number in %s=%r, using 0", key, raw)
        number = 0.0
    if key in MINUTE_KEYS:
        return Minutes(number)
    return Angle(number)


def _fallback_rule(key, raw):
    fallback = RULE_FALLBACKS[key]
    logger.warning("Unknown %s rule %r (expected one of %s), using %s",
                   key, raw, ", ".join(RULES[key]), fallback)
    return Rule(fallback)


def resolve_params(params):
    return {key: parse_value(key, value) for key, value in params.items()}


def angle_of(value):
    # minute offsets are solved at the horizon and replaced afterwards
    if isinstance(value, Angle):
        return value.degrees
    return 0.0


def minutes_of(value):
    if isinstance(value, Minutes):
        return value.minutes
    return 0.0


def rule_of(value, default):
    if isinstance(value, Rule):
        return value.name
    return default


def asr_factor(value):
    if isinstance(value, Rule):
        return ASR_FACTORS[value.name]
    if isinstance(value, Angle) and not math.isnan(value.degrees):
        return value.degrees
    return ASR_FACTORS["Standard"]
