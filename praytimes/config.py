import copy
import json
import os

from .methods import DEFAULT_METHOD, TIME_NAMES

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "praytimes")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG = {
    "location": {
        "label": "Makkah",
        "lat": 21.4225,
        "lng": 39.8262,
        "elv": 0,
        "tz": "Asia/Riyadh"
    },
    "method": DEFAULT_METHOD,
    "settings": {},
    "offsets": {name: 0 for name in TIME_NAMES},
    "time_format": "24h",
    "iterations": 1
}


# a saved location replaces the default one as a whole
MERGED_KEYS = ("offsets",)


def _with_defaults(config):
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in config.items():
        if key in MERGED_KEYS and isinstance(value, dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(path=CONFIG_PATH):
    if not os.path.exists(path):
        config = copy.deepcopy(DEFAULT_CONFIG)
        save_config(config, path)
        return config
    with open(path, "r", encoding="utf-8") as f:
        return _with_defaults(json.load(f))


def save_config(config, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
