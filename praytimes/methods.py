import copy

METHODS = {
    "MWL": {"name": "Muslim World League", "params": {"fajr": 18, "isha": 17}},
    "ISNA": {"name": "Islamic Society of North America (ISNA)", "params": {"fajr": 15, "isha": 15}},
    "Egypt": {"name": "Egyptian General Authority of Survey", "params": {"fajr": 19.5, "isha": 17.5}},
    # fajr was 19 degrees before 1430 AH
    "Makkah": {"name": "Umm Al-Qura University, Makkah", "params": {"fajr": 18.5, "isha": "90 min"}},
    "Karachi": {"name": "University of Islamic Sciences, Karachi", "params": {"fajr": 18, "isha": 18}},
    # isha is not explicitly specified in this method
    "Tehran": {
        "name": "Institute of Geophysics, University of Tehran",
        "params": {"fajr": 17.7, "isha": 14, "maghrib": 4.5, "midnight": "Jafari"}
    },
    "Jafari": {
        "name": "Shia Ithna-Ashari, Leva Institute, Qum",
        "params": {"fajr": 16, "isha": 14, "maghrib": 4, "midnight": "Jafari"}
    }
}

DEFAULT_PARAMS = {
    "maghrib": "0 min",
    "midnight": "Standard"
}

# settings every calculator starts from before a method is layered on top
BASE_SETTINGS = {
    "imsak": "10 min",
    "dhuhr": "0 min",
    "asr": "Standard",
    "highLats": "NightMiddle",
    "midnight": "Standard"
}

DEFAULT_METHOD = "MWL"

TIME_NAMES = ["imsak", "fajr", "sunrise", "dhuhr", "asr", "sunset", "maghrib", "isha", "midnight"]


def _apply_defaults(methods, defaults):
    for method in methods.values():
        for key, value in defaults.items():
            method["params"].setdefault(key, value)
    return methods


_apply_defaults(METHODS, DEFAULT_PARAMS)


def lookup(name):
    method = METHODS.get(name)
    if method is None:
        return None
    return dict(method["params"])


def list_methods():
    return [(key, method["name"]) for key, method in METHODS.items()]


def get_defaults():
    return copy.deepcopy(METHODS)
