from praytimes.methods import METHODS, TIME_NAMES, get_defaults, list_methods, lookup


def test_every_method_has_defaults():
    for method in METHODS.values():
        assert "maghrib" in method["params"]
        assert "midnight" in method["params"]


def test_defaults_do_not_override_method_values():
    assert METHODS["Tehran"]["params"]["maghrib"] == 4.5
    assert METHODS["Tehran"]["params"]["midnight"] == "Jafari"
    assert METHODS["Jafari"]["params"]["maghrib"] == 4
    assert METHODS["Makkah"]["params"]["maghrib"] == "0 min"
    assert METHODS["MWL"]["params"]["midnight"] == "Standard"


def test_lookup_unknown_is_none():
    assert lookup("Nope") is None


def test_lookup_returns_copy():
    params = lookup("MWL")
    params["fajr"] = 1
    assert lookup("MWL")["fajr"] == 18
    defaults = get_defaults()
    defaults["MWL"]["params"]["fajr"] = 1
    assert METHODS["MWL"]["params"]["fajr"] == 18


def test_list_methods():
    assert ("MWL", "Muslim World League") in list_methods()
    assert len(list_methods()) == 7


def test_time_names_order():
    assert TIME_NAMES == ["imsak", "fajr", "sunrise", "dhuhr", "asr", "sunset", "maghrib", "isha", "midnight"]
