import json
from datetime import date

from praytimes.cli import main, resolve_timezone
from praytimes.config import DEFAULT_CONFIG, load_config, save_config


def _run(config_path, *argv):
    return main(["--config", str(config_path), *argv])


def test_list_methods(tmp_path, capsys):
    assert _run(tmp_path / "config.json", "--list-methods") == 0
    out = capsys.readouterr().out
    assert "MWL: Muslim World League" in out
    assert "Jafari: Shia Ithna-Ashari, Leva Institute, Qum" in out


def test_json_output(tmp_path, capsys):
    code = _run(tmp_path / "config.json", "--lat", "0", "--lng", "0", "--tz", "0",
                "--date", "2024-03-20", "--json")
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["date"] == "2024-03-20"
    assert payload["method"] == "MWL"
    assert len(payload["times"]) == 9
    assert payload["times"]["dhuhr"].startswith("12:")


def test_method_and_format_override(tmp_path, capsys):
    code = _run(tmp_path / "config.json", "--lat", "43", "--lng", "-80", "--tz", "-5",
                "--date", "2024-05-01", "--method", "ISNA", "--format", "12h", "--json")
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["method"] == "ISNA"
    assert payload["times"]["asr"].endswith("pm")


def test_set_offset_persists(tmp_path):
    path = tmp_path / "config.json"
    assert _run(path, "--set-offset", "Fajr", "10") == 0
    assert load_config(str(path))["offsets"]["fajr"] == 10


def test_offsets_shift_output(tmp_path, capsys):
    path = tmp_path / "config.json"
    args = ("--lat", "43", "--lng", "-80", "--tz", "-5", "--date", "2024-05-01", "--json")
    _run(path, *args)
    before = json.loads(capsys.readouterr().out)["times"]
    _run(path, "--set-offset", "dhuhr", "3")
    _run(path, *args)
    after = json.loads(capsys.readouterr().out)["times"]
    assert before["fajr"] == after["fajr"]
    assert before["dhuhr"] != after["dhuhr"]


def test_set_method(tmp_path):
    path = tmp_path / "config.json"
    assert _run(path, "--set-method", "Karachi") == 0
    assert load_config(str(path))["method"] == "Karachi"


def test_unknown_method_is_an_error(tmp_path, capsys):
    assert _run(tmp_path / "config.json", "--set-method", "Atlantis") == 1
    assert "Error: Unknown method: Atlantis" in capsys.readouterr().err


def test_set_location_then_show(tmp_path, capsys):
    path = tmp_path / "config.json"
    assert _run(path, "--set-location", "Home", "--lat", "51.5", "--lng", "-0.12", "--tz", "0") == 0
    assert _run(path, "--date", "2024-05-01") == 0
    out = capsys.readouterr().out
    assert "Home 2024-05-01" in out
    assert "Fajr" in out
    assert "Midnight" in out


def test_set_location_needs_coordinates(tmp_path, capsys):
    assert _run(tmp_path / "config.json", "--set-location", "Home") == 1
    assert "--lat" in capsys.readouterr().err


def test_resolve_timezone_numeric():
    assert resolve_timezone("3", date(2024, 1, 1), False) == (3.0, False)
    assert resolve_timezone(-5, date(2024, 1, 1), True) == (-5.0, True)


def test_load_config_creates_defaults(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = load_config(str(path))
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG
    assert path.exists()


def test_load_config_fills_missing_keys(tmp_path):
    path = tmp_path / "config.json"
    save_config({"method": "Egypt", "offsets": {"isha": 2}}, str(path))
    config = load_config(str(path))
    assert config["method"] == "Egypt"
    assert config["offsets"]["isha"] == 2
    assert config["offsets"]["fajr"] == 0
    assert config["time_format"] == "24h"
