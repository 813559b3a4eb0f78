import json

from pund_analysis.config import PundThresholds
from pund_analysis import preferences
from pund_analysis.preferences import default_settings_path, load_thresholds, save_thresholds


def test_missing_file_gives_defaults(tmp_path):
    assert load_thresholds(tmp_path / "nope.json") == PundThresholds()


def test_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    custom = PundThresholds(min_pulse_length=100, derivative_threshold_factor=3.5, require_complete_group=True)

    save_thresholds(custom, path)

    assert load_thresholds(path) == custom


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"min_pulse_length": 50, "colour": "blue"}))

    thresholds = load_thresholds(path)

    assert thresholds.min_pulse_length == 50
    assert thresholds.median_window == PundThresholds().median_window


def test_invalid_value_keeps_default(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"min_pulse_length": "long", "expansion_window": 3}))

    thresholds = load_thresholds(path)

    assert thresholds.min_pulse_length == PundThresholds().min_pulse_length
    assert thresholds.expansion_window == 3


def test_int_values_are_cast_for_float_fields(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"amplitude_threshold_factor": 4}))

    thresholds = load_thresholds(path)

    assert isinstance(thresholds.amplitude_threshold_factor, float)
    assert thresholds.amplitude_threshold_factor == 4.0


def test_corrupt_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json")

    assert load_thresholds(path) == PundThresholds()
    assert "using defaults" in caplog.text


def test_mistyped_values_keep_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "require_complete_group": "false",
        "min_pulse_length": 20.9,
        "median_window": True,
        "derivative_threshold_factor": False,
    }))

    thresholds = load_thresholds(path)

    assert thresholds == PundThresholds()
    assert thresholds.require_complete_group is False
    assert caplog.text.count("keeping default") == 4


def test_integral_float_fills_int_field(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"min_pulse_length": 100.0, "require_complete_group": True}))

    thresholds = load_thresholds(path)

    assert thresholds.min_pulse_length == 100
    assert isinstance(thresholds.min_pulse_length, int)
    assert thresholds.require_complete_group is True


def test_default_path_does_not_follow_working_directory(tmp_path, monkeypatch):
    before = default_settings_path()
    monkeypatch.chdir(tmp_path)

    assert default_settings_path() == before
    assert before.name == "pund_settings.json"


def test_default_path_is_resolved_at_call_time(tmp_path, monkeypatch):
    path = tmp_path / "pund_settings.json"
    monkeypatch.setattr(preferences, "default_settings_path", lambda: path)

    save_thresholds(PundThresholds(expansion_window=7))

    assert path.exists()
    assert load_thresholds().expansion_window == 7
