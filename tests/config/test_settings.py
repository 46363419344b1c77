"""Tests for Settings loading, saving and environment overrides."""

import json

import pytest

from pathcomp.config import Settings, SettingsError, load_settings, save_settings
from pathcomp.storage import RetryPolicy


def test_defaults():
    settings = Settings()

    assert settings.autoreset
    assert not settings.autosave
    assert settings.trigger_sizes == ((1.0, 1.0, 1.0), (1.0, 1.0, 1.0))
    assert settings.retry_policy() == RetryPolicy()


def test_missing_file_yields_defaults(tmp_path):
    path = str(tmp_path / "absent.json")
    settings = load_settings(path)

    assert settings.config_file == path
    assert settings.autoreset


def test_save_then_load_round_trip(tmp_path):
    path = str(tmp_path / "pathcomp.json")
    save_settings(Settings(autosave=True, trigger_sizes=((2, 1, 2), (3, 3, 3))), path)

    loaded = load_settings(path)

    assert loaded.autosave
    assert loaded.trigger_sizes == ((2.0, 1.0, 2.0), (3.0, 3.0, 3.0))
    assert loaded.config_file == path


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "pathcomp.json"
    path.write_text(json.dumps({"direct_mode": True}), encoding="utf-8")

    settings = load_settings(str(path))

    assert settings.direct_mode
    assert settings.autoreset


def test_environment_override(monkeypatch):
    monkeypatch.setenv("PATHCOMP_AUTOSAVE", "true")
    monkeypatch.setenv("PATHCOMP_WRITE_ATTEMPTS", "5")

    settings = Settings()

    assert settings.autosave
    assert settings.retry_policy().max_attempts == 5


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "pathcomp.json"
    path.write_text("[1, 2", encoding="utf-8")

    with pytest.raises(SettingsError, match="Failed to read"):
        load_settings(str(path))


def test_non_object_raises(tmp_path):
    path = tmp_path / "pathcomp.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(SettingsError, match="JSON object"):
        load_settings(str(path))


def test_invalid_value_raises(tmp_path):
    path = tmp_path / "pathcomp.json"
    path.write_text(json.dumps({"write_attempts": 0}), encoding="utf-8")

    with pytest.raises(SettingsError, match="Invalid config"):
        load_settings(str(path))


def test_unwritable_target_raises(tmp_path):
    with pytest.raises(SettingsError, match="Failed to write"):
        save_settings(Settings(), str(tmp_path / "missing-dir" / "pathcomp.json"))
