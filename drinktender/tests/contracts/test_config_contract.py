"""
Contract tests for configuration loading.

Environment variables win over the .env file; invalid values fail at
start-up with the variable named in the error.
"""

from pathlib import Path

import pytest

from drinktender.config import DEFAULT_STATE_PATH, DrinkTenderConfig, load_config


class TestDefaults:

    def test_defaults_without_environment(self):
        config = load_config()
        assert config.state_path == DEFAULT_STATE_PATH
        assert config.notifier == "timer"
        assert config.permission_granted is True
        assert config.main_refresh_seconds == 1
        assert config.widget_refresh_minutes == 1
        assert config.complication_refresh_minutes == 15
        assert config.log_level == "INFO"
        assert config.log_file is None


class TestEnvironment:

    def test_values_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DRINKTENDER_STATE_PATH", str(tmp_path / "state.json"))
        monkeypatch.setenv("DRINKTENDER_NOTIFIER", "LOG")
        monkeypatch.setenv("DRINKTENDER_PERMISSION", "off")
        monkeypatch.setenv("DRINKTENDER_WIDGET_REFRESH_MIN", "5")
        monkeypatch.setenv("DRINKTENDER_COMPLICATION_REFRESH_MIN", "30")
        monkeypatch.setenv("DRINKTENDER_LOG_FILE", str(tmp_path / "drinktender.log"))

        config = load_config()
        assert config.state_path == tmp_path / "state.json"
        assert config.notifier == "log"
        assert config.permission_granted is False
        assert config.widget_refresh_minutes == 5
        assert config.complication_refresh_minutes == 30
        assert config.log_file == tmp_path / "drinktender.log"

    def test_env_file_is_loaded(self, monkeypatch, tmp_path):
        env_file = tmp_path / "drinktender.env"
        env_file.write_text("DRINKTENDER_NOTIFIER=null\nDRINKTENDER_COMPLICATION_REFRESH_MIN=20\n")
        monkeypatch.setenv("DRINKTENDER_ENV_FILE", str(env_file))

        config = load_config()
        assert config.notifier == "null"
        assert config.complication_refresh_minutes == 20

    def test_environment_overrides_env_file(self, monkeypatch, tmp_path):
        env_file = tmp_path / "drinktender.env"
        env_file.write_text("DRINKTENDER_NOTIFIER=null\n")
        monkeypatch.setenv("DRINKTENDER_ENV_FILE", str(env_file))
        monkeypatch.setenv("DRINKTENDER_NOTIFIER", "log")

        assert load_config().notifier == "log"


class TestValidation:

    @pytest.mark.parametrize("name,value", [
        ("DRINKTENDER_WIDGET_REFRESH_MIN", "soon"),
        ("DRINKTENDER_MAIN_REFRESH_SEC", "1.5"),
        ("DRINKTENDER_PERMISSION", "maybe"),
        ("DRINKTENDER_NOTIFIER", "pager"),
        ("DRINKTENDER_LOG_LEVEL", "LOUD"),
    ])
    def test_invalid_value_raises(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            load_config()

    def test_error_names_the_variable(self, monkeypatch):
        monkeypatch.setenv("DRINKTENDER_COMPLICATION_REFRESH_MIN", "x")
        with pytest.raises(ValueError, match="DRINKTENDER_COMPLICATION_REFRESH_MIN"):
            load_config()

    @pytest.mark.parametrize("field", [
        "main_refresh_seconds", "widget_refresh_minutes", "complication_refresh_minutes",
    ])
    def test_non_positive_cadence_rejected(self, field):
        config = DrinkTenderConfig(**{field: 0})
        with pytest.raises(ValueError):
            config.validate()

    def test_state_path_is_a_path(self, monkeypatch):
        monkeypatch.setenv("DRINKTENDER_STATE_PATH", "~/drinks.json")
        config = load_config()
        assert isinstance(config.state_path, Path)
        assert "~" not in str(config.state_path)
