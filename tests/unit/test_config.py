"""Tests for settings.json handling, rules directory resolution and pay periods."""

import json

import pytest

from tradecalc.sdk.schemas import PayFrequency, get_pay_periods
from tradecalc.sdk.config import (
    ConfigError,
    get_config_dir,
    get_packaged_rules_dir,
    get_rules_dir,
    get_setting,
    load_settings,
    set_setting,
)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up an isolated config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TRADE_CALC_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir}


class TestConfigDir:
    """Config directory resolution."""

    def test_env_var_wins(self, isolated_env):
        assert get_config_dir() == isolated_env["config_dir"]

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TRADE_CALC_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / "trade-calc"


class TestSettings:
    """Reading and writing settings.json."""

    def test_missing_file_is_empty(self, isolated_env):
        assert load_settings() == {}
        assert get_setting("province", "AB") == "AB"

    def test_set_and_get(self, isolated_env):
        path = set_setting("province", "BC")

        assert path == isolated_env["config_dir"] / "settings.json"
        assert get_setting("province") == "BC"

    def test_set_none_removes_key(self, isolated_env):
        set_setting("province", "BC")
        set_setting("province", None)

        assert "province" not in load_settings()

    def test_creates_config_dir(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "new" / "config"
        monkeypatch.setenv("TRADE_CALC_CONFIG_PATH", str(config_dir))

        set_setting("pay_frequency", "biweekly")

        assert json.loads((config_dir / "settings.json").read_text()) == {"pay_frequency": "biweekly"}

    def test_invalid_json_raises(self, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text("{not json")

        with pytest.raises(ConfigError):
            load_settings()

    def test_non_object_raises(self, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text("[1, 2]")

        with pytest.raises(ConfigError):
            load_settings()


class TestRulesDir:
    """Rule table directory precedence."""

    def test_packaged_default(self, isolated_env):
        rules_dir = get_rules_dir()

        assert rules_dir == get_packaged_rules_dir()
        assert (rules_dir / "rigging.yaml").exists()
        assert (rules_dir / "tax" / "2025.yaml").exists()

    def test_setting_overrides_packaged(self, isolated_env, tmp_path):
        set_setting("rules_dir", str(tmp_path / "rules"))
        assert get_rules_dir() == tmp_path / "rules"

    def test_argument_overrides_setting(self, isolated_env, tmp_path):
        set_setting("rules_dir", str(tmp_path / "rules"))
        assert get_rules_dir(tmp_path / "other") == tmp_path / "other"


class TestPayPeriods:
    """Pay frequency lookups."""

    def test_known_frequencies(self):
        assert get_pay_periods("weekly") == 52
        assert get_pay_periods("BIWEEKLY") == 26
        assert get_pay_periods(PayFrequency.SEMIMONTHLY) == 24
        assert get_pay_periods("monthly") == 12

    def test_unknown_frequency(self):
        with pytest.raises(ValueError):
            get_pay_periods("fortnightly")

    def test_label(self):
        assert PayFrequency.SEMIMONTHLY.label == "Semi-monthly (24)"
