"""Tests for the trade-calc CLI commands."""

import json

import pytest
from click.testing import CliRunner

from tradecalc.cli.__main__ import cli
from tradecalc.sdk.taxes import round_cents


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up an isolated config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TRADE_CALC_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir}


def run(*args):
    return CliRunner().invoke(cli, list(args))


def strict_json(text):
    """Parse JSON, rejecting NaN and Infinity literals."""
    def reject(constant):
        raise ValueError(f"non-standard JSON constant: {constant}")

    return json.loads(text, parse_constant=reject)


class TestPayrollCommand:
    """trade-calc payroll"""

    def test_json_output(self, isolated_env):
        result = run("payroll", "--rate", "60", "--st", "40", "--pay-date", "2025-07-15", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["result"]["gross"]["wage"] == 2400.0
        assert data["inputs"]["province"] == "AB"
        assert data["inputs"]["frequency"] == "weekly"
        assert data["validation"]["is_valid"] is True
        assert "projection" not in data

    def test_table_output(self, isolated_env):
        result = run("payroll", "--rate", "60", "--st", "40", "--pay-date", "2025-07-15")

        assert result.exit_code == 0, result.output
        assert "NET PAY" in result.output

    def test_preset_with_override(self, isolated_env):
        result = run("payroll", "--preset", "shutdown", "--rate", "70", "--pay-date", "2025-07-15",
                     "--format", "json")

        data = json.loads(result.output)
        assert data["inputs"]["rate"] == 70
        assert data["inputs"]["overtime_half"] == 16
        assert data["inputs"]["days"] == 7

    def test_projection(self, isolated_env):
        result = run("payroll", "--rate", "60", "--st", "40", "--pay-date", "2025-07-15",
                     "--periods-remaining", "10", "--format", "json")

        data = json.loads(result.output)
        assert data["projection"]["periods_remaining"] == 10

    def test_validation_errors_reported_not_fatal(self, isolated_env):
        result = run("payroll", "--st", "40", "--pay-date", "2025-07-15", "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["validation"]["errors"] == ["Base rate must be greater than 0"]

    def test_defaults_from_settings(self, isolated_env):
        run("settings", "set", "pay_frequency", "biweekly")
        result = run("payroll", "--rate", "60", "--st", "80", "--pay-date", "2025-07-15", "--format", "json")

        assert json.loads(result.output)["inputs"]["frequency"] == "biweekly"

    def test_ytd_paid_amounts_carry_into_projection(self, isolated_env):
        result = run("payroll", "--rate", "60", "--st", "40", "--pay-date", "2025-07-15",
                     "--ytd-cpp1", "1000", "--ytd-cpp2", "5", "--ytd-ei", "400",
                     "--periods-remaining", "10", "--format", "json")

        assert result.exit_code == 0, result.output
        data = strict_json(result.output)
        deductions = data["result"]["deductions"]
        projection = data["projection"]
        assert projection["projected_cpp1"] == round_cents(1000 + deductions["cpp1"] * 10)
        assert projection["projected_cpp2"] == round_cents(5 + deductions["cpp2"] * 10)
        assert projection["projected_ei"] == round_cents(400 + deductions["ei"] * 10)

    def test_malformed_settings(self, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text("{not json")
        result = run("payroll", "--rate", "60", "--st", "40", "--format", "json")

        assert result.exit_code == 1
        assert "Could not parse" in result.output


class TestRiggingCommand:
    """trade-calc rigging"""

    def test_default_lift_passes(self, isolated_env):
        result = run("rigging", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["result"]["safety_check"] is True
        assert data["sling_efficiency"]["hitch_efficiency"] == 1.0

    def test_failed_check_exits_nonzero(self, isolated_env):
        result = run("rigging", "--wll", "1000", "--format", "json")

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["result"]["safety"]["warnings"][0].startswith("Insufficient sling capacity")

    def test_table_output(self, isolated_env):
        result = run("rigging", "--hitch", "basket")

        assert result.exit_code == 0, result.output
        assert "Safety Check" in result.output

    def test_bad_hitch(self, isolated_env):
        assert run("rigging", "--hitch", "bridle").exit_code == 2

    def test_zero_weight_is_strict_json(self, isolated_env):
        """Zero tension gives an infinite safety margin, written as null."""
        result = run("rigging", "--weight", "0", "--format", "json")

        assert result.exit_code == 0, result.output
        data = strict_json(result.output)
        assert data["result"]["safety"]["safety_margin"] is None
        assert data["result"]["load_distribution"]["imbalance_ratio"] == 1.0

    def test_cog_outside_pick_points_is_strict_json(self, isolated_env):
        result = run("rigging", "--offset", "1500", "--spacing", "2000", "--format", "json")

        data = strict_json(result.output)
        assert data["result"]["load_distribution"]["imbalance_ratio"] is None

    def test_malformed_settings(self, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text("{not json")
        result = run("rigging", "--format", "json")

        assert result.exit_code == 1
        assert "Could not parse" in result.output
        assert isinstance(result.exception, SystemExit)


class TestRulesCommands:
    """trade-calc rules"""

    def test_years(self, isolated_env):
        result = run("rules", "years")

        assert result.exit_code == 0
        assert "2025" in result.output

    def test_show_year(self, isolated_env):
        result = run("rules", "show", "2025")

        assert result.exit_code == 0
        assert "ympe: 71300" in result.output

    def test_show_rigging(self, isolated_env):
        result = run("rules", "show", "--rigging")

        assert result.exit_code == 0
        assert "design_factor: 1.25" in result.output

    def test_show_missing_year(self, isolated_env):
        result = run("rules", "show", "1999")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_show_invalid_year(self, isolated_env):
        assert run("rules", "show", "20x5").exit_code == 2


class TestSettingsCommands:
    """trade-calc settings"""

    def test_show_empty(self, isolated_env):
        result = run("settings", "show")

        assert result.exit_code == 0
        assert "No settings configured" in result.output

    def test_set_province_normalizes(self, isolated_env):
        result = run("settings", "set", "province", "ab")

        assert result.exit_code == 0
        settings = json.loads((isolated_env["config_dir"] / "settings.json").read_text())
        assert settings == {"province": "AB"}

    def test_set_unknown_province(self, isolated_env):
        assert run("settings", "set", "province", "ZZ").exit_code == 2

    def test_set_rules_dir_must_exist(self, isolated_env, tmp_path):
        assert run("settings", "set", "rules_dir", str(tmp_path / "missing")).exit_code == 2

    def test_clear(self, isolated_env):
        run("settings", "set", "province", "BC")
        result = run("settings", "set", "province", "--clear")

        assert result.exit_code == 0
        settings = json.loads((isolated_env["config_dir"] / "settings.json").read_text())
        assert settings == {}


class TestVersion:
    def test_version(self):
        result = run("--version")

        assert result.exit_code == 0
        assert "trade-calc" in result.output
