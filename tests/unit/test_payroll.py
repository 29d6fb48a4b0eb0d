"""Tests for the payroll orchestrator: gross pay, deductions, net pay,
validation, analytics and presets.
"""

import itertools
from datetime import date

import pytest

from tradecalc.sdk.payroll import (
    DeductionInputs,
    PayrollInputs,
    YTDInputs,
    advance_ytd,
    apply_preset,
    calculate_allowances,
    calculate_effective_tax_rates,
    calculate_gross_pay,
    calculate_payroll,
    calculate_voluntary_deductions,
    calculate_ytd_projections,
    list_presets,
    periods_remaining_in_year,
    validate_payroll_inputs,
)
from tradecalc.sdk.schemas import PayFrequency, Province
from tradecalc.sdk.taxes import calculate_statutory_deductions, load_tax_rules, round_cents


# === FIXTURES ===


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TRADE_CALC_CONFIG_PATH", str(config_dir))
    return {"config_dir": config_dir}


@pytest.fixture
def rules_2025():
    return load_tax_rules(2025)


@pytest.fixture
def shift_inputs():
    """A week of shutdown work with premium, travel and per diem."""
    return PayrollInputs(
        rate=50,
        straight_time=40,
        overtime_half=10,
        overtime_double=4,
        shift_premium=2,
        travel_hours=3,
        travel_rate=25,
        per_diem=150,
        days=7,
        pay_date=date(2025, 7, 15),
    )


# === GROSS PAY ===


class TestGrossPay:
    """Gross pay components."""

    def test_straight_time_only(self):
        """$60/hr x 40h = $2400 taxable wage."""
        gross = calculate_gross_pay(PayrollInputs(rate=60, straight_time=40))

        assert gross.wage == 2400.00
        assert gross.total == 2400.00
        assert gross.allowances == 0

    def test_premium_on_every_category(self, shift_inputs):
        gross = calculate_gross_pay(shift_inputs)

        assert gross.straight_time_pay == 40 * 52
        assert gross.overtime_half_pay == 10 * (75 + 2)
        assert gross.overtime_double_pay == 4 * (100 + 2)
        assert gross.shift_premium_pay == 54 * 2
        assert gross.travel_pay == 75

    def test_wage_excludes_per_diem(self, shift_inputs):
        gross = calculate_gross_pay(shift_inputs)

        expected_wage = 2080 + 770 + 408 + 75
        assert gross.wage == expected_wage
        assert gross.allowances == 1050
        assert gross.total == expected_wage + 1050

    def test_allowances(self):
        allowance = calculate_allowances(150, 7)

        assert allowance.total_amount == 1050
        assert allowance.non_taxable_amount == 1050
        assert allowance.taxable_amount == 0

    def test_taxable_allowances(self):
        allowance = calculate_allowances(100, 5, is_taxable=True)

        assert allowance.taxable_amount == 500
        assert allowance.non_taxable_amount == 0


class TestVoluntaryDeductions:
    """Union dues, RRSP and other deductions."""

    def test_percentages_of_wage(self):
        voluntary = calculate_voluntary_deductions(
            2400, DeductionInputs(union_dues_percent=3, rrsp_percent=5, other_deductions=20)
        )

        assert voluntary.union == 72.00
        assert voluntary.rrsp == 120.00
        assert voluntary.other == 20.00
        assert voluntary.total_voluntary == 212.00


# === FULL CALCULATION ===


class TestCalculatePayroll:
    """End-to-end payroll results."""

    def test_simple_week(self, rules_2025):
        result = calculate_payroll(
            PayrollInputs(rate=60, straight_time=40, pay_date=date(2025, 7, 15)),
            DeductionInputs(),
            YTDInputs(),
            rules_2025,
        )

        assert result.gross.wage == 2400.00
        assert result.deductions.union == 72.00
        assert result.deductions.cpp1 > 0
        assert result.deductions.ei == round_cents(2400 * 0.0164)

    def test_net_pay_identity(self, shift_inputs, rules_2025):
        result = calculate_payroll(shift_inputs, DeductionInputs(rrsp_percent=4), YTDInputs(), rules_2025)

        assert result.net == round_cents(result.gross.total - result.deductions.total)

    def test_deduction_total_is_sum_of_parts(self, shift_inputs, rules_2025):
        deductions = calculate_payroll(
            shift_inputs, DeductionInputs(rrsp_percent=4, other_deductions=12.5), YTDInputs(), rules_2025
        ).deductions

        parts = deductions.total_voluntary + deductions.total_statutory
        assert deductions.total == pytest.approx(parts, abs=0.01)

    def test_per_diem_is_not_taxed(self, rules_2025):
        base = PayrollInputs(rate=60, straight_time=40, pay_date=date(2025, 7, 15))
        with_per_diem = base.model_copy(update={"per_diem": 150, "days": 5})

        plain = calculate_payroll(base, DeductionInputs(), YTDInputs(), rules_2025)
        allowance = calculate_payroll(with_per_diem, DeductionInputs(), YTDInputs(), rules_2025)

        assert allowance.deductions == plain.deductions
        assert allowance.net == round_cents(plain.net + 750)

    def test_rrsp_at_source_lowers_tax(self, rules_2025):
        inputs = PayrollInputs(rate=60, straight_time=40, pay_date=date(2025, 7, 15))

        at_source = calculate_payroll(inputs, DeductionInputs(rrsp_percent=10), YTDInputs(), rules_2025)
        after_tax = calculate_payroll(
            inputs, DeductionInputs(rrsp_percent=10, rrsp_at_source=False), YTDInputs(), rules_2025
        )

        assert at_source.deductions.rrsp == after_tax.deductions.rrsp == 240.00
        assert at_source.deductions.federal < after_tax.deductions.federal
        assert at_source.deductions.cpp1 == after_tax.deductions.cpp1

    def test_biweekly_frequency(self, rules_2025):
        weekly = calculate_payroll(
            PayrollInputs(rate=60, straight_time=80, pay_date=date(2025, 7, 15)),
            DeductionInputs(), YTDInputs(), rules_2025,
        )
        biweekly = calculate_payroll(
            PayrollInputs(rate=60, straight_time=80, pay_date=date(2025, 7, 15),
                          frequency=PayFrequency.BIWEEKLY),
            DeductionInputs(), YTDInputs(), rules_2025,
        )

        # Same pay spread over fewer periods annualizes lower
        assert biweekly.deductions.federal < weekly.deductions.federal

    def test_rules_resolved_from_pay_date(self):
        result = calculate_payroll(
            PayrollInputs(rate=60, straight_time=40, pay_date="2025-07-15"),
            DeductionInputs(),
            YTDInputs(),
        )
        assert result.gross.wage == 2400.00

    def test_zero_inputs(self, rules_2025):
        result = calculate_payroll(PayrollInputs(), DeductionInputs(), YTDInputs(), rules_2025)

        assert result.gross.total == 0
        assert result.deductions.total == 0
        assert result.net == 0

    def test_inputs_are_immutable(self):
        inputs = PayrollInputs(rate=60)
        with pytest.raises(Exception):
            inputs.rate = 70

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            PayrollInputs(rate=60, bonus=100)


class TestCentRounding:
    """Every currency amount leaves the calculation rounded to cents."""

    RATES = [17.33, 48.75, 62.125]
    HOURS = [(0, 0, 0), (37.5, 0, 0), (40, 11.25, 3.5)]
    PREMIUMS = [0, 1.755]
    FREQUENCIES = [PayFrequency.WEEKLY, PayFrequency.BIWEEKLY]
    PAY_DATES = [date(2025, 1, 15), date(2025, 7, 15)]
    YTD = [0, 68000, 80000]
    RRSP_PERCENTS = [0, 4.5]

    @staticmethod
    def _assert_cents(model):
        for name, value in model.model_dump().items():
            if isinstance(value, float):
                assert value == round_cents(value), f"{name}={value!r}"

    def test_payroll_outputs(self, rules_2025):
        cases = itertools.product(
            self.RATES, self.HOURS, self.PREMIUMS, self.FREQUENCIES,
            self.PAY_DATES, self.YTD, self.RRSP_PERCENTS,
        )
        for rate, (st, ot, dt), premium, frequency, pay_date, ytd, rrsp in cases:
            payroll_inputs = PayrollInputs(
                rate=rate,
                straight_time=st,
                overtime_half=ot,
                overtime_double=dt,
                shift_premium=premium,
                travel_hours=2.5,
                travel_rate=31.17,
                per_diem=87.5,
                days=3,
                frequency=frequency,
                pay_date=pay_date,
            )
            deduction_inputs = DeductionInputs(rrsp_percent=rrsp, other_deductions=12.345)
            ytd_inputs = YTDInputs(pensionable_earnings=ytd, insurable_earnings=ytd)

            result = calculate_payroll(payroll_inputs, deduction_inputs, ytd_inputs, rules_2025)

            self._assert_cents(result.gross)
            self._assert_cents(result.deductions)
            assert result.net == round_cents(result.net)

    def test_statutory_outputs(self, rules_2025):
        cases = itertools.product([0.01, 333.33, 1234.567, 4999.995], self.YTD, self.PAY_DATES)
        for wage, ytd, pay_date in cases:
            statutory = calculate_statutory_deductions(wage, ytd, ytd, pay_date, "AB", 52, 0, rules_2025)

            for amount in (statutory.cpp.cpp1, statutory.cpp.cpp2, statutory.ei.ei,
                           statutory.tax.federal, statutory.tax.provincial, statutory.total_statutory):
                assert amount == round_cents(amount)


# === VALIDATION ===


class TestValidatePayrollInputs:
    """Advisory payroll validation."""

    def test_valid_inputs(self):
        result = validate_payroll_inputs(
            PayrollInputs(rate=60, straight_time=40), DeductionInputs(), YTDInputs()
        )

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_collects_every_error(self):
        result = validate_payroll_inputs(
            PayrollInputs(rate=0, straight_time=-1, overtime_half=-1, overtime_double=-1),
            DeductionInputs(union_dues_percent=101, rrsp_percent=-1),
            YTDInputs(pensionable_earnings=-1, insurable_earnings=-1),
        )

        assert not result.is_valid
        assert result.errors == [
            "Base rate must be greater than 0",
            "Straight time hours cannot be negative",
            "Overtime hours cannot be negative",
            "Double-time hours cannot be negative",
            "Union dues percentage must be between 0 and 100",
            "RRSP percentage must be between 0 and 100",
            "YTD pensionable earnings cannot be negative",
            "YTD insurable earnings cannot be negative",
        ]

    def test_long_week_warning(self):
        result = validate_payroll_inputs(
            PayrollInputs(rate=60, straight_time=60, overtime_half=20, overtime_double=10),
            DeductionInputs(),
            YTDInputs(),
        )

        assert result.is_valid
        assert result.warnings == [
            "Total hours exceed 84 per week - verify compliance with labour standards"
        ]

    def test_rrsp_limit_warning(self):
        result = validate_payroll_inputs(
            PayrollInputs(rate=60, straight_time=40), DeductionInputs(rrsp_percent=20), YTDInputs()
        )
        assert result.warnings == ["RRSP contribution exceeds typical 18% limit"]

    def test_errors_do_not_block_calculation(self, rules_2025):
        inputs = PayrollInputs(rate=60, straight_time=-5, pay_date=date(2025, 7, 15))

        assert not validate_payroll_inputs(inputs, DeductionInputs(), YTDInputs()).is_valid
        result = calculate_payroll(inputs, DeductionInputs(), YTDInputs(), rules_2025)
        assert result.deductions.cpp1 == 0


# === ANALYTICS ===


class TestEffectiveTaxRates:
    """Deductions as a percentage of wage."""

    def test_rates(self, rules_2025):
        result = calculate_payroll(
            PayrollInputs(rate=60, straight_time=40, pay_date=date(2025, 7, 15)),
            DeductionInputs(), YTDInputs(), rules_2025,
        )
        rates = calculate_effective_tax_rates(result.gross.wage, result.deductions)

        assert rates.ei_rate == pytest.approx(1.64, abs=0.01)
        assert rates.total_tax_rate == pytest.approx(
            rates.federal_tax_rate + rates.provincial_tax_rate, abs=0.02
        )

    def test_zero_wage(self, rules_2025):
        result = calculate_payroll(PayrollInputs(), DeductionInputs(), YTDInputs(), rules_2025)
        rates = calculate_effective_tax_rates(0, result.deductions)

        assert rates.total_statutory_rate == 0


class TestYTDProjections:
    """Year-end projections and YTD roll-forward."""

    def test_straight_line_projection(self, rules_2025):
        result = calculate_payroll(
            PayrollInputs(rate=60, straight_time=40, pay_date=date(2025, 7, 15)),
            DeductionInputs(), YTDInputs(), rules_2025,
        )
        projection = calculate_ytd_projections(result, YTDInputs(pensionable_earnings=1000), 10)

        assert projection.projected_gross == 1000 + 24000
        assert projection.projected_ei == round_cents(result.deductions.ei * 10)
        assert projection.periods_remaining == 10

    def test_periods_remaining_at_year_end(self):
        assert periods_remaining_in_year("2025-12-31", "weekly") == 0

    def test_periods_remaining_at_year_start(self):
        assert periods_remaining_in_year(date(2025, 1, 1), PayFrequency.WEEKLY) == 51

    def test_periods_remaining_midyear(self):
        assert periods_remaining_in_year("2025-07-02", "monthly") == 5

    def test_advance_ytd(self, rules_2025):
        ytd = YTDInputs(pensionable_earnings=1000, insurable_earnings=1000, cpp1_paid=10)
        result = calculate_payroll(
            PayrollInputs(rate=60, straight_time=40, pay_date=date(2025, 7, 15)),
            DeductionInputs(), ytd, rules_2025,
        )
        advanced = advance_ytd(ytd, result)

        assert advanced.pensionable_earnings == 3400
        assert advanced.insurable_earnings == 3400
        assert advanced.cpp1_paid == round_cents(10 + result.deductions.cpp1)
        assert ytd.pensionable_earnings == 1000

    def test_threaded_ytd_caps_ei(self, rules_2025):
        """Thirty weeks at $2400 reaches the MIE; later weeks pay no EI."""
        inputs = PayrollInputs(rate=60, straight_time=40, pay_date=date(2025, 3, 1))
        ytd = YTDInputs()
        total_ei = 0.0
        for _ in range(30):
            result = calculate_payroll(inputs, DeductionInputs(), ytd, rules_2025)
            total_ei += result.deductions.ei
            ytd = advance_ytd(ytd, result)

        assert ytd.insurable_earnings > 65700
        assert total_ei <= 65700 * 0.0164 + 0.30
        assert calculate_payroll(inputs, DeductionInputs(), ytd, rules_2025).deductions.ei == 0


# === PRESETS ===


class TestPresets:
    """Named input presets."""

    def test_shutdown_preset(self):
        inputs = apply_preset(PayrollInputs(province=Province.AB), "shutdown")

        assert inputs.rate == 64
        assert inputs.straight_time == 40
        assert inputs.overtime_half == 16
        assert inputs.overtime_double == 8
        assert inputs.shift_premium == 1.5
        assert inputs.per_diem == 150
        assert inputs.days == 7

    def test_shop_preset_keeps_context(self):
        base = PayrollInputs(pay_date=date(2025, 7, 15), frequency=PayFrequency.BIWEEKLY)
        inputs = apply_preset(base, "shop")

        assert inputs.rate == 48
        assert inputs.days == 5
        assert inputs.pay_date == date(2025, 7, 15)
        assert inputs.frequency == PayFrequency.BIWEEKLY

    def test_input_unchanged(self):
        base = PayrollInputs(rate=10)
        apply_preset(base, "shop")
        assert base.rate == 10

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            apply_preset(PayrollInputs(), "nightshift")

    def test_list_presets(self):
        assert {p.name for p in list_presets()} == {"shutdown", "shop"}
