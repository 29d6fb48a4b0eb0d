"""Payroll calculation command."""

import click
from rich.console import Console

from tradecalc.sdk import ConfigError, RuleTableError, get_setting
from tradecalc.sdk.payroll import (
    PRESETS,
    DeductionInputs,
    PayrollInputs,
    YTDInputs,
    apply_preset,
    calculate_effective_tax_rates,
    calculate_payroll,
    calculate_ytd_projections,
    periods_remaining_in_year,
    validate_payroll_inputs,
)
from tradecalc.sdk.schemas import PayFrequency, Province

from .json_output import echo_json
from .renderers.payroll_renderer import render_payroll


# CLI option name -> PayrollInputs field
HOURLY_OPTIONS = {
    "rate": "rate",
    "st": "straight_time",
    "ot": "overtime_half",
    "dt": "overtime_double",
    "premium": "shift_premium",
    "travel_hours": "travel_hours",
    "travel_rate": "travel_rate",
    "per_diem": "per_diem",
    "days": "days",
}


@click.command("payroll")
@click.option("--preset", type=click.Choice(sorted(PRESETS)), help="Start from a named preset")
@click.option("--rate", type=float, help="Base hourly rate ($/hr)")
@click.option("--st", type=float, help="Straight time hours")
@click.option("--ot", type=float, help="Overtime hours at 1.5x")
@click.option("--dt", type=float, help="Double-time hours")
@click.option("--premium", type=float, help="Shift premium ($/hr)")
@click.option("--travel-hours", type=float)
@click.option("--travel-rate", type=float, help="Travel rate ($/hr)")
@click.option("--per-diem", type=float, help="Per diem ($/day, non-taxable)")
@click.option("--days", type=float, help="Days of per diem (default: 5)")
@click.option("--pay-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Pay date YYYY-MM-DD (default: today)")
@click.option("--frequency", type=click.Choice([f.value for f in PayFrequency]),
              help="Pay frequency (default: settings or weekly)")
@click.option("--province", type=click.Choice([p.value for p in Province], case_sensitive=False),
              help="Province code (default: settings or AB)")
@click.option("--union-dues", type=float, default=3.0, show_default=True, help="Union dues, % of wage")
@click.option("--rrsp", type=float, default=0.0, show_default=True, help="RRSP, % of wage")
@click.option("--rrsp-after-tax", is_flag=True, help="RRSP does not reduce taxable income this period")
@click.option("--other", "other_deductions", type=float, default=0.0, help="Other flat deductions ($)")
@click.option("--ytd-pensionable", type=float, default=0.0, help="YTD pensionable earnings")
@click.option("--ytd-insurable", type=float, default=0.0, help="YTD insurable earnings")
@click.option("--ytd-cpp1", type=float, default=0.0, help="YTD CPP contributions paid")
@click.option("--ytd-cpp2", type=float, default=0.0, help="YTD CPP2 contributions paid")
@click.option("--ytd-ei", type=float, default=0.0, help="YTD EI premiums paid")
@click.option("--project", is_flag=True, help="Project year-end totals from this period")
@click.option("--periods-remaining", type=int, help="Periods left in the year (implies --project)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def payroll(preset, pay_date, frequency, province, union_dues, rrsp, rrsp_after_tax,
            other_deductions, ytd_pensionable, ytd_insurable, ytd_cpp1, ytd_cpp2, ytd_ei,
            project, periods_remaining, output_format, **hourly):
    """Calculate gross, deductions and net pay for one pay period.

    Validation problems are reported but never stop the calculation.

    Examples:
        trade-calc payroll --rate 60 --st 40 --pay-date 2025-07-15
        trade-calc payroll --preset shutdown --frequency biweekly --format json
    """
    try:
        base = {
            "frequency": frequency or get_setting("pay_frequency") or PayFrequency.WEEKLY.value,
            "province": (province or get_setting("province") or Province.AB.value).upper(),
        }
    except ConfigError as e:
        raise click.ClickException(str(e))
    if pay_date:
        base["pay_date"] = pay_date.date()

    try:
        payroll_inputs = PayrollInputs.model_validate(base)
        if preset:
            payroll_inputs = apply_preset(payroll_inputs, preset)
        overrides = {
            field: hourly[option] for option, field in HOURLY_OPTIONS.items()
            if hourly.get(option) is not None
        }
        payroll_inputs = PayrollInputs.model_validate({**payroll_inputs.model_dump(), **overrides})
    except ValueError as e:
        raise click.ClickException(str(e))

    deduction_inputs = DeductionInputs(
        union_dues_percent=union_dues,
        rrsp_percent=rrsp,
        rrsp_at_source=not rrsp_after_tax,
        other_deductions=other_deductions,
    )
    ytd_inputs = YTDInputs(
        pensionable_earnings=ytd_pensionable,
        insurable_earnings=ytd_insurable,
        cpp1_paid=ytd_cpp1,
        cpp2_paid=ytd_cpp2,
        ei_paid=ytd_ei,
    )

    validation = validate_payroll_inputs(payroll_inputs, deduction_inputs, ytd_inputs)
    try:
        result = calculate_payroll(payroll_inputs, deduction_inputs, ytd_inputs)
    except (FileNotFoundError, RuleTableError, ConfigError) as e:
        raise click.ClickException(str(e))

    output = {
        "inputs": payroll_inputs.model_dump(mode="json"),
        "result": result.model_dump(),
        "validation": validation.model_dump(),
        "effective_rates": calculate_effective_tax_rates(result.gross.wage, result.deductions).model_dump(),
    }

    if project or periods_remaining is not None:
        if periods_remaining is None:
            periods_remaining = periods_remaining_in_year(payroll_inputs.pay_date, payroll_inputs.frequency)
        output["projection"] = calculate_ytd_projections(result, ytd_inputs, periods_remaining).model_dump()

    if output_format == "json":
        echo_json(output)
        return

    render_payroll(Console(), output)
