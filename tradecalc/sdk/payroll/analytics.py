"""Read-only analytics derived from a computed PayrollResult."""

import calendar
import math
from typing import Union

from ..schemas import DateLike, PayFrequency, parse_date
from ..taxes import round_cents
from .schemas import (
    DeductionBreakdown,
    EffectiveTaxRates,
    PayrollResult,
    YTDInputs,
    YTDProjection,
)


def calculate_effective_tax_rates(
    gross_wage: float,
    deductions: DeductionBreakdown,
) -> EffectiveTaxRates:
    """Express each statutory deduction as a percentage of gross wage.

    A zero or negative wage yields all-zero rates.
    """
    if gross_wage <= 0:
        return EffectiveTaxRates()

    def pct(amount: float) -> float:
        return round_cents(amount / gross_wage * 100)

    return EffectiveTaxRates(
        total_tax_rate=pct(deductions.federal + deductions.provincial),
        federal_tax_rate=pct(deductions.federal),
        provincial_tax_rate=pct(deductions.provincial),
        cpp_rate=pct(deductions.cpp1 + deductions.cpp2),
        ei_rate=pct(deductions.ei),
        total_statutory_rate=pct(
            deductions.cpp1 + deductions.cpp2 + deductions.ei
            + deductions.federal + deductions.provincial
        ),
    )


def calculate_ytd_projections(
    current: PayrollResult,
    ytd_inputs: YTDInputs,
    periods_remaining: int,
) -> YTDProjection:
    """Project year-end totals assuming the current period repeats.

    Contribution caps are not re-applied; the projection is straight-line
    arithmetic over the remaining periods.

    Args:
        current: Result for the current pay period
        ytd_inputs: YTD amounts before the current period
        periods_remaining: Pay periods left in the year
    """
    deductions = current.deductions
    return YTDProjection(
        projected_gross=round_cents(
            ytd_inputs.pensionable_earnings + current.gross.wage * periods_remaining
        ),
        projected_cpp1=round_cents(ytd_inputs.cpp1_paid + deductions.cpp1 * periods_remaining),
        projected_cpp2=round_cents(ytd_inputs.cpp2_paid + deductions.cpp2 * periods_remaining),
        projected_ei=round_cents(ytd_inputs.ei_paid + deductions.ei * periods_remaining),
        projected_net=round_cents(current.net * periods_remaining),
        periods_remaining=periods_remaining,
    )


def periods_remaining_in_year(
    pay_date: DateLike,
    frequency: Union[PayFrequency, str],
) -> int:
    """Whole pay periods left in the calendar year after pay_date.

    Periods are spread evenly over the year, so the result is an estimate
    for semi-monthly and monthly schedules as much as weekly ones.
    """
    day = parse_date(pay_date)
    periods = PayFrequency(frequency).periods
    days_in_year = 366 if calendar.isleap(day.year) else 365
    elapsed = day.timetuple().tm_yday / days_in_year
    return max(0, periods - math.ceil(elapsed * periods))


def advance_ytd(ytd_inputs: YTDInputs, result: PayrollResult) -> YTDInputs:
    """Roll YTD accumulators forward by one computed period.

    Returns a new YTDInputs; the original is unchanged. Pensionable and
    insurable earnings both grow by the period's taxable wage.
    """
    wage = result.gross.wage
    deductions = result.deductions
    return YTDInputs(
        pensionable_earnings=round_cents(max(0.0, ytd_inputs.pensionable_earnings) + wage),
        insurable_earnings=round_cents(max(0.0, ytd_inputs.insurable_earnings) + wage),
        cpp1_paid=round_cents(ytd_inputs.cpp1_paid + deductions.cpp1),
        cpp2_paid=round_cents(ytd_inputs.cpp2_paid + deductions.cpp2),
        ei_paid=round_cents(ytd_inputs.ei_paid + deductions.ei),
    )
