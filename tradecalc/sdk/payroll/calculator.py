"""Payroll calculation orchestration.

Gross pay -> voluntary + statutory deductions -> net pay, for one period.
"""

import logging
from typing import Optional, Union

from ..schemas import DateLike, PayFrequency, Province, parse_date
from ..taxes import calculate_statutory_deductions, round_cents, tax_rules_for_date
from ..taxes.schemas import TaxRules
from .schemas import (
    AllowanceBreakdown,
    DeductionBreakdown,
    DeductionInputs,
    GrossPayBreakdown,
    PayrollInputs,
    PayrollResult,
    VoluntaryDeductions,
    YTDInputs,
)

logger = logging.getLogger(__name__)

OVERTIME_HALF_MULTIPLIER = 1.5
OVERTIME_DOUBLE_MULTIPLIER = 2.0


def calculate_gross_pay(inputs: PayrollInputs) -> GrossPayBreakdown:
    """Calculate gross pay by component.

    Every hour worked earns the shift premium on top of its category rate.
    Per diem is treated as a non-taxable allowance.
    """
    rate = inputs.rate
    premium = inputs.shift_premium

    straight_time_pay = round_cents(inputs.straight_time * (rate + premium))
    overtime_half_pay = round_cents(
        inputs.overtime_half * (rate * OVERTIME_HALF_MULTIPLIER + premium)
    )
    overtime_double_pay = round_cents(
        inputs.overtime_double * (rate * OVERTIME_DOUBLE_MULTIPLIER + premium)
    )
    shift_premium_pay = round_cents(inputs.total_hours * premium)
    travel_pay = round_cents(inputs.travel_hours * inputs.travel_rate)

    allowances = calculate_allowances(inputs.per_diem, inputs.days).non_taxable_amount

    wage = round_cents(straight_time_pay + overtime_half_pay + overtime_double_pay + travel_pay)
    total = round_cents(wage + allowances)

    return GrossPayBreakdown(
        straight_time_pay=straight_time_pay,
        overtime_half_pay=overtime_half_pay,
        overtime_double_pay=overtime_double_pay,
        shift_premium_pay=shift_premium_pay,
        travel_pay=travel_pay,
        wage=wage,
        allowances=allowances,
        total=total,
    )


def calculate_allowances(
    per_diem_daily: float,
    days: float,
    is_taxable: bool = False,
) -> AllowanceBreakdown:
    """Split a per diem allowance into taxable and non-taxable parts."""
    total_amount = round_cents(per_diem_daily * days)
    return AllowanceBreakdown(
        total_amount=total_amount,
        taxable_amount=total_amount if is_taxable else 0.0,
        non_taxable_amount=0.0 if is_taxable else total_amount,
        daily_rate=per_diem_daily,
        days=days,
    )


def calculate_voluntary_deductions(
    gross_wage: float,
    deduction_inputs: DeductionInputs,
) -> VoluntaryDeductions:
    """Union dues and RRSP as percentages of gross wage, plus flat other deductions."""
    union = round_cents(gross_wage * deduction_inputs.union_dues_percent / 100)
    rrsp = round_cents(gross_wage * deduction_inputs.rrsp_percent / 100)
    other = round_cents(deduction_inputs.other_deductions)

    return VoluntaryDeductions(
        union=union,
        rrsp=rrsp,
        other=other,
        total_voluntary=round_cents(union + rrsp + other),
    )


def calculate_deductions(
    gross_wage: float,
    deduction_inputs: DeductionInputs,
    ytd_inputs: YTDInputs,
    pay_date: DateLike,
    province: Union[Province, str],
    frequency: Union[PayFrequency, str],
    rrsp_at_source: bool = True,
    rules: Optional[TaxRules] = None,
) -> DeductionBreakdown:
    """Calculate the complete deduction breakdown for a period.

    Args:
        gross_wage: Taxable gross wage (allowances excluded)
        deduction_inputs: Voluntary deduction elections
        ytd_inputs: Prior YTD accumulators
        pay_date: Pay date
        province: Province code
        frequency: Pay frequency
        rrsp_at_source: Whether the RRSP contribution reduces taxable income
        rules: Tax rules (defaults to the table for the pay date)
    """
    periods_per_year = PayFrequency(frequency).periods

    voluntary = calculate_voluntary_deductions(gross_wage, deduction_inputs)
    rrsp_at_source_amount = voluntary.rrsp if rrsp_at_source else 0.0

    statutory = calculate_statutory_deductions(
        gross_wage,
        ytd_inputs.pensionable_earnings,
        ytd_inputs.insurable_earnings,
        pay_date,
        province,
        periods_per_year,
        rrsp_at_source_amount,
        rules,
    )

    total = round_cents(
        voluntary.union
        + voluntary.rrsp
        + voluntary.other
        + statutory.cpp.cpp1
        + statutory.cpp.cpp2
        + statutory.ei.ei
        + statutory.tax.federal
        + statutory.tax.provincial
    )

    return DeductionBreakdown(
        union=voluntary.union,
        rrsp=voluntary.rrsp,
        other=voluntary.other,
        cpp1=statutory.cpp.cpp1,
        cpp2=statutory.cpp.cpp2,
        ei=statutory.ei.ei,
        federal=statutory.tax.federal,
        provincial=statutory.tax.provincial,
        total=total,
    )


def calculate_net_pay(gross_total: float, total_deductions: float) -> float:
    """Net pay, rounded to cents."""
    return round_cents(gross_total - total_deductions)


def calculate_payroll(
    payroll_inputs: PayrollInputs,
    deduction_inputs: DeductionInputs,
    ytd_inputs: YTDInputs,
    rules: Optional[TaxRules] = None,
) -> PayrollResult:
    """Calculate gross, deductions and net pay for one pay period.

    This is the main entry point. Inputs are not validated here; call
    validate_payroll_inputs() first if bad input should be rejected.
    """
    pay_date = parse_date(payroll_inputs.pay_date)
    rules = rules or tax_rules_for_date(pay_date)

    gross = calculate_gross_pay(payroll_inputs)
    deductions = calculate_deductions(
        gross.wage,
        deduction_inputs,
        ytd_inputs,
        pay_date,
        payroll_inputs.province,
        payroll_inputs.frequency,
        deduction_inputs.rrsp_at_source,
        rules,
    )
    net = calculate_net_pay(gross.total, deductions.total)

    logger.debug(
        f"payroll {pay_date} ({payroll_inputs.frequency.value}): gross={gross.total:.2f} "
        f"deductions={deductions.total:.2f} net={net:.2f}"
    )

    return PayrollResult(gross=gross, deductions=deductions, net=net)
