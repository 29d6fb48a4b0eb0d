"""Per-period statutory deduction calculations.

Implements CPP/CPP2 and EI contributions with year-to-date room tracking,
and federal/provincial income tax withholding using simple annualization
of the period's taxable income.

All functions are pure: year-to-date state is passed in, never stored.
Numeric edge cases (negative, zero, extreme values) clamp to 0 rather than
raising, so a payroll run never stops mid-calculation. Callers who want to
reject bad input use the advisory validators in payroll/.
"""

import logging
import math
from typing import List, Optional, Sequence, Union

from ..schemas import DateLike, Province, parse_date, province_code
from .rules import latest_tax_rules, tax_rules_for_date
from .schemas import (
    CPPResult,
    EIResult,
    StatutoryDeductions,
    TaxResult,
    TaxRules,
)

logger = logging.getLogger(__name__)


def round_cents(amount: float) -> float:
    """Round to 2 decimal places, halves rounding up.

    Example: 0.125 -> 0.13, -0.125 -> -0.12 (toward +infinity)
    """
    return math.floor(amount * 100 + 0.5) / 100


def default_tax_rules() -> TaxRules:
    """Latest available tax year, for calls that carry no pay date."""
    return latest_tax_rules()


def _periods(periods_per_year: float) -> float:
    # A non-positive period count would divide by zero; treat it as annual pay.
    return periods_per_year if periods_per_year > 0 else 1


def calculate_cpp(
    pensionable_earnings: float,
    ytd_pensionable: float,
    periods_per_year: float,
    rules: Optional[TaxRules] = None,
) -> CPPResult:
    """Calculate CPP1 and CPP2 contributions for one pay period.

    CPP1 applies to earnings above the prorated basic exemption, up to the
    remaining room under (YMPE - basic exemption). CPP2 applies to the part
    of cumulative earnings crossing the band between YMPE and YAMPE during
    this period.

    A period whose earnings straddle the YMPE is not reconciled jointly:
    CPP1 and CPP2 are each computed against their own room, which can shift
    a few cents between them at the crossing.

    Args:
        pensionable_earnings: Pensionable earnings for this pay period
        ytd_pensionable: Pensionable earnings before this period
        periods_per_year: Pay periods per year
        rules: Tax rules (defaults to the latest available year)

    Returns:
        CPPResult
    """
    cpp = (rules or default_tax_rules()).cpp
    periods = _periods(periods_per_year)
    ytd = max(0.0, ytd_pensionable)

    exemption_per_pay = cpp.basic_exemption / periods
    pensionable_this_pay = max(0.0, pensionable_earnings)

    # CPP1 - annual room and per-pay exemption
    cpp_room = max(0.0, (cpp.ympe - cpp.basic_exemption) - ytd)
    cpp1_base = max(0.0, min(pensionable_this_pay - exemption_per_pay, cpp_room))
    cpp1 = round_cents(cpp1_base * cpp.rate)

    # CPP2 - earnings above YMPE up to YAMPE
    pensionable_after = min(ytd + pensionable_this_pay, cpp.yampe)
    above_ympe_before = max(0.0, min(ytd, cpp.yampe) - cpp.ympe)
    above_ympe_after = max(0.0, pensionable_after - cpp.ympe)
    cpp2_this_pay = max(0.0, above_ympe_after - above_ympe_before)
    used_cpp2_room = (min(ytd, cpp.yampe) - cpp.ympe) if ytd > cpp.ympe else 0.0
    cpp2_room = max(0.0, (cpp.yampe - cpp.ympe) - used_cpp2_room)
    cpp2_base = min(cpp2_this_pay, cpp2_room)
    cpp2 = round_cents(cpp2_base * cpp.cpp2_rate)

    return CPPResult(
        cpp1=cpp1,
        cpp2=cpp2,
        pensionable_earnings=cpp1_base,
        cpp2_base=cpp2_base,
    )


def calculate_ei(
    insurable_earnings: float,
    ytd_insurable: float,
    periods_per_year: float,
    rules: Optional[TaxRules] = None,
) -> EIResult:
    """Calculate the EI premium for one pay period.

    The premium stops once year-to-date insurable earnings reach the MIE.
    periods_per_year is accepted for symmetry with calculate_cpp; EI has no
    per-period exemption.
    """
    ei = (rules or default_tax_rules()).ei

    insurable_this_pay = max(0.0, insurable_earnings)
    ei_room = max(0.0, ei.mie - max(0.0, ytd_insurable))
    ei_base = min(insurable_this_pay, ei_room)

    return EIResult(
        ei=round_cents(ei_base * ei.rate),
        insurable_earnings=ei_base,
    )


def calculate_progressive_tax(
    annual_income: float,
    thresholds: Sequence[float],
    rates: Sequence[float],
) -> float:
    """Calculate tax on annual income across progressive brackets.

    Args:
        annual_income: Annual taxable income
        thresholds: Upper bound of every bracket but the last
        rates: One rate per bracket (len(thresholds) + 1)

    Returns:
        Unrounded annual tax
    """
    tax = 0.0
    last_threshold = 0.0
    bands: List[float] = list(thresholds) + [float("inf")]

    for upper_threshold, rate in zip(bands, rates):
        taxable_in_bracket = max(0.0, min(annual_income, upper_threshold) - last_threshold)
        if taxable_in_bracket <= 0:
            break
        tax += taxable_in_bracket * rate
        last_threshold = upper_threshold

    return tax


def calculate_income_tax(
    taxable_income: float,
    pay_date: DateLike,
    province: Union[Province, str],
    periods_per_year: float,
    rules: Optional[TaxRules] = None,
) -> TaxResult:
    """Calculate federal and provincial income tax withheld for one period.

    Steps:
    1. Annualize: taxable income x periods per year
    2. Pick the rate schedule in force on the pay date
    3. Progressive tax on annual income, less the non-refundable credits
       valued at the lowest bracket rate
    4. Divide by periods and round to cents

    Provinces without a rule table have no provincial tax.

    Args:
        taxable_income: Taxable income for this pay period
        pay_date: Pay date (date or YYYY-MM-DD)
        province: Province code
        periods_per_year: Pay periods per year
        rules: Tax rules (defaults to the table for the pay date's year)

    Raises:
        ValueError: If pay_date is a string not in YYYY-MM-DD format
    """
    pay_day = parse_date(pay_date)
    rules = rules or tax_rules_for_date(pay_day)
    periods = _periods(periods_per_year)
    annualized_income = taxable_income * periods

    # Federal tax
    federal_rules = rules.federal
    federal_rates = federal_rules.rates_for(pay_day)
    federal_bpa = federal_rules.basic_personal_amount.amount_for(annualized_income)
    federal_before_credits = calculate_progressive_tax(
        annualized_income, federal_rules.brackets, federal_rates
    )
    federal_credits = federal_rates[0] * (federal_bpa + federal_rules.canada_employment_amount)
    federal_annual = max(0.0, federal_before_credits - federal_credits)

    # Provincial tax
    provincial_annual = 0.0
    provincial_rules = rules.province(province_code(province))
    if provincial_rules is not None:
        provincial_rates = provincial_rules.rates_for(pay_day)
        provincial_before_credits = calculate_progressive_tax(
            annualized_income, provincial_rules.brackets, provincial_rates
        )
        provincial_credits = provincial_rates[0] * provincial_rules.basic_personal_amount
        provincial_annual = max(0.0, provincial_before_credits - provincial_credits)

    return TaxResult(
        federal=round_cents(federal_annual / periods),
        provincial=round_cents(provincial_annual / periods),
        taxable_income=taxable_income,
        annualized_income=annualized_income,
    )


def calculate_statutory_deductions(
    gross_wage: float,
    ytd_pensionable: float,
    ytd_insurable: float,
    pay_date: DateLike,
    province: Union[Province, str],
    periods_per_year: float,
    rrsp_at_source: float = 0.0,
    rules: Optional[TaxRules] = None,
) -> StatutoryDeductions:
    """Calculate CPP, EI and income tax for a single pay period.

    Args:
        gross_wage: Gross taxable wage for the period (allowances excluded)
        ytd_pensionable: Prior YTD pensionable earnings
        ytd_insurable: Prior YTD insurable earnings
        pay_date: Pay date
        province: Province code
        periods_per_year: Pay periods per year
        rrsp_at_source: RRSP contribution deducted at source; reduces income
                        tax but NOT CPP or EI

    Returns:
        StatutoryDeductions with cpp, ei, tax and total_statutory
    """
    pay_day = parse_date(pay_date)
    rules = rules or tax_rules_for_date(pay_day)

    cpp = calculate_cpp(gross_wage, ytd_pensionable, periods_per_year, rules)
    ei = calculate_ei(gross_wage, ytd_insurable, periods_per_year, rules)

    taxable_income = max(0.0, gross_wage - rrsp_at_source)
    tax = calculate_income_tax(taxable_income, pay_day, province, periods_per_year, rules)

    total = round_cents(cpp.cpp1 + cpp.cpp2 + ei.ei + tax.federal + tax.provincial)
    logger.debug(
        f"statutory {pay_day} {province_code(province)}: cpp1={cpp.cpp1} cpp2={cpp.cpp2} "
        f"ei={ei.ei} federal={tax.federal} provincial={tax.provincial}"
    )

    return StatutoryDeductions(cpp=cpp, ei=ei, tax=tax, total_statutory=total)
