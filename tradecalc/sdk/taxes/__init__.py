"""taxes - Statutory payroll deductions.

Scope:
- CPP1/CPP2 contributions with YTD room tracking
- EI premiums up to the Maximum Insurable Earnings
- Federal and provincial income tax withholding (annualized brackets,
  effective-dated rate schedules, basic personal amount credits)

Constraints:
- Pure calculation - no stored YTD state, no I/O beyond loading rule tables
- Year-specific rules loaded from rules/tax/{year}.yaml

Usage:
    from tradecalc.sdk.taxes import calculate_statutory_deductions

    result = calculate_statutory_deductions(2400, 0, 0, "2025-07-15", "AB", 52)
"""

from .withholding import (
    calculate_cpp,
    calculate_ei,
    calculate_income_tax,
    calculate_progressive_tax,
    calculate_statutory_deductions,
    default_tax_rules,
    round_cents,
)

from .rules import (
    available_tax_years,
    clear_rules_cache,
    is_tax_supported,
    latest_tax_rules,
    load_tax_rules,
    tax_rules_for_date,
)

from .schemas import (
    CPPResult,
    EIResult,
    StatutoryDeductions,
    TaxResult,
    TaxRules,
)

__all__ = [
    # Withholding
    "calculate_cpp",
    "calculate_ei",
    "calculate_income_tax",
    "calculate_progressive_tax",
    "calculate_statutory_deductions",
    "default_tax_rules",
    "round_cents",
    # Rules
    "available_tax_years",
    "clear_rules_cache",
    "is_tax_supported",
    "latest_tax_rules",
    "load_tax_rules",
    "tax_rules_for_date",
    # Schemas
    "CPPResult",
    "EIResult",
    "StatutoryDeductions",
    "TaxResult",
    "TaxRules",
]
