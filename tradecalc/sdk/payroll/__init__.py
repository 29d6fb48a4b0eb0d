"""payroll - Gross-to-net calculation for one pay period.

Scope:
- Gross pay from hours, overtime, shift premium, travel and per diem
- Voluntary deductions (union dues, RRSP, other) merged with statutory
  deductions from taxes/
- Advisory input validation, effective rates and YTD projections

Constraints:
- YTD accumulators are inputs only; advance_ytd() returns the next
  period's accumulators without mutating anything

Usage:
    from tradecalc.sdk.payroll import PayrollInputs, DeductionInputs, YTDInputs, calculate_payroll

    result = calculate_payroll(PayrollInputs(rate=60, straight_time=40), DeductionInputs(), YTDInputs())
"""

from .calculator import (
    calculate_allowances,
    calculate_deductions,
    calculate_gross_pay,
    calculate_net_pay,
    calculate_payroll,
    calculate_voluntary_deductions,
)

from .analytics import (
    advance_ytd,
    calculate_effective_tax_rates,
    calculate_ytd_projections,
    periods_remaining_in_year,
)

from .validate import validate_payroll_inputs

from .presets import PRESETS, apply_preset, list_presets

from .schemas import (
    AllowanceBreakdown,
    DeductionBreakdown,
    DeductionInputs,
    EffectiveTaxRates,
    GrossPayBreakdown,
    PayrollInputs,
    PayrollPreset,
    PayrollResult,
    ValidationResult,
    VoluntaryDeductions,
    YTDInputs,
    YTDProjection,
)

__all__ = [
    # Calculation
    "calculate_allowances",
    "calculate_deductions",
    "calculate_gross_pay",
    "calculate_net_pay",
    "calculate_payroll",
    "calculate_voluntary_deductions",
    # Analytics
    "advance_ytd",
    "calculate_effective_tax_rates",
    "calculate_ytd_projections",
    "periods_remaining_in_year",
    # Validation
    "validate_payroll_inputs",
    # Presets
    "PRESETS",
    "apply_preset",
    "list_presets",
    # Schemas
    "AllowanceBreakdown",
    "DeductionBreakdown",
    "DeductionInputs",
    "EffectiveTaxRates",
    "GrossPayBreakdown",
    "PayrollInputs",
    "PayrollPreset",
    "PayrollResult",
    "ValidationResult",
    "VoluntaryDeductions",
    "YTDInputs",
    "YTDProjection",
]
