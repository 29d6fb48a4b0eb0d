"""Trade Calc SDK - Payroll deduction and rigging safety calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_packaged_rules_dir,
    get_rules_dir,
    ConfigError,
    RuleTableError,
)

from .schemas import (
    HitchType,
    PayFrequency,
    Province,
    PAY_PERIODS,
    get_pay_periods,
    parse_date,
)

from .taxes import (
    available_tax_years,
    calculate_cpp,
    calculate_ei,
    calculate_income_tax,
    calculate_statutory_deductions,
    load_tax_rules,
    round_cents,
    tax_rules_for_date,
)

from .payroll import (
    DeductionInputs,
    PayrollInputs,
    PayrollResult,
    YTDInputs,
    advance_ytd,
    apply_preset,
    calculate_effective_tax_rates,
    calculate_payroll,
    calculate_ytd_projections,
    periods_remaining_in_year,
    validate_payroll_inputs,
)

from .rigging import (
    RiggingInputs,
    RiggingResult,
    calculate_rigging_analysis,
    calculate_sling_efficiency,
    load_rigging_rules,
    validate_rigging_geometry,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_packaged_rules_dir",
    "get_rules_dir",
    "ConfigError",
    "RuleTableError",
    # Shared schemas
    "HitchType",
    "PayFrequency",
    "Province",
    "PAY_PERIODS",
    "get_pay_periods",
    "parse_date",
    # Taxes
    "available_tax_years",
    "calculate_cpp",
    "calculate_ei",
    "calculate_income_tax",
    "calculate_statutory_deductions",
    "load_tax_rules",
    "round_cents",
    "tax_rules_for_date",
    # Payroll
    "DeductionInputs",
    "PayrollInputs",
    "PayrollResult",
    "YTDInputs",
    "advance_ytd",
    "apply_preset",
    "calculate_effective_tax_rates",
    "calculate_payroll",
    "calculate_ytd_projections",
    "periods_remaining_in_year",
    "validate_payroll_inputs",
    # Rigging
    "RiggingInputs",
    "RiggingResult",
    "calculate_rigging_analysis",
    "calculate_sling_efficiency",
    "load_rigging_rules",
    "validate_rigging_geometry",
]
