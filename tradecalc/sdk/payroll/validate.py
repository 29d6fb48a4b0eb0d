"""Advisory validation of payroll inputs.

Validation never blocks calculation: callers decide whether to proceed when
errors are reported. Errors flag values that make the result meaningless;
warnings flag values that are legal but unusual.
"""

from .schemas import DeductionInputs, PayrollInputs, ValidationResult, YTDInputs

# Labour standards review threshold for hours in one week
MAX_WEEKLY_HOURS = 84
# Typical annual RRSP deduction limit, as a percentage of earned income
RRSP_LIMIT_PERCENT = 18


def validate_payroll_inputs(
    payroll_inputs: PayrollInputs,
    deduction_inputs: DeductionInputs,
    ytd_inputs: YTDInputs,
) -> ValidationResult:
    """Check payroll inputs for out-of-range values.

    Returns:
        ValidationResult with human-readable errors and warnings
    """
    errors = []
    warnings = []

    if payroll_inputs.rate <= 0:
        errors.append("Base rate must be greater than 0")
    if payroll_inputs.straight_time < 0:
        errors.append("Straight time hours cannot be negative")
    if payroll_inputs.overtime_half < 0:
        errors.append("Overtime hours cannot be negative")
    if payroll_inputs.overtime_double < 0:
        errors.append("Double-time hours cannot be negative")

    if not 0 <= deduction_inputs.union_dues_percent <= 100:
        errors.append("Union dues percentage must be between 0 and 100")
    if not 0 <= deduction_inputs.rrsp_percent <= 100:
        errors.append("RRSP percentage must be between 0 and 100")

    if ytd_inputs.pensionable_earnings < 0:
        errors.append("YTD pensionable earnings cannot be negative")
    if ytd_inputs.insurable_earnings < 0:
        errors.append("YTD insurable earnings cannot be negative")

    if payroll_inputs.total_hours > MAX_WEEKLY_HOURS:
        warnings.append(
            f"Total hours exceed {MAX_WEEKLY_HOURS} per week - verify compliance with labour standards"
        )
    if deduction_inputs.rrsp_percent > RRSP_LIMIT_PERCENT:
        warnings.append(f"RRSP contribution exceeds typical {RRSP_LIMIT_PERCENT}% limit")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
