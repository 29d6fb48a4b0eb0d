"""Payroll input and result schemas.

Inputs accept out-of-range numbers (negative hours, percentages over 100)
so that calculation never fails on them; validate_payroll_inputs() reports
such values as advisory errors instead.
"""

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..schemas import PayFrequency, Province


# =============================================================================
# Inputs
# =============================================================================


class PayrollInputs(BaseModel):
    """One pay period's hours, rates and context."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(default=0, description="Base hourly rate ($/hr)")
    straight_time: float = Field(default=0, description="Regular hours")
    overtime_half: float = Field(default=0, description="Time-and-a-half hours")
    overtime_double: float = Field(default=0, description="Double-time hours")
    shift_premium: float = Field(default=0, description="Shift premium ($/hr, every hour worked)")

    travel_hours: float = Field(default=0)
    travel_rate: float = Field(default=0, description="Travel rate ($/hr)")
    per_diem: float = Field(default=0, description="Per diem ($/day, non-taxable)")
    days: float = Field(default=5, description="Days of per diem")

    pay_date: date = Field(default_factory=date.today)
    frequency: PayFrequency = PayFrequency.WEEKLY
    province: Province = Province.AB

    @property
    def total_hours(self) -> float:
        return self.straight_time + self.overtime_half + self.overtime_double


class DeductionInputs(BaseModel):
    """Voluntary deduction elections."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    union_dues_percent: float = Field(default=3.0, description="Union dues, % of gross wage")
    rrsp_percent: float = Field(default=0, description="RRSP contribution, % of gross wage")
    rrsp_at_source: bool = Field(
        default=True,
        description="RRSP deducted at source reduces taxable income in the same period",
    )
    other_deductions: float = Field(default=0, description="Flat other deductions ($)")


class YTDInputs(BaseModel):
    """Year-to-date accumulators, carried forward by the caller.

    The engine never updates these; use advance_ytd() after each period.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pensionable_earnings: float = 0
    insurable_earnings: float = 0
    cpp1_paid: float = 0
    cpp2_paid: float = 0
    ei_paid: float = 0


# =============================================================================
# Results
# =============================================================================


class GrossPayBreakdown(BaseModel):
    """Gross pay by component.

    shift_premium_pay is informational: the premium is already included in
    the straight time and overtime amounts.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    straight_time_pay: float
    overtime_half_pay: float
    overtime_double_pay: float
    shift_premium_pay: float
    travel_pay: float
    wage: float = Field(..., description="Taxable wage")
    allowances: float = Field(..., description="Non-taxable allowances (per diem)")
    total: float = Field(..., description="wage + allowances")


class AllowanceBreakdown(BaseModel):
    """Per diem split by tax treatment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_amount: float
    taxable_amount: float
    non_taxable_amount: float
    daily_rate: float
    days: float


class VoluntaryDeductions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    union: float
    rrsp: float
    other: float
    total_voluntary: float


class DeductionBreakdown(BaseModel):
    """Voluntary and statutory deductions for one period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    union: float
    rrsp: float
    other: float
    cpp1: float
    cpp2: float
    ei: float
    federal: float
    provincial: float
    total: float

    @property
    def total_statutory(self) -> float:
        return self.cpp1 + self.cpp2 + self.ei + self.federal + self.provincial

    @property
    def total_voluntary(self) -> float:
        return self.union + self.rrsp + self.other


class PayrollResult(BaseModel):
    """Complete result for one pay period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross: GrossPayBreakdown
    deductions: DeductionBreakdown
    net: float


class ValidationResult(BaseModel):
    """Advisory validation outcome. Errors do not block calculation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class EffectiveTaxRates(BaseModel):
    """Deductions as a percentage of gross wage."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_tax_rate: float = 0
    federal_tax_rate: float = 0
    provincial_tax_rate: float = 0
    cpp_rate: float = 0
    ei_rate: float = 0
    total_statutory_rate: float = 0


class YTDProjection(BaseModel):
    """Year-end totals if the current period repeats for the rest of the year."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    projected_gross: float
    projected_cpp1: float
    projected_cpp2: float
    projected_ei: float
    projected_net: float
    periods_remaining: int


class PayrollPreset(BaseModel):
    """Named set of input overrides for common job patterns."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    description: str = ""
    inputs: dict = Field(default_factory=dict)
