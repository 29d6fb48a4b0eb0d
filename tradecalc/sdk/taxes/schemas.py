"""Pydantic schemas for tax rule tables and tax engine results.

Rule schemas validate the rules/tax/*.yaml files and provide typed access
to CPP/EI limits, bracket thresholds and effective-dated rate schedules.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Rule tables
# =============================================================================


class CPPRules(BaseModel):
    """Canada Pension Plan contribution rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    ympe: float = Field(..., gt=0, description="Year's Maximum Pensionable Earnings")
    yampe: float = Field(..., gt=0, description="Year's Additional Maximum Pensionable Earnings")
    rate: float = Field(..., ge=0, le=1, description="CPP1 employee rate")
    cpp2_rate: float = Field(..., ge=0, le=1, description="CPP2 employee rate")
    basic_exemption: float = Field(..., ge=0, description="Annual basic exemption")

    @model_validator(mode="after")
    def check_ceilings(self) -> "CPPRules":
        if self.yampe < self.ympe:
            raise ValueError("yampe must not be below ympe")
        return self


class EIRules(BaseModel):
    """Employment Insurance premium rules."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    mie: float = Field(..., gt=0, description="Maximum Insurable Earnings")
    rate: float = Field(..., ge=0, le=1, description="Employee premium rate")


class RateSchedule(BaseModel):
    """Bracket rates in force from an effective date."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    effective: date
    rates: List[float] = Field(..., min_length=1)


class BracketTable(BaseModel):
    """Progressive bracket thresholds with effective-dated rate schedules.

    A table with N thresholds has N + 1 rates per schedule; the last rate
    applies to all income above the highest threshold.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    brackets: List[float]
    rate_schedules: List[RateSchedule] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_shape(self) -> "BracketTable":
        for lower, upper in zip(self.brackets, self.brackets[1:]):
            if upper <= lower:
                raise ValueError("brackets must be strictly increasing")
        for schedule in self.rate_schedules:
            if len(schedule.rates) != len(self.brackets) + 1:
                raise ValueError(
                    f"schedule effective {schedule.effective} has {len(schedule.rates)} rates, "
                    f"expected {len(self.brackets) + 1}"
                )
        effective_dates = [s.effective for s in self.rate_schedules]
        if effective_dates != sorted(effective_dates):
            raise ValueError("rate_schedules must be sorted by effective date")
        return self

    def rates_for(self, pay_date: date) -> List[float]:
        """Rates in force on pay_date.

        Dates before the first schedule use the first schedule.
        """
        selected = self.rate_schedules[0]
        for schedule in self.rate_schedules:
            if schedule.effective <= pay_date:
                selected = schedule
        return list(selected.rates)


class BasicPersonalAmountPhaseOut(BaseModel):
    """Federal BPA, reduced linearly between two income thresholds."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max: float = Field(..., ge=0)
    min: float = Field(..., ge=0)
    threshold_low: float = Field(..., ge=0)
    threshold_high: float = Field(..., ge=0)

    @model_validator(mode="after")
    def check_thresholds(self) -> "BasicPersonalAmountPhaseOut":
        if self.threshold_high <= self.threshold_low:
            raise ValueError("threshold_high must exceed threshold_low")
        return self

    def amount_for(self, annual_income: float) -> float:
        if annual_income <= self.threshold_low:
            return self.max
        if annual_income >= self.threshold_high:
            return self.min
        phase_out_ratio = (self.threshold_high - annual_income) / (
            self.threshold_high - self.threshold_low
        )
        return self.min + (self.max - self.min) * phase_out_ratio


class FederalTaxRules(BracketTable):
    """Federal income tax table and credits."""

    basic_personal_amount: BasicPersonalAmountPhaseOut
    canada_employment_amount: float = Field(..., ge=0)


class ProvincialTaxRules(BracketTable):
    """Provincial income tax table with a flat basic personal amount."""

    name: str
    basic_personal_amount: float = Field(..., ge=0)


class TaxRules(BaseModel):
    """Complete payroll deduction rules for a tax year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    tax_year: int
    cpp: CPPRules
    ei: EIRules
    federal: FederalTaxRules
    provinces: Dict[str, ProvincialTaxRules] = Field(default_factory=dict)

    def province(self, code: str) -> Optional[ProvincialTaxRules]:
        """Provincial table for a code, or None when the province is not supported."""
        return self.provinces.get(code.upper())


# =============================================================================
# Engine results
# =============================================================================


class CPPResult(BaseModel):
    """CPP1 and CPP2 contributions for one pay period."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    cpp1: float = Field(..., description="CPP1 contribution")
    cpp2: float = Field(..., description="CPP2 contribution")
    pensionable_earnings: float = Field(..., description="CPP1 contributory earnings this pay")
    cpp2_base: float = Field(..., description="Earnings between YMPE and YAMPE this pay")


class EIResult(BaseModel):
    """EI premium for one pay period."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    ei: float
    insurable_earnings: float = Field(..., description="Insurable earnings within the MIE this pay")


class TaxResult(BaseModel):
    """Federal and provincial income tax withheld for one pay period."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    federal: float
    provincial: float
    taxable_income: float = Field(..., description="Taxable income this pay, as given")
    annualized_income: float


class StatutoryDeductions(BaseModel):
    """CPP, EI and income tax for one pay period."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    cpp: CPPResult
    ei: EIResult
    tax: TaxResult
    total_statutory: float
