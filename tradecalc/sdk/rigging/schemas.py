"""Pydantic schemas for rigging rules, inputs and results."""

from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..schemas import HitchType


# =============================================================================
# Rule table
# =============================================================================


class RiggingRules(BaseModel):
    """Rigging safety constants loaded from rules/rigging.yaml."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    gravity: float = Field(..., gt=0, description="Standard gravity (m/s^2)")
    design_factor: float = Field(..., gt=0, description="Applied when sizing minimum WLL")
    minimum_safety_margin: float = Field(..., description="Adequate margin threshold (%)")
    low_margin_warning: float = Field(..., description="Low margin warning threshold (%)")
    recommended_wll_buffer: float = Field(..., gt=0)
    balanced_ratio: float = Field(..., ge=1, description="Max/min leg tension still balanced")
    cog_sharing_threshold: float = Field(..., ge=0, description="CoG offset (mm) before lever sharing")
    min_angle: float
    max_angle: float
    wide_angle_warning: float
    max_legs: int = Field(..., ge=1)
    hitch_factors: Dict[str, float]

    @model_validator(mode="after")
    def check_hitch_factors(self) -> "RiggingRules":
        missing = [h.value for h in HitchType if h.value not in self.hitch_factors]
        if missing:
            raise ValueError(f"hitch_factors missing: {', '.join(missing)}")
        return self

    def hitch_factor(self, hitch_type: Union[HitchType, str]) -> float:
        """Capacity multiplier for a hitch relative to a vertical rating."""
        return self.hitch_factors[HitchType(hitch_type).value]


# =============================================================================
# Inputs
# =============================================================================


class RiggingInputs(BaseModel):
    """One rigging configuration.

    Out-of-range values are accepted; validate_rigging_geometry() reports them.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    hitch_type: HitchType = HitchType.VERTICAL
    weight: float = Field(default=5000, description="Load weight (kg)")
    legs: int = Field(default=2, description="Number of sling legs")
    angle: float = Field(default=60, description="Included angle between legs (degrees)")
    cog_offset: float = Field(default=0, description="CoG offset (mm), positive toward leg A")
    spacing: float = Field(default=2000, description="Pick point spacing (mm)")
    sling_wll: float = Field(default=4000, description="Sling WLL, vertical rating (kg)")


# =============================================================================
# Results
# =============================================================================


class AngleFactorResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    angle_factor: float
    leg_angle: float = Field(..., description="Angle of each leg from vertical (degrees)")
    efficiency: float


class LoadDistribution(BaseModel):
    """Per-leg tension before the angle factor is applied."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    leg_loads: List[float] = Field(..., description="Share of the load per leg (sums to 1)")
    leg_tensions: List[float] = Field(..., description="Vertical tension per leg (N)")
    max_tension: float
    min_tension: float
    is_balanced: bool
    imbalance_ratio: float


class CenterOfGravityEffects(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    moment_arm: float = Field(..., description="Absolute CoG offset (mm)")
    additional_load: float = Field(..., description="Extra load on the near leg (kg)")
    load_shift_percentage: float


class SafetyAnalysis(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    is_wll_adequate: bool
    safety_margin: float = Field(..., description="Capacity above tension (%)")
    min_required_wll: float = Field(..., description="kg")
    recommended_wll: float = Field(..., description="kg")
    warnings: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class GeometryValidation(BaseModel):
    """Advisory geometry check. Warnings never make the geometry invalid."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    is_valid: bool
    warnings: List[str] = Field(default_factory=list)


class SlingEfficiency(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    hitch_efficiency: float
    angle_efficiency: float
    overall_efficiency: float
    capacity_reduction: float = Field(..., description="Percent of vertical rating lost")


class RiggingResult(BaseModel):
    """Complete rigging analysis."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    angle_factor: AngleFactorResult
    load_distribution: LoadDistribution
    tension_per_leg: float = Field(..., description="Max leg tension with angle factor (kN)")
    force_per_leg: float = Field(..., description="kN")
    safety: SafetyAnalysis
    max_tension_kn: float
    min_required_wll: float = Field(..., description="kg")
    safety_check: bool
