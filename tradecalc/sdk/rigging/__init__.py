"""rigging - Sling load and capacity analysis.

Scope:
- Angle factor for legs spread at an included angle
- Load sharing across legs, with lever-arm sharing for off-center two-leg picks
- Sling capacity check against hitch-adjusted WLL, with warnings and
  recommendations
- Advisory geometry warnings

Constraints:
- Pure calculation; constants loaded from rules/rigging.yaml
- Geometry warnings never block a calculation

Usage:
    from tradecalc.sdk.rigging import RiggingInputs, calculate_rigging_analysis

    result = calculate_rigging_analysis(RiggingInputs(weight=5000, angle=60))
"""

from .calculator import (
    calculate_angle_factor,
    calculate_center_of_gravity_effects,
    calculate_load_distribution,
    calculate_rigging_analysis,
    calculate_safety_factors,
    calculate_sling_efficiency,
)

from .validate import validate_rigging_geometry

from .rules import clear_rigging_rules_cache, load_rigging_rules

from .schemas import (
    AngleFactorResult,
    CenterOfGravityEffects,
    GeometryValidation,
    LoadDistribution,
    RiggingInputs,
    RiggingResult,
    RiggingRules,
    SafetyAnalysis,
    SlingEfficiency,
)

__all__ = [
    # Calculation
    "calculate_angle_factor",
    "calculate_center_of_gravity_effects",
    "calculate_load_distribution",
    "calculate_rigging_analysis",
    "calculate_safety_factors",
    "calculate_sling_efficiency",
    # Validation
    "validate_rigging_geometry",
    # Rules
    "clear_rigging_rules_cache",
    "load_rigging_rules",
    # Schemas
    "AngleFactorResult",
    "CenterOfGravityEffects",
    "GeometryValidation",
    "LoadDistribution",
    "RiggingInputs",
    "RiggingResult",
    "RiggingRules",
    "SafetyAnalysis",
    "SlingEfficiency",
]
