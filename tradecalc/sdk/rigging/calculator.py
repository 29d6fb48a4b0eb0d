"""Rigging load calculations.

Pipeline for one configuration:
1. Angle factor from the included angle between legs
2. Per-leg load shares (lever-arm sharing for an off-center two-leg pick)
3. Maximum leg tension x angle factor
4. Sling capacity check against the hitch-adjusted WLL

Forces are in newtons internally; results report kN and kg as noted on
the result schemas. Nothing here raises on odd geometry; see
validate_rigging_geometry() for advisory warnings.
"""

import logging
import math
from typing import List, Optional, Union

from ..schemas import HitchType
from .rules import load_rigging_rules
from .schemas import (
    AngleFactorResult,
    CenterOfGravityEffects,
    LoadDistribution,
    RiggingInputs,
    RiggingResult,
    RiggingRules,
    SafetyAnalysis,
    SlingEfficiency,
)
from .validate import validate_rigging_geometry

logger = logging.getLogger(__name__)


def calculate_angle_factor(
    included_angle: float,
    rules: Optional[RiggingRules] = None,
) -> AngleFactorResult:
    """Tension multiplier for legs spread at an included angle.

    Each leg hangs at half the included angle from vertical, so its tension
    is the vertical share divided by cos(leg angle).

    rules is unused: the factor is pure geometry. It is accepted so every
    rigging calculation takes the same optional table.

    Example: 60 degrees -> leg angle 30 -> factor 1.1547, efficiency 0.866
    """
    leg_angle = included_angle / 2
    angle_factor = 1 / math.cos(math.radians(leg_angle))
    return AngleFactorResult(
        angle_factor=angle_factor,
        leg_angle=leg_angle,
        efficiency=1 / angle_factor,
    )


def calculate_load_distribution(
    weight: float,
    legs: int,
    cog_offset: float,
    spacing: float,
    rules: Optional[RiggingRules] = None,
) -> LoadDistribution:
    """Split a load across sling legs.

    Legs share equally, except a two-leg pick with its CoG off center: each
    leg then carries the fraction of the load given by the lever arm to the
    other leg.

    Args:
        weight: Load weight (kg)
        legs: Number of legs (values below 1 are treated as 1)
        cog_offset: CoG offset from center (mm), positive toward leg A
        spacing: Distance between pick points (mm)
    """
    rules = rules or load_rigging_rules()
    legs = max(1, int(legs))

    leg_loads: List[float] = [1 / legs] * legs
    if legs == 2 and spacing > 0 and abs(cog_offset) > rules.cog_sharing_threshold:
        distance_to_a = spacing / 2 + cog_offset
        distance_to_b = spacing / 2 - cog_offset
        total_distance = distance_to_a + distance_to_b
        leg_loads = [distance_to_b / total_distance, distance_to_a / total_distance]

    total_force = weight * rules.gravity
    leg_tensions = [total_force * share for share in leg_loads]
    max_tension = max(leg_tensions)
    min_tension = min(leg_tensions)

    if min_tension > 0:
        imbalance_ratio = max_tension / min_tension
    elif max_tension == min_tension == 0:
        imbalance_ratio = 1.0
    else:
        imbalance_ratio = math.inf

    return LoadDistribution(
        leg_loads=leg_loads,
        leg_tensions=leg_tensions,
        max_tension=max_tension,
        min_tension=min_tension,
        is_balanced=imbalance_ratio <= rules.balanced_ratio,
        imbalance_ratio=imbalance_ratio,
    )


def calculate_center_of_gravity_effects(
    weight: float,
    cog_offset: float,
    spacing: float,
) -> CenterOfGravityEffects:
    """How far an off-center CoG shifts load toward the near pick point."""
    if spacing <= 0:
        return CenterOfGravityEffects(moment_arm=0, additional_load=0, load_shift_percentage=0)

    moment_arm = abs(cog_offset)
    lever_ratio = moment_arm / (spacing / 2)
    return CenterOfGravityEffects(
        moment_arm=moment_arm,
        additional_load=weight * lever_ratio / 2,
        load_shift_percentage=lever_ratio / (1 + lever_ratio) * 100,
    )


def calculate_safety_factors(
    max_tension: float,
    sling_wll: float,
    hitch_type: Union[HitchType, str],
    rules: Optional[RiggingRules] = None,
) -> SafetyAnalysis:
    """Compare the worst leg tension against the sling's hitch-adjusted WLL.

    Args:
        max_tension: Worst leg tension including the angle factor (N)
        sling_wll: Sling working load limit, vertical rating (kg)
        hitch_type: Hitch configuration
    """
    rules = rules or load_rigging_rules()
    hitch = HitchType(hitch_type)

    effective_wll = sling_wll * rules.hitch_factor(hitch) * rules.gravity
    if max_tension > 0:
        safety_margin = (effective_wll - max_tension) / max_tension * 100
    else:
        safety_margin = math.inf
    is_adequate = safety_margin >= rules.minimum_safety_margin

    min_required_wll = max_tension * rules.design_factor / rules.gravity
    recommended_wll = min_required_wll * rules.recommended_wll_buffer

    warnings = []
    recommendations = []

    if not is_adequate:
        warnings.append(f"Insufficient sling capacity. Safety margin: {safety_margin:.1f}%")
        # Whole kilograms, halves rounding up
        recommendations.append(f"Use slings with minimum {math.floor(min_required_wll + 0.5)} kg WLL")
    if safety_margin < rules.low_margin_warning:
        warnings.append("Low safety margin - consider higher capacity slings")

    if hitch == HitchType.CHOKER:
        recommendations.append("Choker hitch reduces capacity to 75% of vertical rating")
    elif hitch == HitchType.BASKET:
        recommendations.append("Basket hitch doubles capacity but requires proper load support")

    return SafetyAnalysis(
        is_wll_adequate=is_adequate,
        safety_margin=safety_margin,
        min_required_wll=min_required_wll,
        recommended_wll=recommended_wll,
        warnings=warnings,
        recommendations=recommendations,
    )


def calculate_sling_efficiency(
    hitch_type: Union[HitchType, str],
    angle: float,
    rules: Optional[RiggingRules] = None,
) -> SlingEfficiency:
    """Combined capacity of a sling after hitch and angle losses."""
    rules = rules or load_rigging_rules()
    hitch_efficiency = rules.hitch_factor(hitch_type)
    angle_efficiency = calculate_angle_factor(angle, rules).efficiency
    overall = hitch_efficiency * angle_efficiency

    return SlingEfficiency(
        hitch_efficiency=hitch_efficiency,
        angle_efficiency=angle_efficiency,
        overall_efficiency=overall,
        capacity_reduction=(1 - overall) * 100,
    )


def calculate_rigging_analysis(
    inputs: RiggingInputs,
    rules: Optional[RiggingRules] = None,
) -> RiggingResult:
    """Run the full rigging analysis for one configuration.

    This is the main entry point. Geometry warnings are appended after the
    capacity warnings in the returned safety analysis.
    """
    rules = rules or load_rigging_rules()

    geometry = validate_rigging_geometry(inputs, rules)
    angle = calculate_angle_factor(inputs.angle, rules)
    distribution = calculate_load_distribution(
        inputs.weight, inputs.legs, inputs.cog_offset, inputs.spacing, rules
    )

    max_tension = distribution.max_tension * angle.angle_factor
    safety = calculate_safety_factors(max_tension, inputs.sling_wll, inputs.hitch_type, rules)
    safety = safety.model_copy(update={"warnings": safety.warnings + geometry.warnings})

    max_tension_kn = max_tension / 1000
    safety_check = safety.is_wll_adequate and geometry.is_valid

    logger.debug(
        f"rigging {inputs.hitch_type.value} {inputs.weight}kg x{inputs.legs} @ {inputs.angle}deg: "
        f"max tension {max_tension_kn:.2f} kN, margin {safety.safety_margin:.1f}%"
    )
    if not safety_check:
        logger.warning(
            f"rigging safety check failed: margin {safety.safety_margin:.1f}%, "
            f"minimum WLL {safety.min_required_wll:.0f} kg"
        )

    return RiggingResult(
        angle_factor=angle,
        load_distribution=distribution,
        tension_per_leg=max_tension_kn,
        force_per_leg=max_tension_kn,
        safety=safety,
        max_tension_kn=max_tension_kn,
        min_required_wll=safety.min_required_wll,
        safety_check=safety_check,
    )
