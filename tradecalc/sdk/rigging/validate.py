"""Advisory rigging geometry checks."""

from typing import Optional

from .rules import load_rigging_rules
from .schemas import GeometryValidation, RiggingInputs, RiggingRules


def validate_rigging_geometry(
    inputs: RiggingInputs,
    rules: Optional[RiggingRules] = None,
) -> GeometryValidation:
    """Warn about geometry outside recommended limits.

    The result is always valid: warnings inform the rigger but never block
    the analysis.
    """
    rules = rules or load_rigging_rules()
    angle = inputs.angle
    warnings = []

    if angle < rules.min_angle:
        warnings.append(
            f"Included angle too small ({angle:g}°). Minimum recommended: {rules.min_angle:g}°"
        )
    if angle > rules.max_angle:
        warnings.append(
            f"Included angle too large ({angle:g}°). Maximum recommended: {rules.max_angle:g}°"
        )
    if inputs.legs > rules.max_legs:
        warnings.append(f"Too many legs ({inputs.legs}). Maximum supported: {rules.max_legs}")
    if inputs.weight <= 0:
        warnings.append("Load weight must be greater than zero")
    if inputs.sling_wll <= 0:
        warnings.append("Sling WLL must be greater than zero")

    if angle > rules.wide_angle_warning:
        warnings.append("Wide angles significantly increase sling tension - consider reducing angle")
    if abs(inputs.cog_offset) > inputs.spacing / 2:
        warnings.append("CoG offset exceeds half the pick spacing - load may be unstable")

    return GeometryValidation(is_valid=True, warnings=warnings)
