"""Named input presets for common job patterns."""

from typing import Dict

from .schemas import PayrollInputs, PayrollPreset


PRESETS: Dict[str, PayrollPreset] = {
    "shutdown": PayrollPreset(
        name="shutdown",
        description="Shutdown - 12s, 7-on",
        inputs={
            "rate": 64,
            "straight_time": 40,
            "overtime_half": 16,
            "overtime_double": 8,
            "shift_premium": 1.5,
            "per_diem": 150,
            "days": 7,
        },
    ),
    "shop": PayrollPreset(
        name="shop",
        description="Shop - 40h, no OT",
        inputs={
            "rate": 48,
            "straight_time": 40,
            "overtime_half": 0,
            "overtime_double": 0,
            "shift_premium": 0,
            "per_diem": 0,
            "days": 5,
        },
    ),
}


def list_presets() -> list[PayrollPreset]:
    return list(PRESETS.values())


def apply_preset(payroll_inputs: PayrollInputs, name: str) -> PayrollInputs:
    """Return a copy of payroll_inputs with a preset's values applied.

    Raises:
        KeyError: If no preset has that name
    """
    if name not in PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESETS))}")
    return PayrollInputs.model_validate({**payroll_inputs.model_dump(), **PRESETS[name].inputs})
