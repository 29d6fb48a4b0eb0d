"""JSON output for --format json.

Infinite ratios and margins (zero tension, zero minimum leg load) are
written as null so the output stays strict JSON.
"""

import json
import math

import click


def to_json_safe(value):
    """Replace non-finite floats with None, recursively."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    return value


def echo_json(data: dict) -> None:
    click.echo(json.dumps(to_json_safe(data), indent=2, default=str, allow_nan=False))
