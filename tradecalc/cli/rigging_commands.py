"""Rigging analysis command."""

import sys

import click
from rich.console import Console

from tradecalc.sdk import ConfigError, RuleTableError
from tradecalc.sdk.rigging import (
    RiggingInputs,
    calculate_rigging_analysis,
    calculate_sling_efficiency,
    load_rigging_rules,
)
from tradecalc.sdk.schemas import HitchType

from .json_output import echo_json
from .renderers.rigging_renderer import render_rigging


@click.command("rigging")
@click.option("--hitch", "hitch_type", type=click.Choice([h.value for h in HitchType]),
              default="vertical", show_default=True)
@click.option("--weight", type=float, default=5000, show_default=True, help="Load weight (kg)")
@click.option("--legs", type=int, default=2, show_default=True, help="Number of sling legs")
@click.option("--angle", type=float, default=60, show_default=True, help="Included angle (degrees)")
@click.option("--offset", "cog_offset", type=float, default=0, show_default=True,
              help="CoG offset from center (mm), positive toward leg A")
@click.option("--spacing", type=float, default=2000, show_default=True, help="Pick point spacing (mm)")
@click.option("--wll", "sling_wll", type=float, default=4000, show_default=True,
              help="Sling WLL, vertical rating (kg)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def rigging(hitch_type, weight, legs, angle, cog_offset, spacing, sling_wll, output_format):
    """Analyze sling tension and capacity for a lift.

    Exits with status 1 when the safety check fails.

    Examples:
        trade-calc rigging --weight 5000 --legs 2 --angle 60 --wll 4000
        trade-calc rigging --hitch choker --offset 500 --format json
    """
    inputs = RiggingInputs(
        hitch_type=hitch_type,
        weight=weight,
        legs=legs,
        angle=angle,
        cog_offset=cog_offset,
        spacing=spacing,
        sling_wll=sling_wll,
    )

    try:
        rules = load_rigging_rules()
    except (FileNotFoundError, RuleTableError, ConfigError) as e:
        raise click.ClickException(str(e))

    result = calculate_rigging_analysis(inputs, rules)
    output = {
        "inputs": inputs.model_dump(mode="json"),
        "result": result.model_dump(),
        "sling_efficiency": calculate_sling_efficiency(inputs.hitch_type, inputs.angle, rules).model_dump(),
    }

    if output_format == "json":
        echo_json(output)
    else:
        render_rigging(Console(), output)

    if not result.safety_check:
        sys.exit(1)
