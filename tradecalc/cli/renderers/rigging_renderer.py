"""Rich renderer for rigging analysis results."""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box


def render_rigging(console: Console, data: dict) -> None:
    """Render a rigging analysis as Rich tables.

    Args:
        console: Rich Console instance
        data: Dict with "inputs", "result" and "sling_efficiency"
    """
    inputs = data.get("inputs", {})
    result = data["result"]
    safety = result["safety"]

    status = "[bold green]PASS[/bold green]" if result["safety_check"] else "[bold red]FAIL[/bold red]"

    table = Table(
        title=f"Rigging: {inputs.get('weight', '?')} kg, {inputs.get('legs', '?')} leg(s), "
              f"{inputs.get('hitch_type', '?')} @ {inputs.get('angle', '?')}°",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=25)
    table.add_column("Value", justify="right", min_width=14)

    angle = result["angle_factor"]
    table.add_row("Angle Factor", f"{angle['angle_factor']:.3f}")
    table.add_row("Leg Angle", f"{angle['leg_angle']:.1f}°")
    table.add_row("", "")

    distribution = result["load_distribution"]
    for i, share in enumerate(distribution["leg_loads"]):
        table.add_row(f"  Leg {_leg_name(i)} Share", f"{share * 100:.1f}%")
    table.add_row("  Imbalance Ratio", _num(distribution["imbalance_ratio"], "{:.2f}"))
    table.add_row("", "")

    table.add_row("Max Leg Tension", f"{result['max_tension_kn']:.2f} kN")
    table.add_row("Safety Margin", _num(safety["safety_margin"], "{:.1f}%"))
    table.add_row("Minimum WLL", f"{safety['min_required_wll']:,.0f} kg")
    table.add_row("Recommended WLL", f"{safety['recommended_wll']:,.0f} kg")

    efficiency = data.get("sling_efficiency")
    if efficiency:
        table.add_row("Sling Efficiency", f"{efficiency['overall_efficiency'] * 100:.1f}%")
    table.add_row("", "")
    table.add_row("Safety Check", status)

    console.print(table)

    for warning in safety.get("warnings", []):
        console.print(Panel(f"[yellow]{warning}[/yellow]", title="Warning", border_style="yellow"))
    if safety.get("recommendations"):
        console.print(Panel(
            "\n".join(f"- {r}" for r in safety["recommendations"]),
            title="Recommendations",
            border_style="dim",
        ))


def _leg_name(index: int) -> str:
    return chr(ord("A") + index) if index < 26 else str(index + 1)


def _num(value, fmt: str) -> str:
    """Format a number that may be infinite."""
    if value is None:
        return "-"
    if value in (float("inf"), "inf", "Infinity"):
        return "∞"
    return fmt.format(value)
