"""Rich renderer for payroll results.

Transforms SDK JSON output into formatted Rich tables.
"""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box


def render_payroll(console: Console, data: dict) -> None:
    """Render a payroll calculation as Rich tables.

    Args:
        console: Rich Console instance
        data: Dict with "inputs", "result", "validation", "effective_rates"
              and optionally "projection"
    """
    validation = data.get("validation", {})
    for error in validation.get("errors", []):
        console.print(Panel(f"[red]{error}[/red]", title="Error", border_style="red"))
    for warning in validation.get("warnings", []):
        console.print(Panel(f"[yellow]{warning}[/yellow]", title="Note", border_style="yellow"))

    _render_pay_table(console, data)
    _render_rates(console, data.get("effective_rates", {}))

    if data.get("projection"):
        _render_projection(console, data["projection"])


def _render_pay_table(console: Console, data: dict) -> None:
    inputs = data.get("inputs", {})
    gross = data["result"]["gross"]
    deductions = data["result"]["deductions"]

    table = Table(
        title=f"Pay Period: {inputs.get('pay_date', '?')} "
              f"({inputs.get('frequency', '?')}, {inputs.get('province', '?')})",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=25)
    table.add_column("Amount", justify="right", min_width=12)

    # Earnings
    table.add_row("[bold]EARNINGS[/bold]", "")
    table.add_row("  Straight Time", _fmt(gross["straight_time_pay"]))
    table.add_row("  Overtime 1.5x", _fmt(gross["overtime_half_pay"]))
    table.add_row("  Overtime 2x", _fmt(gross["overtime_double_pay"]))
    if gross["travel_pay"]:
        table.add_row("  Travel", _fmt(gross["travel_pay"]))
    if gross["shift_premium_pay"]:
        table.add_row("  [dim]incl. Shift Premium[/dim]", f"[dim]{_fmt(gross['shift_premium_pay'])}[/dim]")
    table.add_row("  [dim]Taxable Wage[/dim]", f"[dim]{_fmt(gross['wage'])}[/dim]")
    if gross["allowances"]:
        table.add_row("  Per Diem (non-taxable)", _fmt(gross["allowances"]))
    table.add_row("  Gross Pay", _fmt(gross["total"]))
    table.add_row("", "")

    # Statutory
    table.add_row("[bold]STATUTORY[/bold]", "")
    table.add_row("  CPP", _fmt(deductions["cpp1"]))
    if deductions["cpp2"]:
        table.add_row("  CPP2", _fmt(deductions["cpp2"]))
    table.add_row("  EI", _fmt(deductions["ei"]))
    table.add_row("  Federal Tax", _fmt(deductions["federal"]))
    table.add_row("  Provincial Tax", _fmt(deductions["provincial"]))
    table.add_row("", "")

    # Voluntary
    table.add_row("[bold]VOLUNTARY[/bold]", "")
    table.add_row("  Union Dues", _fmt(deductions["union"]))
    table.add_row("  RRSP", _fmt(deductions["rrsp"]))
    if deductions["other"]:
        table.add_row("  Other", _fmt(deductions["other"]))
    table.add_row("  [dim]Total Deductions[/dim]", f"[dim]{_fmt(deductions['total'])}[/dim]")
    table.add_row("", "")

    table.add_row(
        "[bold green]NET PAY[/bold green]",
        f"[bold green]{_fmt(data['result']['net'])}[/bold green]",
    )

    console.print(table)


def _render_rates(console: Console, rates: dict) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Income tax", _pct(rates.get("total_tax_rate")))
    table.add_row("CPP", _pct(rates.get("cpp_rate")))
    table.add_row("EI", _pct(rates.get("ei_rate")))
    table.add_row("All statutory", _pct(rates.get("total_statutory_rate")))

    console.print(Panel(table, title="Effective Rates", border_style="dim"))


def _render_projection(console: Console, projection: dict) -> None:
    table = Table(
        title=f"Year-End Projection ({projection['periods_remaining']} periods remaining)",
        box=box.SIMPLE,
    )
    table.add_column("", style="bold")
    table.add_column("Projected", justify="right")

    table.add_row("Gross Wage", _fmt(projection["projected_gross"]))
    table.add_row("CPP", _fmt(projection["projected_cpp1"]))
    table.add_row("CPP2", _fmt(projection["projected_cpp2"]))
    table.add_row("EI", _fmt(projection["projected_ei"]))
    table.add_row("Net (remaining periods)", _fmt(projection["projected_net"]))

    console.print(table)


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${amount:,.2f}"


def _pct(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:.2f}%"
