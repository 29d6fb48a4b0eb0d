"""Rule table inspection commands."""

import click
import yaml

from tradecalc.sdk import RuleTableError, get_rules_dir
from tradecalc.sdk.rigging import load_rigging_rules
from tradecalc.sdk.taxes import available_tax_years, load_tax_rules


@click.group()
def rules():
    """Inspect the tax and rigging rule tables."""
    pass


@rules.command("years")
def rules_years():
    """List tax years with a rule table."""
    years = available_tax_years()
    click.echo(f"Rules directory: {get_rules_dir()}")
    if not years:
        click.echo("No tax rule tables found.")
        return
    for year in years:
        click.echo(f"  {year}")


@rules.command("show")
@click.argument("year", required=False)
@click.option("--rigging", "show_rigging", is_flag=True, help="Show the rigging table instead")
def rules_show(year, show_rigging):
    """Show a tax rule table as loaded (default: latest year).

    Examples:
        trade-calc rules show 2025
        trade-calc rules show --rigging
    """
    try:
        if show_rigging:
            table = load_rigging_rules()
        else:
            if year is None:
                years = available_tax_years()
                if not years:
                    raise click.ClickException(f"No tax rule tables found in {get_rules_dir()}")
                year = years[0]
            elif not str(year).isdigit() or len(str(year)) != 4:
                raise click.BadParameter(f"Invalid year '{year}'. Must be 4 digits.")
            table = load_tax_rules(year)
    except (FileNotFoundError, RuleTableError) as e:
        raise click.ClickException(str(e))

    click.echo(yaml.safe_dump(table.model_dump(mode="json"), sort_keys=False), nl=False)
