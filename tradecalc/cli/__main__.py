"""Trade Calc CLI - Payroll deductions and rigging safety from the command line."""

import logging

import click

from tradecalc import __version__

from .payroll_commands import payroll as payroll_command
from .rigging_commands import rigging as rigging_command
from .rules_commands import rules as rules_group
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="trade-calc")
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details to stderr.")
def cli(verbose):
    """Trade Calc - Payroll and rigging calculations for trades work.

    Rule tables are loaded from (in order):

    \b
    1. settings.json 'rules_dir' key (set via 'settings set rules_dir')
    2. Tables packaged with trade-calc

    Settings live in TRADE_CALC_CONFIG_PATH, else ~/.config/trade-calc/.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(payroll_command)
cli.add_command(rigging_command)
cli.add_command(rules_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
