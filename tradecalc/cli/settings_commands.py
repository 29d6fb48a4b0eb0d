"""Settings CLI commands for Trade Calc.

Manages settings.json - rules directory and CLI defaults.
"""

from pathlib import Path

import click

from tradecalc.sdk import (
    ConfigError,
    load_settings,
    set_setting,
    get_settings_path,
    get_rules_dir,
)
from tradecalc.sdk.schemas import PayFrequency, Province


SETTING_KEYS = ("rules_dir", "province", "pay_frequency")


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - rules_dir: directory with tax/<year>.yaml and rigging.yaml
    - province: default province code (e.g., AB)
    - pay_frequency: default pay frequency (weekly, biweekly, semimonthly, monthly)
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo(f"Effective rules_dir: {get_rules_dir()}")


@settings.command("set")
@click.argument("key", type=click.Choice(SETTING_KEYS))
@click.argument("value", required=False)
@click.option("--clear", is_flag=True, help="Remove the setting, revert to default")
def settings_set(key, value, clear):
    """Set or clear a setting.

    Examples:
        trade-calc settings set province AB
        trade-calc settings set rules_dir ~/trade-calc-rules
        trade-calc settings set rules_dir --clear
    """
    if clear:
        path = set_setting(key, None)
        click.echo(f"Cleared {key}.")
        click.echo(f"Saved to: {path}")
        return

    if value is None:
        raise click.UsageError("VALUE is required unless --clear is given.")

    if key == "rules_dir":
        rules_path = Path(value).expanduser().resolve()
        if not rules_path.is_dir():
            raise click.BadParameter(f"Not a directory: {rules_path}", param_hint="VALUE")
        value = str(rules_path)
    elif key == "province":
        value = value.upper()
        if value not in [p.value for p in Province]:
            raise click.BadParameter(f"Unknown province '{value}'", param_hint="VALUE")
    elif key == "pay_frequency":
        value = value.lower()
        if value not in [f.value for f in PayFrequency]:
            raise click.BadParameter(f"Unknown pay frequency '{value}'", param_hint="VALUE")

    try:
        path = set_setting(key, value)
    except ConfigError as e:
        raise click.ClickException(str(e))
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")
