"""Configuration management for Trade Calc.

Configuration is a single settings.json file of machine-specific settings:

- rules_dir: directory overriding the packaged rule tables. It mirrors the
  packaged layout: tax/<year>.yaml and rigging.yaml.
- province: default province code for the CLI (e.g., "AB")
- pay_frequency: default pay frequency for the CLI (e.g., "biweekly")

Config directory resolution:
1. TRADE_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/trade-calc/ (XDG_CONFIG_HOME fallback)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "trade-calc"
SETTINGS_FILENAME = "settings.json"

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when settings.json exists but cannot be read."""
    pass


class RuleTableError(Exception):
    """Raised when a rule table file fails validation."""

    def __init__(self, path: Path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid rule table {path}: {detail}")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TRADE_CALC_CONFIG_PATH environment variable
    2. ~/.config/trade-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TRADE_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not parse {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(f"{settings_file} must contain a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "rules_dir", "province")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    A value of None removes the key.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    if value is None:
        settings.pop(key, None)
    else:
        settings[key] = value
    return save_settings(settings)


def get_packaged_rules_dir() -> Path:
    """Get the rule tables shipped with the package."""
    return Path(__file__).parent.parent / "rules"


def get_rules_dir(override: Optional[Path] = None) -> Path:
    """Resolve the rule tables directory.

    Resolution order:
    1. Explicit override argument
    2. settings.json "rules_dir"
    3. Packaged rules (tradecalc/rules/)
    """
    if override is not None:
        return Path(override)

    custom = get_setting("rules_dir")
    if custom:
        logger.debug(f"using rules_dir from settings: {custom}")
        return Path(custom).expanduser()

    return get_packaged_rules_dir()
