"""Tax rule table loading.

Tables are YAML files at <rules_dir>/tax/<year>.yaml, validated into
TaxRules. Adding a tax year or a province is a data change only.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..config import RuleTableError, get_rules_dir
from ..schemas import DateLike, parse_date, province_code
from .schemas import TaxRules

logger = logging.getLogger(__name__)


def _get_tax_rules_dir(rules_dir: Optional[Path] = None) -> Path:
    """Get the tax rules directory path."""
    return get_rules_dir(rules_dir) / "tax"


def available_tax_years(rules_dir: Optional[Path] = None) -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    tax_dir = _get_tax_rules_dir(rules_dir)
    years = [int(p.stem) for p in tax_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=32)
def _load_tax_rules_file(config_file: Path) -> TaxRules:
    logger.debug(f"loading tax rules from {config_file}")
    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    try:
        return TaxRules.model_validate(data)
    except ValidationError as e:
        raise RuleTableError(config_file, str(e)) from e


def load_tax_rules(year, rules_dir: Optional[Path] = None) -> TaxRules:
    """Load tax rules for a specific year from tax/YYYY.yaml.

    Args:
        year: Tax year (int or 4-digit string)
        rules_dir: Optional rules directory (defaults to configured/packaged rules)

    Raises:
        FileNotFoundError: If no table exists for the year
        RuleTableError: If the table fails validation
    """
    config_file = _get_tax_rules_dir(rules_dir) / f"{year}.yaml"
    if not config_file.exists():
        raise FileNotFoundError(f"Tax rules file not found for year {year}: {config_file}")

    return _load_tax_rules_file(config_file.resolve())


def tax_rules_for_date(pay_date: DateLike, rules_dir: Optional[Path] = None) -> TaxRules:
    """Get the tax rules governing a pay date, with fallback to prior years.

    Uses the pay date's own year when a table exists, else the latest year
    before it, else the earliest year available.
    """
    target_year = parse_date(pay_date).year
    available_years = available_tax_years(rules_dir)
    if not available_years:
        raise FileNotFoundError(f"No tax rules found in {_get_tax_rules_dir(rules_dir)}")

    candidate_years = [y for y in available_years if y <= target_year]
    year = candidate_years[0] if candidate_years else available_years[-1]
    if year != target_year:
        logger.debug(f"no tax rules for {target_year}, using {year}")
    return load_tax_rules(year, rules_dir)


def clear_rules_cache() -> None:
    """Drop cached rule tables (after editing YAML files in place)."""
    _load_tax_rules_file.cache_clear()


def latest_tax_rules(rules_dir: Optional[Path] = None) -> TaxRules:
    """Load the most recent tax year available.

    Raises:
        FileNotFoundError: If the rules directory has no tax tables
    """
    available_years = available_tax_years(rules_dir)
    if not available_years:
        raise FileNotFoundError(f"No tax rules found in {_get_tax_rules_dir(rules_dir)}")
    return load_tax_rules(available_years[0], rules_dir)


def is_tax_supported(province, rules: Optional[TaxRules] = None) -> bool:
    """Whether provincial income tax is calculated for a province."""
    if rules is None:
        rules = latest_tax_rules()
    return rules.province(province_code(province)) is not None
