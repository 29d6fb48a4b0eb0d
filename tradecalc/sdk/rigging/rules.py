"""Rigging rule table loading from <rules_dir>/rigging.yaml."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..config import RuleTableError, get_rules_dir
from .schemas import RiggingRules

logger = logging.getLogger(__name__)

RIGGING_RULES_FILENAME = "rigging.yaml"


@lru_cache(maxsize=8)
def _load_rigging_rules_file(config_file: Path) -> RiggingRules:
    logger.debug(f"loading rigging rules from {config_file}")
    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    try:
        return RiggingRules.model_validate(data)
    except ValidationError as e:
        raise RuleTableError(config_file, str(e)) from e


def load_rigging_rules(rules_dir: Optional[Path] = None) -> RiggingRules:
    """Load rigging constants.

    Raises:
        FileNotFoundError: If rigging.yaml is missing from the rules directory
        RuleTableError: If the table fails validation
    """
    config_file = get_rules_dir(rules_dir) / RIGGING_RULES_FILENAME
    if not config_file.exists():
        raise FileNotFoundError(f"Rigging rules file not found: {config_file}")

    return _load_rigging_rules_file(config_file.resolve())


def clear_rigging_rules_cache() -> None:
    _load_rigging_rules_file.cache_clear()
