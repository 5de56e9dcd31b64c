"""
Default Bylaw Limits

Static BBMP 2019 limits used whenever the knowledge service is unavailable.
An optional YAML/JSON rules document can override them at startup; the
loaded RuleSet is immutable and passed explicitly to the resolvers.
"""

from pathlib import Path
from typing import Optional, Union
import logging

import yaml
from pydantic import ValidationError

from bylawcheck.core.models import RuleSet, SetbackRules

logger = logging.getLogger(__name__)


DEFAULT_RULES = RuleSet(
    height_max=12,
    height_clause="BBMP 2019, Clause 4.3.2",
    setback=SetbackRules(
        front=7,
        rear=3,
        side=3,
        front_clause="Clause 5.1.1",
        rear_clause="Clause 5.1.2",
        side_clause="Clause 5.1.3",
    ),
    parking_min=15,
    parking_clause="Clause 6.2.1",
    far_max=1.25,
    far_clause="Table 5.4.1",
)


def load_default_rules(path: Optional[Union[str, Path]] = None) -> RuleSet:
    """
    Load default limits from a rules document.

    Args:
        path: YAML or JSON file shaped like RuleSet. None skips loading.

    Returns:
        Loaded RuleSet, or DEFAULT_RULES if the file is absent or invalid
    """
    if path is None:
        return DEFAULT_RULES

    path = Path(path)
    if not path.exists():
        logger.warning(f"Rules file not found: {path}; using built-in defaults")
        return DEFAULT_RULES

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        rules = RuleSet(**data)
    except (OSError, ValueError, yaml.YAMLError, ValidationError, TypeError) as e:
        logger.error(f"Failed to load default rules from {path}: {e}")
        return DEFAULT_RULES

    logger.info(f"Loaded default rules from {path}")
    return rules
