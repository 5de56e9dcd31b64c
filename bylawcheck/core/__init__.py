"""
bylawcheck Core Module

Data model and record normalization.
"""

from bylawcheck.core.models import (
    ProjectRecord,
    SetbackRules,
    RuleSet,
    BylawAnswer,
)
from bylawcheck.core.normalizer import (
    FIELD_ALIASES,
    normalize,
    normalize_key,
    coerce_number,
)

__all__ = [
    "ProjectRecord",
    "SetbackRules",
    "RuleSet",
    "BylawAnswer",
    "FIELD_ALIASES",
    "normalize",
    "normalize_key",
    "coerce_number",
]
