"""
bylawcheck Configuration Module

Contains centralized configuration and the default bylaw limits.
"""

from bylawcheck.config.settings import (
    Settings,
    KnowledgeServiceConfig,
    get_settings,
)
from bylawcheck.config.default_rules import (
    DEFAULT_RULES,
    load_default_rules,
)

__all__ = [
    "Settings",
    "KnowledgeServiceConfig",
    "get_settings",
    "DEFAULT_RULES",
    "load_default_rules",
]
