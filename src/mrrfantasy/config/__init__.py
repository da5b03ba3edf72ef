"""Configuration helpers for squad rules and runtime settings."""

from .rules import DEFAULT_RULES, OUTFIELD_POSITIONS, SquadRules, get_rules, iter_rules
from .settings import Settings, configure_logging, load_settings

__all__ = [
    "DEFAULT_RULES",
    "OUTFIELD_POSITIONS",
    "Settings",
    "SquadRules",
    "configure_logging",
    "get_rules",
    "iter_rules",
    "load_settings",
]
