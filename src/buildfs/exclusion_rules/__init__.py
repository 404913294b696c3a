"""Exclusion rules for hiding files and directories by base name."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .regex_rules import DOT_PREFIX_PATTERN, RegexExclusionRules, default_exclusion_rules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "DOT_PREFIX_PATTERN",
    "GitIgnoreExclusionRules",
    "RegexExclusionRules",
    "default_exclusion_rules",
]
