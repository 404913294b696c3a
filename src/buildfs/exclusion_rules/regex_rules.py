"""Exclusion rules based on regular expressions searched in base names."""

import re
from typing import List, Optional, Pattern, Sequence, Union

from .base_rules import BaseExclusionRules

# Names beginning with a period: dot-files and dot-directories.
DOT_PREFIX_PATTERN = r"^\."


class RegexExclusionRules(BaseExclusionRules):
    """Exclusion rules that hide entries whose base name matches a regular expression.

    Every pattern is applied with ``re.search`` against the entry's base name. An
    entry is excluded when any of the configured patterns is found. With no
    arguments the rules hide every name that begins with a period.

    Attributes:
        patterns (List[Pattern[str]]): Compiled patterns, in the order added.

    Example:
        >>> rules = RegexExclusionRules()
        >>> rules.exclude(".git", is_dir=True)
        True
        >>> rules.exclude("src", is_dir=True)
        False
        >>> rules = RegexExclusionRules([r"^\\.", r"~$"])
        >>> rules.exclude("notes.txt~")
        True
        >>> rules.add_rule(r"^node_modules$")
        >>> rules.exclude("node_modules", is_dir=True)
        True
    """

    def __init__(self, patterns: Optional[Union[str, Pattern[str], Sequence[Union[str, Pattern[str]]]]] = None):
        """Initialize RegexExclusionRules.

        Args:
            patterns: A single pattern or a sequence of patterns. Defaults to the
                dot-prefix pattern. Pass an empty sequence for rules that exclude
                nothing until patterns are added.

        Raises:
            re.error: If a pattern string is not a valid regular expression.
        """
        if patterns is None:
            patterns = [DOT_PREFIX_PATTERN]
        elif isinstance(patterns, (str, re.Pattern)):
            patterns = [patterns]

        self.patterns: List[Pattern[str]] = []
        for pattern in patterns:
            self.add_rule(pattern)

    def exclude(self, name: str, is_dir: bool = False) -> bool:
        """Check if a base name matches any configured pattern.

        Args:
            name: Base name of the file or directory.
            is_dir: Ignored; regex rules treat files and directories alike.

        Returns:
            True if any pattern is found in the name.
        """
        return any(pattern.search(name) for pattern in self.patterns)

    def add_rule(self, rule: Union[str, Pattern[str]]) -> None:
        """Add a regular expression to the rules.

        Args:
            rule: A pattern string or an already compiled expression.
        """
        self.patterns.append(re.compile(rule) if isinstance(rule, str) else rule)

    def has_rules(self) -> bool:
        """Check if any patterns are configured."""
        return bool(self.patterns)


def default_exclusion_rules() -> RegexExclusionRules:
    """Create the default rules, which hide dot-files and dot-directories.

    A fresh instance is returned on every call so that adding rules to one
    traversal's rules never leaks into another.
    """
    return RegexExclusionRules()
