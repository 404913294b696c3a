"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Composite exclusion rules that combine multiple rule types.

    A name is excluded if ANY of the constituent rules excludes it. This is how the
    default dot-file rule is combined with user-supplied gitignore patterns:

    - Regex rules + Git rules
    - Several regex rule sets
    - Any custom rule combinations

    Attributes:
        rules (List[BaseExclusionRules]): List of constituent exclusion rules.

    Example:
        >>> from buildfs.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> from buildfs.exclusion_rules.regex_rules import RegexExclusionRules
        >>> composite = CompositeExclusionRules([RegexExclusionRules(), GitIgnoreExclusionRules(["*.log"])])
        >>> composite.exclude(".env")
        True
        >>> composite.exclude("server.log")
        True
        >>> composite.exclude("main.js")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Sequence of exclusion rules to combine. Each rule must implement
                  the BaseExclusionRules interface.

        Raises:
            ValueError: If rules list is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, name: str, is_dir: bool = False) -> bool:
        """Check if a name is excluded by any constituent rule.

        Uses short-circuit evaluation: stops as soon as any rule excludes the name.
        """
        return any(rule.exclude(name, is_dir) for rule in self.rules)
