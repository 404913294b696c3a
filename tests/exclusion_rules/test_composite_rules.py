"""Unit tests for composite exclusion rules."""

import pytest

from buildfs.exclusion_rules.base_rules import BaseExclusionRules
from buildfs.exclusion_rules.composite_rules import CompositeExclusionRules
from buildfs.exclusion_rules.git_rules import GitIgnoreExclusionRules
from buildfs.exclusion_rules.regex_rules import RegexExclusionRules

class MockExclusionRules(BaseExclusionRules):
    """Mock exclusion rules for testing."""

    def __init__(self, excluded_names=None):
        self.excluded_names = excluded_names or []
        self.calls = []

    def exclude(self, name: str, is_dir: bool = False) -> bool:
        self.calls.append((name, is_dir))
        return name in self.excluded_names


class TestCompositeExclusionRules:
    """Test the CompositeExclusionRules class."""

    def test_init_with_rules(self):
        rule1 = MockExclusionRules()
        rule2 = MockExclusionRules()
        composite = CompositeExclusionRules([rule1, rule2])

        assert composite.rules == [rule1, rule2]

    def test_init_empty_raises(self):
        with pytest.raises(ValueError, match="At least one exclusion rule"):
            CompositeExclusionRules([])

    def test_init_invalid_rule_type(self):
        with pytest.raises(TypeError, match="Rule at index 1"):
            CompositeExclusionRules([MockExclusionRules(), "not a rule"])

    def test_exclude_is_logical_or(self):
        composite = CompositeExclusionRules([MockExclusionRules(["a"]), MockExclusionRules(["b"])])

        assert composite.exclude("a")
        assert composite.exclude("b")
        assert not composite.exclude("c")

    def test_exclude_short_circuits(self):
        first = MockExclusionRules(["a"])
        second = MockExclusionRules()
        composite = CompositeExclusionRules([first, second])

        assert composite.exclude("a", True)
        assert first.calls == [("a", True)]
        assert second.calls == []

    def test_exclude_passes_directory_flag(self):
        composite = CompositeExclusionRules([GitIgnoreExclusionRules(["dist/"])])
        assert composite.exclude("dist", True)
        assert not composite.exclude("dist", False)

    def test_dot_rule_combined_with_gitignore(self):
        composite = CompositeExclusionRules([RegexExclusionRules(), GitIgnoreExclusionRules(["*.log"])])

        assert composite.exclude(".env")
        assert composite.exclude("server.log")
        assert not composite.exclude("main.js")

    def test_add_rule_not_supported(self):
        composite = CompositeExclusionRules([MockExclusionRules()])
        with pytest.raises(NotImplementedError):
            composite.add_rule("*.txt")
