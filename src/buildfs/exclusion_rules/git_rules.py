"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import GitIgnoreSpec

from buildfs.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax, matched against base names.

    Patterns are compiled with the pathspec library so they behave the way Git
    matches them: globs (``*``, ``?``, ``[abc]``), directory-only patterns ending
    in ``/``, negations starting with ``!``, and comment lines starting with ``#``.
    Later patterns override earlier ones, which is what makes negation useful.

    Because the rules see only an entry's base name, patterns containing a slash
    in the middle (``docs/build``) never match; use plain names and globs.

    Attributes:
        spec (GitIgnoreSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules(["*.pyc", "!keep.pyc", "build/"])
        >>> rules.exclude("module.pyc")
        True
        >>> rules.exclude("keep.pyc")
        False
        >>> rules.exclude("build", is_dir=True)
        True
        >>> rules.exclude("build")  # a regular file named build
        False
    """

    def __init__(
        self,
        patterns: Optional[Sequence[str]] = None,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
    ):
        """Initialize GitIgnoreExclusionRules.

        Args:
            patterns: Individual gitignore patterns, applied in order.
            rules_files: Path(s) to file(s) containing gitignore patterns, loaded
                after ``patterns``.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = list(patterns) if patterns is not None else []
        self.spec = GitIgnoreSpec.from_lines(self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, name: str, is_dir: bool = False) -> bool:
        """Check if a base name is matched by the loaded patterns.

        Args:
            name: Base name of the file or directory.
            is_dir: True for directories, so that patterns ending in ``/`` apply.

        Returns:
            True if the last pattern that matches the name is not a negation.
        """
        return bool(self.spec.match_file(f"{name}/" if is_dir else name))

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and append gitignore patterns from one or more files.

        Args:
            rules_files: Path-like object or sequence of path-like objects.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                self._lines.extend(f.read().splitlines())

        self.spec = GitIgnoreSpec.from_lines(self._lines)

    def add_rule(self, rule: str) -> None:
        """Add a single gitignore pattern after the existing ones.

        Args:
            rule: A gitignore pattern such as ``"*.log"`` or ``"!important.log"``.
        """
        self._lines.append(rule)
        self.spec = GitIgnoreSpec.from_lines(self._lines)

    def has_rules(self) -> bool:
        """Check if any patterns have been loaded."""
        return any(pattern.include is not None for pattern in self.spec.patterns)
