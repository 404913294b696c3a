"""Include/exclude regular-expression filters applied to full file paths."""

import re
from collections.abc import Mapping
from typing import Optional, Pattern, Union

PatternLike = Union[str, Pattern[str]]
FilterLike = Union[None, "PathFilter", PatternLike, Mapping[str, Optional[PatternLike]]]

# Default copy filter: any path containing at least one word character.
ANY_WORD_PATTERN = r"\w"


def _compile(pattern: Optional[PatternLike]) -> Optional[Pattern[str]]:
    if pattern is None:
        return None
    if isinstance(pattern, str):
        return re.compile(pattern)
    if isinstance(pattern, re.Pattern):
        return pattern
    raise TypeError(f"Pattern must be a string or compiled regular expression, got {type(pattern).__name__}")


class PathFilter:
    """A pair of optional regular expressions deciding which file paths are kept.

    A path passes the filter when the ``include`` pattern is absent or is found
    somewhere in the path, and the ``exclude`` pattern is absent or is not found
    in the path. Patterns are applied with ``re.search`` so they are unanchored
    unless the pattern itself uses ``^`` or ``$``.

    Attributes:
        include (Optional[Pattern[str]]): Pattern a path must contain.
        exclude (Optional[Pattern[str]]): Pattern a path must not contain.

    Example:
        >>> path_filter = PathFilter(include=r"\\.js$", exclude=r"\\.min\\.js$")
        >>> path_filter.matches("src/app.js")
        True
        >>> path_filter.matches("src/app.min.js")
        False
        >>> PathFilter.coerce(r"\\.txt$").matches("notes.txt")
        True
    """

    def __init__(self, include: Optional[PatternLike] = None, exclude: Optional[PatternLike] = None) -> None:
        """Initialize a PathFilter.

        Args:
            include: Pattern a path must contain. Strings are compiled.
            exclude: Pattern a path must not contain. Strings are compiled.

        Raises:
            TypeError: If a pattern is neither a string nor a compiled expression.
            re.error: If a pattern string is not a valid regular expression.
        """
        self.include = _compile(include)
        self.exclude = _compile(exclude)

    @classmethod
    def coerce(cls, value: FilterLike) -> "PathFilter":
        """Build a PathFilter from any of the accepted filter forms.

        Args:
            value: ``None`` (no filtering), an existing ``PathFilter``, a single
                pattern (treated as ``include``), or a mapping with optional
                ``"include"`` and ``"exclude"`` keys.

        Returns:
            The corresponding PathFilter.

        Raises:
            TypeError: If the value is of an unsupported type.
        """
        if value is None:
            return cls()
        if isinstance(value, PathFilter):
            return value
        if isinstance(value, (str, re.Pattern)):
            return cls(include=value)
        if isinstance(value, Mapping):
            unknown = set(value) - {"include", "exclude"}
            if unknown:
                raise TypeError(f"Unsupported filter keys: {', '.join(sorted(unknown))}")
            return cls(include=value.get("include"), exclude=value.get("exclude"))
        raise TypeError(f"Unsupported filter type: {type(value).__name__}")

    def matches(self, path: str) -> bool:
        """Check whether a path passes both the include and exclude patterns."""
        if self.include is not None and not self.include.search(path):
            return False
        if self.exclude is not None and self.exclude.search(path):
            return False
        return True

    def __repr__(self) -> str:
        include = self.include.pattern if self.include is not None else None
        exclude = self.exclude.pattern if self.exclude is not None else None
        return f"PathFilter(include={include!r}, exclude={exclude!r})"
