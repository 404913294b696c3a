from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for name-based exclusion rules.

    Exclusion rules decide which entries a traversal hides. They are applied to the
    base name of a file or directory (``"README.md"``, ``".git"``), never to the
    full path, so a rule that hides ``.git`` hides it at every depth. An excluded
    directory is pruned: the traversal never looks inside it.

    Individual rule addition is an optional capability that depends on the rule
    type.

    Example:
        >>> from buildfs.exclusion_rules.regex_rules import RegexExclusionRules
        >>> rules = RegexExclusionRules()  # hides dot-files by default
        >>> rules.exclude(".hidden")
        True
        >>> rules.exclude("visible.txt")
        False
        >>>
        >>> from buildfs.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> git_rules = GitIgnoreExclusionRules(["*.pyc"])
        >>> git_rules.exclude("module.pyc")
        True
    """

    @abstractmethod
    def exclude(self, name: str, is_dir: bool = False) -> bool:
        """
        Determine if an entry with the given base name should be excluded.

        Args:
            name (str): Base name of the file or directory, without any parent
                path components.
            is_dir (bool): True when the entry is a directory. Rule types that
                distinguish directories (e.g. gitignore patterns ending in ``/``)
                use this flag; others ignore it.

        Returns:
            bool: True if the entry should be excluded, False if it should be kept.
        """
        pass

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        This method may be overridden by subclasses that support programmatic rule
        addition. Rule types that don't support it use the default implementation
        which raises NotImplementedError.

        Args:
            rule (str): The exclusion rule to add. The format depends on the
                specific implementation (a regex, a gitignore pattern, ...).

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
