"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Exclusion rules that combine several rule objects.

    A path is excluded if ANY of the constituent rules excludes it. Rules are
    evaluated in order and evaluation stops at the first match.

    Attributes:
        rules (List[BaseExclusionRules]): The constituent exclusion rules.

    Example:
        >>> from treedump.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> logs = GitIgnoreExclusionRules()
        >>> logs.add_rule("*.log")
        >>> builds = GitIgnoreExclusionRules()
        >>> builds.add_rule("build/")
        >>> composite = CompositeExclusionRules([logs, builds])
        >>> composite.exclude("app.log"), composite.exclude("build/"), composite.exclude("main.py")
        (True, True, False)
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Sequence of exclusion rules to combine.

        Raises:
            ValueError: If rules is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        """Check if a path should be excluded by any constituent rule.

        Args:
            path: File or directory path to check.

        Returns:
            True if ANY constituent rule excludes the path.
        """
        return any(rule.exclude(path) for rule in self.rules)
