"""
Commit classification module.

This module maps commit messages onto the configured type keywords by
prefix and groups commits by type for rendering.
"""

from typing import Dict, List, Sequence, Tuple

from .config import DEFAULT_TYPES, OTHER_TYPE
from .models import CommitInfo


class CommitParser:
    """
    Classify commit messages by their leading type keyword.

    Each keyword is matched as written, upper-cased and capitalised, so
    ``fix:``, ``FIX:`` and ``Fix:`` all classify as ``fix``. Keywords are
    tried in order and the first match wins.

    Args:
        types: Type keywords in priority order
    """

    def __init__(self, types: Sequence[str] = DEFAULT_TYPES) -> None:
        self.rules: List[Tuple[str, Tuple[str, ...]]] = [
            (t, (t, t.upper(), t.capitalize())) for t in types
        ]

    def parse_type(self, message: str) -> str:
        """Return the type keyword for a message, or ``other``."""
        for keyword, variants in self.rules:
            if message.startswith(variants):
                return keyword
        return OTHER_TYPE


class CommitCategorizer:
    """
    Group commits by type using a CommitParser.

    Commits keep the order they were given in within each group.
    """

    def __init__(self, parser: CommitParser) -> None:
        self.parser = parser

    def categorize(self, commits: List[CommitInfo]) -> Dict[str, List[CommitInfo]]:
        """
        Group commits by their type.

        Args:
            commits: CommitInfo objects in history order

        Returns:
            Dictionary mapping commit type -> list of commits of that type
        """
        groups: Dict[str, List[CommitInfo]] = {}
        for commit in commits:
            groups.setdefault(self.parser.parse_type(commit.message), []).append(commit)
        return groups
