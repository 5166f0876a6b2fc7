"""
Run configuration for the changelog generator.

A single ChangelogConfig is built at startup from the command line and the
repository's origin remote, then handed to each component. It is never
modified afterwards.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

DEFAULT_TYPES: Tuple[str, ...] = (
    "feat",
    "fix",
    "refactor",
    "style",
    "impr",
    "perf",
    "chore",
    "dep",
    "docs",
    "test",
    "typo",
    "revert",
    "merge",
    "wip",
)

OTHER_TYPE = "other"

DEFAULT_HEADER_LINES = 2


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def parse_skip_list(value: Optional[str]) -> FrozenSet[str]:
    """
    Parse a comma-separated list of commit messages to exclude.

    Entries are trimmed and empty entries are dropped.
    """
    return frozenset(_split_csv(value))


def parse_types(value: Optional[str]) -> Tuple[str, ...]:
    """Parse a comma-separated type order, falling back to DEFAULT_TYPES."""
    return _split_csv(value) or DEFAULT_TYPES


@dataclass(frozen=True)
class ChangelogConfig:
    """
    Settings shared by every stage of a run.

    Args:
        base_url: Web root of the hosting service, e.g. ``https://gitlab.com``
        project: Project path below the base URL, e.g. ``group/app``
        types: Recognised commit type keywords, in rendering order
        skip_messages: Commit messages (trimmed) that are left out entirely
        header_lines: Lines of the existing changelog kept above the new section
        include_merges: Whether merge commits are listed
        init: Whether to ignore the previous tag and walk the whole history
    """
    base_url: str = ""
    project: str = ""
    types: Tuple[str, ...] = DEFAULT_TYPES
    skip_messages: FrozenSet[str] = field(default_factory=lambda: frozenset({"skip"}))
    header_lines: int = DEFAULT_HEADER_LINES
    include_merges: bool = False
    init: bool = False

    def __post_init__(self) -> None:
        # Normalise whatever iterable the caller passed in
        object.__setattr__(self, "types", tuple(self.types))
        object.__setattr__(self, "skip_messages", frozenset(m.strip() for m in self.skip_messages))

    def should_skip(self, message: str) -> bool:
        """Return True when the trimmed message exactly equals a skip entry."""
        return message.strip() in self.skip_messages
