"""
Data models for the changelog generator.

This module contains the shared data structures used across all modules.
"""

import datetime
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class CommitInfo:
    """Represents a single commit with its metadata."""
    sha: str
    message: str
    author: str
    date: datetime.datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:8]


@dataclass(frozen=True)
class Tag:
    """
    A release tag read from the repository.

    ``sha`` is the commit the tag points at. ``ref_sha`` is the object the
    ref itself points at, which is the tag object for annotated tags and the
    commit for lightweight ones.
    """
    name: str
    sha: str
    ref_sha: str = ""
    commit_date: Optional[datetime.datetime] = None

    @property
    def short_sha(self) -> str:
        return self.sha[:8]


@dataclass(frozen=True)
class RemoteInfo:
    """Web location of the project, derived from the origin remote."""
    base_url: str
    project: str
    use_http: bool = False


@dataclass
class ChangeLog:
    """One release section: commits grouped by type, in discovery order."""
    version: str
    head: Tag
    groups: Dict[str, List[CommitInfo]] = field(default_factory=dict)
