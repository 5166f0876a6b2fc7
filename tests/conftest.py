"""Shared pytest fixtures: an in-memory repository and commit/tag builders."""

import datetime
import sys
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import pytest

# Ensure project root is on sys.path for imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from changelog_generator.errors import RepositoryAccessError
from changelog_generator.models import CommitInfo, RemoteInfo, Tag

BASE_TIME = datetime.datetime(2024, 3, 1, 9, 30, tzinfo=datetime.timezone.utc)


def at(minutes: int) -> datetime.datetime:
    """A fixed point in time, ``minutes`` after BASE_TIME."""
    return BASE_TIME + datetime.timedelta(minutes=minutes)


def make_commit(sha: str, message: str, minutes: int = 0, author: str = "Alice") -> CommitInfo:
    return CommitInfo(sha=sha * 40 if len(sha) == 1 else sha, message=message, author=author, date=at(minutes))


def make_tag(name: str, commit: CommitInfo, ref_sha: Optional[str] = None) -> Tag:
    return Tag(name=name, sha=commit.sha, ref_sha=ref_sha or commit.sha, commit_date=commit.date)


class FakeRepository:
    """
    In-memory stand-in for GitRepoFetcher.

    ``history`` is a single line of commits, newest first. ``annotations``
    maps tag object ids to tagger times.
    """

    def __init__(
        self,
        history: List[CommitInfo],
        tags: Optional[List[Tag]] = None,
        annotations: Optional[Dict[str, datetime.datetime]] = None,
        remote: Optional[RemoteInfo] = None,
        fail_walk: bool = False,
    ) -> None:
        self.history = history
        self.tags = tags or []
        self.annotations = annotations or {}
        self.remote = remote or RemoteInfo(base_url="https://gitlab.example.com", project="group/app")
        self.fail_walk = fail_walk
        self.walks: List[dict] = []

    def list_tags(self) -> List[Tag]:
        return list(self.tags)

    def list_remotes(self) -> Dict[str, str]:
        return {"origin": f"{self.remote.base_url}/{self.remote.project}.git"}

    def remote_info(self, remote_name: str = "origin") -> RemoteInfo:
        return self.remote

    def resolve_tag_annotation(self, ref_sha: str) -> Optional[datetime.datetime]:
        if ref_sha in self.annotations:
            return self.annotations[ref_sha]
        if any(c.sha == ref_sha for c in self.history):
            return None
        raise RepositoryAccessError(f"unknown object {ref_sha}")

    def commit_at(self, sha: str) -> CommitInfo:
        for commit in self.history:
            if commit.sha == sha:
                return commit
        raise RepositoryAccessError(f"unknown commit {sha}")

    def walk_history(self, from_sha, since=None, until=None) -> Iterator[CommitInfo]:
        self.walks.append({"from": from_sha, "since": since, "until": until})
        if self.fail_walk:
            raise RepositoryAccessError("walk failed")
        shas = [c.sha for c in self.history]
        start = shas.index(from_sha) if from_sha in shas else len(shas)
        return (
            c for c in self.history[start:]
            if (since is None or c.date >= since) and (until is None or c.date <= until)
        )


@pytest.fixture
def release_history():
    """
    Two releases: v1.0.0 on ``c0`` and v1.1.0 on ``c4``, both annotated.

    Between them sit a feature, a skipped commit, a merge and a fix.
    """
    c0 = make_commit("0", "chore: initial import\n", minutes=0)
    c1 = make_commit("1", "fix: B\n", minutes=10)
    c2 = make_commit("2", "Merge branch 'topic' into 'main'\n", minutes=20)
    c3 = make_commit("3", "skip\n", minutes=30)
    c4 = make_commit("4", "feat: A\n", minutes=40)
    history = [c4, c3, c2, c1, c0]
    old = make_tag("v1.0.0", c0, ref_sha="a" * 40)
    new = make_tag("v1.1.0", c4, ref_sha="b" * 40)
    repo = FakeRepository(
        history,
        tags=[old, new],
        annotations={old.ref_sha: at(5), new.ref_sha: at(45)},
    )
    return repo, old, new
