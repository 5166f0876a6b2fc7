"""
Local git repository access.

This module handles all interactions with the working checkout: listing
tags and remotes, resolving tag annotations, reading commits and walking
history. It uses GitPython and never modifies the repository.
"""

import datetime
import logging
from typing import Dict, Iterator, List, Optional

from .errors import RepositoryAccessError
from .links import parse_remote_url
from .models import CommitInfo, RemoteInfo, Tag

# External libs
try:
    import git
    from git.objects.util import from_timestamp
    from git.util import hex_to_bin
except Exception as e:
    raise RuntimeError("GitPython is required. Install with: pip install GitPython") from e

# Set up logging
logger = logging.getLogger("changelog-generator.fetcher")

_GIT_ERRORS = (git.exc.GitError, git.exc.BadName, git.exc.BadObject, ValueError)


def _to_commit_info(commit: "git.Commit") -> CommitInfo:
    return CommitInfo(
        sha=commit.hexsha,
        message=commit.message,
        author=commit.author.name or "",
        date=commit.authored_datetime,
    )


class GitRepoFetcher:
    """
    Read tags, remotes and commits from a local checkout.

    Args:
        path: Path to the working tree (or bare repository).

    Raises:
        RepositoryAccessError: If the path is not a git repository.
    """

    def __init__(self, path: str) -> None:
        try:
            self._repo = git.Repo(path)
            logger.debug("Opened repository at %s", path)
        except _GIT_ERRORS as e:
            logger.error("Failed to open repository %s: %s", path, e)
            raise RepositoryAccessError(f"Cannot open repository at {path}: {e}") from e

    def list_tags(self) -> List[Tag]:
        """
        List every tag that points at a commit.

        Tags pointing at trees or blobs are ignored.
        """
        try:
            refs = list(self._repo.tags)
        except _GIT_ERRORS as e:
            raise RepositoryAccessError(f"Failed to list tags: {e}") from e

        tags: List[Tag] = []
        for ref in refs:
            try:
                commit = ref.commit
            except _GIT_ERRORS as e:
                logger.debug("Ignoring tag %s: %s", ref.name, e)
                continue
            tags.append(Tag(
                name=ref.name,
                sha=commit.hexsha,
                ref_sha=ref.object.hexsha,
                commit_date=commit.authored_datetime,
            ))

        logger.info("Found %d tags", len(tags))
        return tags

    def list_remotes(self) -> Dict[str, str]:
        """Return remote name -> first configured URL."""
        remotes: Dict[str, str] = {}
        try:
            for remote in self._repo.remotes:
                url = next(iter(remote.urls), None)
                if url:
                    remotes[remote.name] = url
        except _GIT_ERRORS as e:
            raise RepositoryAccessError(f"Failed to list remotes: {e}") from e
        return remotes

    def remote_info(self, remote_name: str = "origin") -> RemoteInfo:
        """
        Derive the project's web location from a remote.

        Falls back to an empty location when the remote does not exist.
        """
        url = self.list_remotes().get(remote_name)
        if not url:
            logger.warning("No %s remote configured, links will be relative", remote_name)
            return RemoteInfo(base_url="", project="")
        return parse_remote_url(url)

    def resolve_tag_annotation(self, ref_sha: str) -> Optional[datetime.datetime]:
        """
        Return the tagger time of an annotated tag object.

        Returns None if ``ref_sha`` names a commit rather than a tag object.
        """
        try:
            info = self._repo.odb.info(hex_to_bin(ref_sha))
            if info.type != b"tag":
                return None
            obj = self._repo.rev_parse(ref_sha)
            return from_timestamp(obj.tagged_date, obj.tagger_tz_offset)
        except _GIT_ERRORS as e:
            raise RepositoryAccessError(f"Failed to read object {ref_sha}: {e}") from e

    def commit_at(self, sha: str) -> CommitInfo:
        """Read a single commit."""
        try:
            return _to_commit_info(self._repo.commit(sha))
        except _GIT_ERRORS as e:
            raise RepositoryAccessError(f"Failed to read commit {sha}: {e}") from e

    def walk_history(
        self,
        from_sha: str,
        since: Optional[datetime.datetime] = None,
        until: Optional[datetime.datetime] = None,
    ) -> Iterator[CommitInfo]:
        """
        Walk history backwards from ``from_sha``.

        Commits are yielded lazily in topological order, children before
        parents, following each line of history before switching to the next.
        ``since`` and ``until`` are inclusive bounds on the commit time.

        Raises:
            RepositoryAccessError: If the starting commit cannot be read, or
                the walk fails part way through.
        """
        try:
            self._repo.git.rev_parse("--verify", f"{from_sha}^{{commit}}")
        except _GIT_ERRORS as e:
            raise RepositoryAccessError(f"Cannot walk history from {from_sha}: {e}") from e

        kwargs = {"topo_order": True}
        if since is not None:
            kwargs["since"] = since.astimezone(datetime.timezone.utc).isoformat()
        if until is not None:
            kwargs["until"] = until.astimezone(datetime.timezone.utc).isoformat()
        logger.debug("Walking history from %s (since=%s, until=%s)", from_sha[:8], since, until)
        return self._iter_commits(from_sha, kwargs)

    def _iter_commits(self, from_sha: str, kwargs: Dict[str, object]) -> Iterator[CommitInfo]:
        try:
            for commit in self._repo.iter_commits(from_sha, **kwargs):
                yield _to_commit_info(commit)
        except _GIT_ERRORS as e:
            raise RepositoryAccessError(f"History walk from {from_sha} failed: {e}") from e
