"""
Commit range extraction.

Resolves the time window between two release tags and walks history to
collect the commits that belong to the newer release.
"""

import datetime
import logging
from itertools import dropwhile, takewhile
from typing import Iterable, List, Optional, Tuple

from .config import ChangelogConfig
from .errors import RepositoryAccessError
from .models import CommitInfo, Tag

logger = logging.getLogger("changelog-generator.extractor")

EPOCH = datetime.datetime.fromtimestamp(0, tz=datetime.timezone.utc)
MERGE_MARKER = "Merge"


class RangeExtractor:
    """
    Collect the commits introduced between two tags.

    Args:
        fetcher: Repository access object (see GitRepoFetcher)
        config: Run configuration (skip list, merge handling)
    """

    def __init__(self, fetcher, config: ChangelogConfig) -> None:
        self.fetcher = fetcher
        self.config = config

    def tag_time(self, tag: Tag) -> Optional[datetime.datetime]:
        """
        Time a tag was made.

        The tagger time for annotated tags, otherwise the author time of
        the tagged commit. Returns None if neither can be read.
        """
        try:
            tagged = self.fetcher.resolve_tag_annotation(tag.ref_sha or tag.sha)
            if tagged is not None:
                return tagged
        except RepositoryAccessError as e:
            logger.warning("Could not read annotation of tag %s: %s", tag.name, e)

        if tag.commit_date is not None:
            return tag.commit_date
        try:
            return self.fetcher.commit_at(tag.sha).date
        except RepositoryAccessError as e:
            logger.warning("Could not read commit of tag %s: %s", tag.name, e)
            return None

    def resolve_window(
        self, new_tag: Tag, old_tag: Optional[Tag]
    ) -> Tuple[Optional[datetime.datetime], datetime.datetime]:
        """
        Return (since, until) for the walk.

        ``until`` falls back to now and ``since`` to the Unix epoch when the
        tag time cannot be read. ``since`` is None when there is no old tag.
        """
        until = self.tag_time(new_tag)
        if until is None:
            logger.warning("Using current time as end of range for %s", new_tag.name)
            until = datetime.datetime.now(datetime.timezone.utc)

        since: Optional[datetime.datetime] = None
        if old_tag is not None:
            since = self.tag_time(old_tag)
            if since is None:
                logger.warning("Using epoch as start of range for %s", old_tag.name)
                since = EPOCH
        return since, until

    def _keep(self, commit: CommitInfo) -> bool:
        if self.config.should_skip(commit.message):
            logger.debug("Skipping %s: message is on skip list", commit.short_sha)
            return False
        if not self.config.include_merges and MERGE_MARKER in commit.message:
            logger.debug("Skipping merge commit %s", commit.short_sha)
            return False
        return True

    def select(
        self, history: Iterable[CommitInfo], new_tag: Tag, old_tag: Optional[Tag] = None
    ) -> List[CommitInfo]:
        """
        Filter a history walk down to the commits of one release.

        Collection starts at the commit ``new_tag`` points at and stops before
        the commit ``old_tag`` points at. Skipped and merge commits still
        count as start and stop markers.
        """
        started = dropwhile(lambda c: c.sha != new_tag.sha, history)
        if old_tag is not None:
            started = takewhile(lambda c: c.sha != old_tag.sha, started)
        return [c for c in started if self._keep(c)]

    def extract(self, new_tag: Tag, old_tag: Optional[Tag] = None) -> List[CommitInfo]:
        """
        Collect the commits of ``new_tag``'s release, newest first.

        A failed history walk yields an empty list rather than an error.
        """
        since, until = self.resolve_window(new_tag, old_tag)
        try:
            history = self.fetcher.walk_history(new_tag.sha, since=since, until=until)
            commits = self.select(history, new_tag, old_tag)
        except RepositoryAccessError as e:
            logger.warning("History walk failed, no commits collected: %s", e)
            return []

        logger.info(
            "Collected %d commits between %s and %s",
            len(commits), old_tag.name if old_tag else "start of history", new_tag.name,
        )
        return commits
