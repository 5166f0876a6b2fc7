"""
Release tag selection.

Picks the tags that bound a release out of the unordered tag set returned
by the repository.
"""

import logging
from typing import Iterable, Optional, Tuple

from .errors import NoTagFoundError
from .models import Tag
from .version import compare_versions

logger = logging.getLogger("changelog-generator.tags")

VERSION_FLOOR = "0.0.0"


class TagSelector:
    """
    Choose release tags by version order.

    Equal versions never displace a tag already chosen, so the first one
    seen wins.
    """

    @staticmethod
    def select_latest_pair(tags: Iterable[Tag]) -> Tuple[Tag, Optional[Tag]]:
        """
        Find the newest tag and the one it displaced.

        Args:
            tags: All tags of the repository, in any order

        Returns:
            (newest, second_newest) where second_newest is None if only one
            tag was ever newest

        Raises:
            NoTagFoundError: If there are no tags at all
        """
        newest: Optional[Tag] = None
        second: Optional[Tag] = None

        for tag in tags:
            if newest is None:
                newest = tag
                continue
            if compare_versions(tag.name, newest.name) > 0:
                second = newest
                newest = tag

        if newest is None:
            raise NoTagFoundError("No tag found in repository")

        logger.debug("Latest tag %s, previous %s", newest.name, second.name if second else None)
        return newest, second

    @staticmethod
    def select_previous(tags: Iterable[Tag], current: Tag) -> Optional[Tag]:
        """
        Find the newest tag strictly older than ``current``.

        Tags at or below version 0.0.0 are never chosen. Returns None when
        no tag qualifies.
        """
        best: Optional[Tag] = None
        best_name = VERSION_FLOOR

        for tag in tags:
            if compare_versions(tag.name, best_name) > 0 and compare_versions(tag.name, current.name) < 0:
                best = tag
                best_name = tag.name

        return best
