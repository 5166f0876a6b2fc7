"""Tests for release tag selection."""

import pytest

from changelog_generator.errors import NoTagFoundError
from changelog_generator.models import Tag
from changelog_generator.tags import TagSelector


def tag(name: str, sha: str = "") -> Tag:
    return Tag(name=name, sha=sha or name)


class TestSelectLatestPair:

    def test_newest_and_previous(self):
        newest, previous = TagSelector.select_latest_pair([tag("v0.9.0"), tag("v1.0.0"), tag("v1.1.0")])
        assert newest.name == "v1.1.0"
        assert previous.name == "v1.0.0"

    def test_previous_is_the_displaced_tag(self):
        newest, previous = TagSelector.select_latest_pair([tag("v1.0.0"), tag("v1.1.0"), tag("v0.9.0")])
        assert (newest.name, previous.name) == ("v1.1.0", "v1.0.0")

    def test_single_tag(self):
        newest, previous = TagSelector.select_latest_pair([tag("v1.0.0")])
        assert newest.name == "v1.0.0"
        assert previous is None

    def test_newest_first_has_no_previous(self):
        newest, previous = TagSelector.select_latest_pair([tag("v2.0.0"), tag("v1.0.0")])
        assert newest.name == "v2.0.0"
        assert previous is None

    def test_numeric_order(self):
        newest, previous = TagSelector.select_latest_pair([tag("1.9.0"), tag("1.10.0")])
        assert (newest.name, previous.name) == ("1.10.0", "1.9.0")

    def test_equal_versions_keep_first_seen(self):
        newest, previous = TagSelector.select_latest_pair([tag("v1.0.0", "first"), tag("1.0.0", "second")])
        assert newest.sha == "first"
        assert previous is None

    def test_no_tags(self):
        with pytest.raises(NoTagFoundError):
            TagSelector.select_latest_pair([])

    def test_accepts_any_iterable(self):
        newest, _ = TagSelector.select_latest_pair(t for t in [tag("v0.1.0"), tag("v0.2.0")])
        assert newest.name == "v0.2.0"


class TestSelectPrevious:

    def test_newest_older_tag(self):
        tags = [tag("v1.2.0"), tag("v0.9.0"), tag("v1.1.0"), tag("v1.0.0")]
        assert TagSelector.select_previous(tags, tag("v1.2.0")).name == "v1.1.0"

    def test_ignores_newer_tags(self):
        tags = [tag("v2.0.0"), tag("v1.0.0"), tag("v1.5.0")]
        assert TagSelector.select_previous(tags, tag("v1.5.0")).name == "v1.0.0"

    def test_none_when_oldest(self):
        tags = [tag("v1.0.0"), tag("v1.1.0")]
        assert TagSelector.select_previous(tags, tag("v1.0.0")) is None

    def test_floor_is_exclusive(self):
        tags = [tag("0.0.0"), tag("v0.0"), tag("v1.0.0")]
        assert TagSelector.select_previous(tags, tag("v1.0.0")) is None

    def test_equal_versions_keep_first_seen(self):
        tags = [tag("v0.9.0", "first"), tag("0.9.0", "second")]
        assert TagSelector.select_previous(tags, tag("v1.0.0")).sha == "first"

    def test_empty(self):
        assert TagSelector.select_previous([], tag("v1.0.0")) is None
