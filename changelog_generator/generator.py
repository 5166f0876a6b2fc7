"""
Changelog Generation Module

This module contains the ChangelogGenerator class responsible for turning
the commits of one release into a Markdown changelog section.
"""

import datetime
from typing import Dict, List, Optional, Tuple

from .config import ChangelogConfig
from .links import LinkBuilder
from .models import ChangeLog, CommitInfo, Tag
from .parser import CommitCategorizer, CommitParser


class ChangelogGenerator:
    """
    Compose a changelog section from a release's commits.

    Sections follow the configured type order. Commits whose type is not
    in that order are grouped under ``other`` but not rendered.

    Args:
        config: Run configuration (type order, base URL, project path)
    """

    def __init__(self, config: ChangelogConfig) -> None:
        self.config = config
        self.links = LinkBuilder(config.base_url, config.project)
        self.categorizer = CommitCategorizer(CommitParser(config.types))

    def assemble(self, version: str, head: Tag, commits: List[CommitInfo]) -> ChangeLog:
        """
        Group a release's commits by type.

        Args:
            version: Release name shown in the heading, normally the tag name
            head: The tag the release was cut from
            commits: Commits in history order, newest first

        Returns:
            ChangeLog ready for render()
        """
        return ChangeLog(version=version, head=head, groups=self.categorizer.categorize(commits))

    def render(self, changelog: ChangeLog) -> str:
        """
        Build the Markdown section for a ChangeLog.

        Args:
            changelog: Result of assemble()

        Returns:
            Markdown text ending with a newline
        """
        lines: List[str] = [self._format_heading(changelog), ""]

        for commit_type in self.config.types:
            commits = changelog.groups.get(commit_type)
            if not commits:
                continue
            lines.append(f"### {commit_type}")
            for commit in self._deduplicate(commits):
                lines.extend(self._format_commit(commit))

        return "\n".join(lines) + "\n"

    def _format_heading(self, changelog: ChangeLog) -> str:
        head = changelog.head
        version = changelog.version
        date = head.commit_date or datetime.datetime.now(datetime.timezone.utc)
        return (
            f"## {version}    <sub>[{date.strftime('%Y-%m-%d')}]({self.links.tag_url(version)})"
            f" - [{head.short_sha}]({self.links.commit_url(head.sha)})"
            f" [CI]({self.links.pipeline_url(version)})</sub>"
        )

    @staticmethod
    def _deduplicate(commits: List[CommitInfo]) -> List[CommitInfo]:
        """
        Drop repeated messages within a group.

        Of several commits with the same message only the last one in the
        list is kept, at its own position.
        """
        last_sha: Dict[str, str] = {}
        for commit in commits:
            last_sha[commit.message] = commit.sha
        return [c for c in commits if last_sha[c.message] == c.sha]

    def _format_commit(self, commit: CommitInfo) -> List[str]:
        title, body = self._split_message(commit.message)
        lines = [
            f"- {title} ( [{commit.short_sha} by {commit.author}]({self.links.commit_url(commit.sha)}) )"
            f" - <sub>{commit.date.strftime('%Y-%m-%d %H:%M')}</sub>"
        ]
        if body is not None:
            lines.append("  ```markdown")
            lines.extend(f"  {line}" for line in body)
            lines.append("  ```")
        return lines

    @staticmethod
    def _split_message(message: str) -> Tuple[str, Optional[List[str]]]:
        """Return the first line and, if any later line has text, all later lines."""
        if "\n" not in message:
            return message, None
        first, *rest = message.split("\n")
        if any(line.strip() for line in rest):
            return first, rest
        return first, None
