#!/usr/bin/env python3
"""
Main driver script for the changelog generator.

This script provides the command-line interface and coordinates all modules
to add a release section to a changelog from the repository's tag history.

Usage (example):
    python -m changelog_generator.main -p . -f CHANGELOG.md -skip "skip,wip"
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .config import DEFAULT_HEADER_LINES, ChangelogConfig, parse_skip_list, parse_types
from .errors import ChangelogError, NoTagFoundError
from .extractor import RangeExtractor
from .fetcher import GitRepoFetcher
from .generator import ChangelogGenerator
from .tags import TagSelector
from .writer import insert_into_file

logger = logging.getLogger("changelog-generator")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a changelog section from the commits between release tags.")
    parser.add_argument("-p", "--path", required=True, help="Path to the git repository")
    parser.add_argument("-f", "--file", default="changelog.md", help="Changelog file to update")
    parser.add_argument("-skip", "--skip", default="skip", help="Comma-separated commit messages to leave out")
    parser.add_argument("-init", "--init", action="store_true",
                        help="Ignore the previous tag and include the whole history")
    parser.add_argument("-t", "--tag", help="Generate for this tag instead of the newest one")
    parser.add_argument("--merge", action="store_true", help="Include merge commits")
    parser.add_argument("--types", help="Comma-separated commit types, in the order they are listed")
    parser.add_argument("--header-lines", type=int, default=DEFAULT_HEADER_LINES,
                        help="Lines at the top of the changelog to keep above the new section")
    parser.add_argument("--dry-run", action="store_true", help="Print the section without writing the file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(args: argparse.Namespace) -> str:
    """
    Generate the release section and splice it into the changelog.

    Returns:
        The generated Markdown section

    Raises:
        ChangelogError: On any fatal condition (no tags, unreadable
            repository, unwritable file)
    """
    fetcher = GitRepoFetcher(args.path)
    remote = fetcher.remote_info()

    init = args.init
    if not os.path.exists(args.file):
        logger.info("%s not found, including the whole history", args.file)
        init = True

    config = ChangelogConfig(
        base_url=remote.base_url,
        project=remote.project,
        types=parse_types(args.types),
        skip_messages=parse_skip_list(args.skip),
        header_lines=args.header_lines,
        include_merges=args.merge,
        init=init,
    )

    tags = fetcher.list_tags()
    if args.tag:
        head = next((t for t in tags if t.name == args.tag), None)
        if head is None:
            raise NoTagFoundError(f"Tag {args.tag} not found")
        previous = TagSelector.select_previous(tags, head)
    else:
        head, previous = TagSelector.select_latest_pair(tags)

    if config.init:
        previous = None
    logger.info("Generating changelog for %s (previous: %s)", head.name, previous.name if previous else "none")

    commits = RangeExtractor(fetcher, config).extract(head, previous)

    generator = ChangelogGenerator(config)
    changelog = generator.assemble(head.name, head, commits)
    text = generator.render(changelog)
    logger.info("Generated changelog:\n%s", text)

    if args.dry_run:
        print(text)
    else:
        insert_into_file(args.file, text, config.header_lines)
    return text


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the changelog generator.

    Parses command line arguments, runs the generator and exits non-zero
    on failure.
    """
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        run(args)
        logger.info("Changelog generation completed successfully")
    except KeyboardInterrupt:
        logger.info("Changelog generation interrupted by user")
        sys.exit(130)
    except ChangelogError as e:
        logger.error("Changelog generation failed: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
