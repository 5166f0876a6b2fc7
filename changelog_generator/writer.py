"""
Destination changelog file handling.

The new section is spliced in below the file's header lines. The file is
rewritten in one step after the new text has been fully built.
"""

import logging
import os
import shutil
import tempfile
from typing import List

from .errors import FileIOError

logger = logging.getLogger("changelog-generator.writer")

DEFAULT_HEADER = "# Changelog\n\n"


def splice_changelog(existing_lines: List[str], content: str, header_lines: int) -> str:
    """
    Insert ``content`` after the first ``header_lines`` lines.

    Args:
        existing_lines: Current file content split on newlines
        content: New section to insert
        header_lines: Number of lines to keep above the new section

    Returns:
        The complete new file text
    """
    cut = max(0, min(header_lines, len(existing_lines)))
    new_lines = existing_lines[:cut] + content.split("\n") + existing_lines[cut:]
    return "\n".join(new_lines)


def _read_lines(path: str) -> List[str]:
    if not os.path.exists(path):
        logger.info("%s does not exist, starting from default header", path)
        return DEFAULT_HEADER.splitlines()
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise FileIOError(f"Failed to read {path}: {e}") from e


def insert_into_file(path: str, content: str, header_lines: int) -> None:
    """
    Splice ``content`` into the changelog at ``path``.

    A missing file is created with DEFAULT_HEADER first.

    Raises:
        FileIOError: If the file cannot be read or written
    """
    text = splice_changelog(_read_lines(path), content, header_lines)

    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".changelog-", suffix=".tmp", dir=directory)
    except OSError as e:
        raise FileIOError(f"Failed to write {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        else:
            os.chmod(tmp_path, 0o644)
        os.replace(tmp_path, path)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise FileIOError(f"Failed to write {path}: {e}") from e

    logger.info("Wrote changelog to %s", path)
