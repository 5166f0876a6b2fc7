"""
Version string ordering.

Tags are compared as ``major.minor.patch`` with an optional suffix on the
patch component (``1.4.2-rc``, ``v2.0.1_hotfix``, ``3.1.0+b7``). Parsing
never fails: components that are not integers count as 0.
"""

import re
from typing import NamedTuple, Optional

_SUFFIX_SEPARATOR = re.compile(r"[-_+]")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class Version(NamedTuple):
    major: int
    minor: int
    patch: int
    suffix: Optional[str]


def _to_int(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        return 0
    return int(value)


def _strip_prefix(version: str) -> str:
    if version.startswith("v"):
        version = version[1:]
    if version.startswith("V"):
        version = version[1:]
    return version


def parse_version(version: str) -> Version:
    """
    Decompose a version string into its numeric parts and patch suffix.

    Missing components default to 0; anything after the third dot-separated
    component is ignored.
    """
    parts = _strip_prefix(version).split(".")
    while len(parts) < 3:
        parts.append("0")

    patch_parts = _SUFFIX_SEPARATOR.split(parts[2], maxsplit=1)
    suffix = patch_parts[1] if len(patch_parts) == 2 else None
    return Version(_to_int(parts[0]), _to_int(parts[1]), _to_int(patch_parts[0]), suffix)


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two version strings.

    Returns a negative number if v1 is older than v2, zero if they are
    equal and a positive number if v1 is newer. Only the sign is meaningful.

    When the numeric patch values are equal, suffixes are compared as text
    only if both are exactly two characters long (``rc`` vs ``b1``). In every
    other case a version with a suffix sorts after the same version without
    one, and two suffixed versions compare equal.
    """
    a = parse_version(v1)
    b = parse_version(v2)

    if a.major != b.major:
        return a.major - b.major
    if a.minor != b.minor:
        return a.minor - b.minor
    if a.patch != b.patch:
        return a.patch - b.patch

    if a.suffix is not None and b.suffix is not None and len(a.suffix) == 2 and len(b.suffix) == 2:
        return (a.suffix > b.suffix) - (a.suffix < b.suffix)
    return (a.suffix is not None) - (b.suffix is not None)
