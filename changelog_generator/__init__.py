"""
Changelog Generator - builds a release section of a Markdown changelog from git tag history.
"""

from .models import ChangeLog, CommitInfo, RemoteInfo, Tag
from .errors import ChangelogError, FileIOError, NoTagFoundError, RepositoryAccessError
from .config import ChangelogConfig
from .version import compare_versions, parse_version
from .tags import TagSelector
from .extractor import RangeExtractor
from .parser import CommitParser, CommitCategorizer
from .links import LinkBuilder, parse_remote_url
from .generator import ChangelogGenerator
from .fetcher import GitRepoFetcher
from .main import main

__all__ = [
    'ChangeLog',
    'CommitInfo',
    'RemoteInfo',
    'Tag',
    'ChangelogError',
    'FileIOError',
    'NoTagFoundError',
    'RepositoryAccessError',
    'ChangelogConfig',
    'compare_versions',
    'parse_version',
    'TagSelector',
    'RangeExtractor',
    'CommitParser',
    'CommitCategorizer',
    'LinkBuilder',
    'parse_remote_url',
    'ChangelogGenerator',
    'GitRepoFetcher',
    'main'
]
