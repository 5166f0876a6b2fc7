"""Exceptions raised by the changelog generator."""


class ChangelogError(RuntimeError):
    """Base class for every failure the generator reports."""


class NoTagFoundError(ChangelogError):
    """The repository has no tags to build a release section from."""


class RepositoryAccessError(ChangelogError):
    """A tag, commit or remote could not be read from the repository."""


class FileIOError(ChangelogError):
    """The destination changelog could not be read or written."""
