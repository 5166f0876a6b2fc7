"""
Links into the hosting service's web UI.

GitLab and GitHub lay out their commit and tag pages differently; any other
host gets GitLab-style tag pages and a plain ``commits`` path.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

from .errors import RepositoryAccessError
from .models import RemoteInfo

_SCP_LIKE_RE = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<host>[^:/]+):(?P<path>(?!//).*)$")


def _clean_project(path: str) -> str:
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    return path


def parse_remote_url(url: str) -> RemoteInfo:
    """
    Turn a remote URL into the project's web location.

    Credentials and the ``.git`` suffix are dropped. The port is kept only
    for http(s) remotes, since ssh ports do not carry over to the web UI.

    Raises:
        RepositoryAccessError: If no host can be found in the URL.
    """
    url = url.strip()
    host: Optional[str]
    port: Optional[int] = None

    if "://" in url:
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        host = parts.hostname
        if scheme in ("http", "https"):
            try:
                port = parts.port
            except ValueError as e:
                raise RepositoryAccessError(f"Invalid port in remote URL {url!r}") from e
        path = parts.path
    else:
        m = _SCP_LIKE_RE.match(url)
        if not m:
            raise RepositoryAccessError(f"Unrecognised remote URL {url!r}")
        scheme = "ssh"
        host = m.group("host")
        path = m.group("path")

    if not host:
        raise RepositoryAccessError(f"No host in remote URL {url!r}")

    use_http = scheme == "http"
    base_url = f"{'http' if use_http else 'https'}://{host}"
    if port:
        base_url += f":{port}"
    return RemoteInfo(base_url=base_url, project=_clean_project(path), use_http=use_http)


class LinkBuilder:
    """
    Build commit, tag and pipeline URLs for one project.

    Args:
        base_url: Web root, e.g. ``https://gitlab.example.com``
        project: Project path, e.g. ``group/app``
    """

    def __init__(self, base_url: str, project: str) -> None:
        self.base_url = base_url
        self.project = project

    @property
    def _root(self) -> str:
        return f"{self.base_url}/{self.project}"

    def commit_url(self, sha: str) -> str:
        if "gitlab" in self.base_url:
            return f"{self._root}/-/commits/{sha}"
        if "github" in self.base_url:
            return f"{self._root}/commit/{sha}"
        return f"{self._root}/commits/{sha}"

    def tag_url(self, tag_name: str) -> str:
        if "gitlab" in self.base_url:
            return f"{self._root}/-/tags/{tag_name}"
        if "github" in self.base_url:
            return f"{self._root}/releases/tag/{tag_name}"
        return f"{self._root}/-/tags/{tag_name}"

    def pipeline_url(self, tag_name: str) -> str:
        return f"{self._root}/pipelines?page=1&scope=tags&ref={tag_name}"
