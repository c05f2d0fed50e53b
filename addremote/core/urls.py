"""Parsing of GitHub and GitLab repository URLs."""

import re
from dataclasses import dataclass
from typing import Optional

GITHUB = 'github.com'
GITLAB = 'gitlab.com'
SUPPORTED_HOSTS = (GITHUB, GITLAB)

# git@host:owner/name(.git) and ssh://git@host/owner/name(.git)
_SCP_PATTERN = re.compile(r'^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$')
_URL_PATTERN = re.compile(r'^(?P<scheme>https?|ssh|git)://(?:[^@/]+@)?(?P<host>[\w.-]+)(?::\d+)?/(?P<path>.+)$')


@dataclass(frozen=True)
class RepositoryUrl:
    """
    A repository URL broken into its parts.

    ``name`` may contain slashes for GitLab projects nested in subgroups;
    ``owner`` is always the first path segment.
    """
    url: str
    host: str
    owner: str
    name: str
    is_https: bool

    @property
    def is_github(self) -> bool:
        return self.host == GITHUB

    @property
    def is_gitlab(self) -> bool:
        return self.host == GITLAB

    @property
    def path(self) -> str:
        """owner/name as used in API paths."""
        return f"{self.owner}/{self.name}"

    def to_https(self) -> str:
        """Return the HTTPS form of this URL."""
        if self.is_https:
            return self.url
        return f"https://{self.host}/{self.path}"


def parse_url(url: str) -> Optional[RepositoryUrl]:
    """
    Parse a GitHub or GitLab repository URL.

    Args:
        url: Remote URL, e.g. https://github.com/owner/name.git or
             git@gitlab.com:owner/name.git

    Returns:
        RepositoryUrl, or None for local paths, other hosts and malformed URLs

    Examples:
        https://github.com/user/repo.git -> (github.com, user, repo, https)
        git@github.com:user/repo.git -> (github.com, user, repo, ssh)
    """
    url = url.strip()
    match = _URL_PATTERN.match(url)
    if match:
        is_https = match.group('scheme') in ('https', 'http')
    else:
        match = _SCP_PATTERN.match(url)
        if not match:
            return None
        is_https = False

    host = match.group('host').lower()
    if host not in SUPPORTED_HOSTS:
        return None

    path = match.group('path').strip('/')
    if path.endswith('.git'):
        path = path[:-4]
    owner, _, name = path.partition('/')
    if not owner or not name:
        return None

    return RepositoryUrl(url=url, host=host, owner=owner, name=name, is_https=is_https)
