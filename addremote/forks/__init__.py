"""Fork directories for the supported hosting providers.

Each directory exposes ``list_forks(origin)`` returning ``Fork`` records;
``directory_for`` picks the implementation from the origin's host.
"""

from typing import List, Protocol

from addremote.core.errors import UnsupportedHost
from addremote.core.models import Config, Fork
from addremote.core.urls import RepositoryUrl

from .github import GitHubForkDirectory
from .gitlab import GitLabForkDirectory


class ForkDirectory(Protocol):
    """Capability shared by the provider-specific directories."""

    def list_forks(self, origin: RepositoryUrl) -> List[Fork]:
        ...


def directory_for(origin: RepositoryUrl, config: Config, session=None) -> ForkDirectory:
    """
    Pick the fork directory for the host of ``origin``.

    Args:
        origin: Parsed URL of the repository
        config: Resolved config, for the provider tokens
        session: Optional requests session to use

    Raises:
        UnsupportedHost: The host is neither GitHub nor GitLab
    """
    if origin.is_github:
        return GitHubForkDirectory(config.github_token, session=session)
    if origin.is_gitlab:
        return GitLabForkDirectory(config.gitlab_token, session=session)
    raise UnsupportedHost(f"Unsupported host '{origin.host}': only GitHub and GitLab are supported")


__all__ = [
    'ForkDirectory',
    'GitHubForkDirectory',
    'GitLabForkDirectory',
    'directory_for',
]
