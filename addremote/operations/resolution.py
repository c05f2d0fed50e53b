"""The remote resolution run: fetch forks, inspect remotes, compute defaults."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from addremote.core.config import resolve_config
from addremote.core.errors import NoCandidates
from addremote.core.models import Config, Fork, RemoteSpec
from addremote.core.urls import RepositoryUrl
from addremote.forks import directory_for

from .selection import (addable_forks, build_remote_spec, check_alias, fetch_url_for,
                        mark_local_forks, resolve_alias, select_default)

logger = logging.getLogger(__name__)


@dataclass
class ResolutionPlan:
    """
    Everything the prompts need for one run.

    ``candidates`` are the addable forks sorted case-insensitively by owner
    for display; ``default`` is one of them or None.
    """
    origin: RepositoryUrl
    config: Config
    forks: List[Fork]
    candidates: List[Fork]
    default: Optional[Fork]
    existing_names: List[str]
    all_local_https: bool

    @property
    def default_index(self) -> Optional[int]:
        """Position of the default within ``candidates``."""
        if self.default is None:
            return None
        return self.candidates.index(self.default)

    def suggested_alias(self, fork: Fork) -> str:
        return resolve_alias(fork, self.config)

    def remote_spec(self, fork: Fork, alias: str) -> RemoteSpec:
        """
        Build the RemoteSpec for a confirmed fork and alias.

        Raises:
            AliasCollision: The alias is already a local remote name
        """
        check_alias(alias, self.existing_names)
        return build_remote_spec(alias, fetch_url_for(fork, self.all_local_https))


def plan_remote(repo, directory=None) -> ResolutionPlan:
    """
    Read config and remotes once, list the forks and compute the default.

    Args:
        repo: GitRepository to add a remote to
        directory: Fork directory to use instead of the one for the origin's host

    Returns:
        ResolutionPlan with at least one candidate

    Raises:
        UnsupportedHost: No remote is hosted on GitHub or GitLab
        FetchError: The fork list could not be retrieved
        NoCandidates: Every fork is already a local remote
    """
    config = resolve_config(repo.config)
    inspector = repo.remotes
    origin = inspector.origin_url()
    local_owners = inspector.list_remote_owners()
    logger.debug("Origin is %s on %s; local owners: %s", origin.path, origin.host,
                 ', '.join(sorted(local_owners)))

    if directory is None:
        directory = directory_for(origin, config)
    forks = mark_local_forks(directory.list_forks(origin), local_owners)

    candidates = sorted(addable_forks(forks), key=lambda fork: fork.owner.lower())
    if not candidates:
        raise NoCandidates("There are no forks available which aren't already a remote")

    return ResolutionPlan(
        origin=origin,
        config=config,
        forks=forks,
        candidates=candidates,
        default=select_default(forks, config),
        existing_names=sorted(inspector.remote_names()),
        all_local_https=inspector.all_https(),
    )
