"""Default fork selection and alias resolution.

Every function here depends only on its arguments.
"""

from typing import Iterable, List, Optional, Sequence

from addremote.core.errors import AliasCollision
from addremote.core.models import Config, Fork, RemoteSpec
from addremote.core.urls import parse_url


def mark_local_forks(forks: Iterable[Fork], local_owners) -> List[Fork]:
    """Set ``already_local`` on each fork by exact, case-sensitive owner match."""
    return [fork.mark_local(local_owners) for fork in forks]


def addable_forks(forks: Iterable[Fork]) -> List[Fork]:
    """Forks that are not already a local remote, in their original order."""
    return [fork for fork in forks if not fork.already_local]


def select_default(forks: Sequence[Fork], config: Config) -> Optional[Fork]:
    """
    Suggest the fork to add.

    Already-local forks are filtered out first; then, first match wins:
    1. the only remaining fork
    2. the source owner's repository
    3. the fork owned by ``config.preferred_fork``

    Args:
        forks: All forks, with ``already_local`` set
        config: Resolved configuration

    Returns:
        The suggested fork, or None if the user must choose or nothing
        is left to add
    """
    candidates = addable_forks(forks)
    if len(candidates) == 1:
        return candidates[0]

    for fork in candidates:
        if fork.is_source_owner:
            return fork

    if config.preferred_fork:
        for fork in candidates:
            if fork.owner == config.preferred_fork:
                return fork

    return None


def resolve_alias(fork: Fork, config: Config) -> str:
    """
    Suggest the local name for ``fork``.

    The source owner gets ``config.main_fork_owner_alias`` ('upstream' unless
    configured); any other owner gets its configured alias, else its own name.
    """
    if fork.is_source_owner:
        return config.main_fork_owner_alias
    alias = config.alias_for_owner(fork.owner)
    if alias:
        return alias
    return fork.owner


def is_valid_alias(alias: str) -> bool:
    """A remote name must be non-empty, free of whitespace and not start with a dash."""
    return bool(alias) and not alias.startswith('-') and not any(char.isspace() for char in alias)


def alias_collides(alias: str, existing_names: Iterable[str]) -> bool:
    """True if a local remote is already called ``alias``."""
    return alias in set(existing_names)


def check_alias(alias: str, existing_names: Iterable[str]) -> str:
    """
    Validate a confirmed alias.

    Raises:
        AliasCollision: A local remote already uses the name
        ValueError: The alias is empty, contains whitespace or starts with a dash
    """
    if not is_valid_alias(alias):
        raise ValueError(f"Invalid remote name: '{alias}'")
    if alias_collides(alias, existing_names):
        raise AliasCollision(alias)
    return alias


def fetch_url_for(fork: Fork, all_local_https: bool) -> str:
    """
    URL to fetch ``fork`` from.

    An SSH URL is converted to HTTPS when every existing remote uses HTTPS.
    """
    if all_local_https:
        parsed = parse_url(fork.clone_url)
        if parsed is not None:
            return parsed.to_https()
    return fork.clone_url


def build_remote_spec(alias: str, fetch_url: str) -> RemoteSpec:
    """Create the RemoteSpec to apply; push is always disabled."""
    return RemoteSpec(name=alias, fetch_url=fetch_url)
