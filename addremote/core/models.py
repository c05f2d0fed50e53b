"""Data model shared by the fork directories, the selector and the CLI."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_MAIN_FORK_OWNER_ALIAS = 'upstream'


@dataclass(frozen=True)
class Fork:
    """
    A repository in the fork network of the current project.
    
    Exactly one record per network may have ``is_source_owner`` set: the
    non-forked repository at its root. ``already_local`` is filled in once
    the local remotes are known.
    """
    owner: str
    clone_url: str
    is_source_owner: bool = False
    already_local: bool = False
    
    def mark_local(self, local_owners) -> 'Fork':
        """Return a copy with ``already_local`` computed from owner names."""
        return replace(self, already_local=self.owner in local_owners)


@dataclass(frozen=True)
class Config:
    """
    Resolved, read-only view of the add-remote configuration.
    
    Built once per run by ``resolve_config``; nothing downstream reads the
    config store directly.
    """
    preferred_fork: Optional[str] = None
    main_fork_owner_alias: str = DEFAULT_MAIN_FORK_OWNER_ALIAS
    fork_alias_by_owner: Mapping[str, str] = field(default_factory=dict)
    github_token: Optional[str] = None
    gitlab_token: Optional[str] = None
    
    def __post_init__(self):
        # Read-only copy; the frozen Config must not change after resolution
        object.__setattr__(self, 'fork_alias_by_owner', MappingProxyType(dict(self.fork_alias_by_owner)))
    
    def alias_for_owner(self, owner: str) -> Optional[str]:
        """
        Look up a configured alias for ``owner``.
        
        Git stores variable names lower-cased, so an exact match is tried
        first and a case-insensitive one second.
        """
        if owner in self.fork_alias_by_owner:
            return self.fork_alias_by_owner[owner]
        lowered = owner.lower()
        for key, value in self.fork_alias_by_owner.items():
            if key.lower() == lowered:
                return value
        return None


@dataclass(frozen=True)
class RemoteSpec:
    """A remote ready to be written to the repository. Push is always disabled."""
    name: str
    fetch_url: str
    push_disabled: bool = field(default=True, init=False)
