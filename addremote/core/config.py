"""Configuration management for add-remote.

Settings live in git config under the ``add-remote`` section, in either the
global (~/.gitconfig) or the repository-local (.git/config) scope.
``GitConfigStore`` gives raw per-scope access; ``resolve_config`` merges the
scopes once into the immutable ``Config`` snapshot used for the rest of a run.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Dict

from .errors import NotARepository
from .git import run_git
from .models import Config, DEFAULT_MAIN_FORK_OWNER_ALIAS

logger = logging.getLogger(__name__)

GLOBAL = 'global'
LOCAL = 'local'
SCOPES = (GLOBAL, LOCAL)

SECTION = 'add-remote'
PREFERRED_FORK = f'{SECTION}.preferredFork'
MAIN_FORK_OWNER_ALIAS = f'{SECTION}.mainForkOwnerAlias'
FORK_ALIAS = f'{SECTION}.forkAlias'
GITHUB_TOKEN = f'{SECTION}.gitHubToken'
GITLAB_TOKEN = f'{SECTION}.gitLabToken'


class GitConfigStore:
    """
    Layered key-value store over ``git config``.

    Scalar keys are read with ``get`` and nested tables (three-level keys
    such as ``add-remote.forkAlias.<owner>``) with ``get_table``. When a key
    was added several times, the last value wins, as with git itself.
    """

    def __init__(self, work_tree: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            work_tree: Repository work tree; required for the local scope
        """
        self.work_tree = work_tree

    def _scope_flag(self, scope: str) -> str:
        if scope not in SCOPES:
            raise ValueError(f"Unknown config scope: {scope}")
        if scope == LOCAL and self.work_tree is None:
            raise NotARepository("The local config scope needs a Git repository")
        return f'--{scope}'

    def get(self, scope: str, key: str) -> Optional[str]:
        """
        Get a scalar value from one scope.

        Args:
            scope: 'global' or 'local'
            key: Dotted git config key (e.g. 'add-remote.preferredFork')

        Returns:
            The last value set for the key, or None
        """
        result = run_git(['config', self._scope_flag(scope), '--get-all', key],
                         cwd=self.work_tree, check=False)
        if result.returncode != 0:
            return None
        values = result.stdout.splitlines()
        return values[-1] if values else None

    def get_table(self, scope: str, key: str) -> Dict[str, str]:
        """
        Get all entries nested under a subsection from one scope.

        Args:
            scope: 'global' or 'local'
            key: Section and subsection (e.g. 'add-remote.forkAlias')

        Returns:
            Dict mapping each variable name to its last value
        """
        prefix = f'{key}.'
        result = run_git(['config', self._scope_flag(scope), '--get-regexp', _escape_regex(prefix)],
                         cwd=self.work_tree, check=False)
        table = {}
        if result.returncode != 0:
            return table

        for line in result.stdout.splitlines():
            name, _, value = line.partition(' ')
            # Section names come back lower-cased; the subsection keeps its case
            if name.lower().startswith(prefix.lower()):
                table[name[len(prefix):]] = value
        return table

    def set(self, scope: str, key: str, value: str) -> None:
        """
        Set a value, replacing every existing value for the key.

        Args:
            scope: 'global' or 'local'
            key: Dotted git config key
            value: Value to store
        """
        run_git(['config', self._scope_flag(scope), '--replace-all', key, value],
                cwd=self.work_tree)


def _escape_regex(text: str) -> str:
    return '^' + text.replace('.', r'\.')


def _env_override(key: str) -> Optional[str]:
    """Environment override for ``key``: ADD_REMOTE_<NAME>, e.g. ADD_REMOTE_PREFERREDFORK."""
    name = key.split('.')[-1]
    return os.environ.get(f"ADD_REMOTE_{name.upper()}")


def resolve_scalar(store, key: str, fallback: Optional[str] = None) -> Optional[str]:
    """
    Resolve a scalar key across all layers.

    Priority order (highest to lowest):
    1. Environment variable (ADD_REMOTE_<NAME>)
    2. Local (repository) config
    3. Global config
    4. Fallback value
    """
    value = _env_override(key)
    if value is not None:
        return value

    for scope in (LOCAL, GLOBAL):
        value = store.get(scope, key)
        if value is not None:
            return value

    return fallback


def resolve_table(store, key: str) -> Dict[str, str]:
    """Merge a table key by key; a local entry overrides the global entry for the same name."""
    merged = dict(store.get_table(GLOBAL, key))
    merged.update(store.get_table(LOCAL, key))
    return merged


def resolve_config(store) -> Config:
    """
    Read the layered store once and build the resolved Config snapshot.

    Args:
        store: Object exposing ``get(scope, key)`` and ``get_table(scope, key)``

    Returns:
        Config instance
    """
    config = Config(
        preferred_fork=resolve_scalar(store, PREFERRED_FORK) or None,
        main_fork_owner_alias=(resolve_scalar(store, MAIN_FORK_OWNER_ALIAS)
                               or DEFAULT_MAIN_FORK_OWNER_ALIAS),
        fork_alias_by_owner=resolve_table(store, FORK_ALIAS),
        github_token=resolve_scalar(store, GITHUB_TOKEN) or None,
        gitlab_token=resolve_scalar(store, GITLAB_TOKEN) or None,
    )
    logger.debug("Resolved config: preferred fork=%s, main fork alias=%s, %d fork aliases",
                 config.preferred_fork, config.main_fork_owner_alias,
                 len(config.fork_alias_by_owner))
    return config
