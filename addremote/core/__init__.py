"""Core functionality for add-remote.

This module contains:
- The data model (Fork, Config, RemoteSpec)
- The error taxonomy
- Git repository discovery and the git subprocess helper
- Configuration store and precedence merge
- Repository URL parsing
- Local remote inspection and creation

For fork listing from GitHub/GitLab, see addremote.forks
For default selection and alias resolution, see addremote.operations
"""

from addremote.core.models import Fork, Config, RemoteSpec
from addremote.core.git import GitRepository, run_git
from addremote.core.config import GitConfigStore, resolve_config
from addremote.core.urls import RepositoryUrl, parse_url
from addremote.core.remote import LocalRemoteInspector, GitRemoteApplier

__all__ = [
    'Fork',
    'Config',
    'RemoteSpec',
    'GitRepository',
    'run_git',
    'GitConfigStore',
    'resolve_config',
    'RepositoryUrl',
    'parse_url',
    'LocalRemoteInspector',
    'GitRemoteApplier',
]
