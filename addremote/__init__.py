"""add-remote - add a GitHub or GitLab fork as a local Git remote."""

__version__ = '0.1.0'

from addremote.core.models import Fork, Config, RemoteSpec
from addremote.operations.selection import select_default, resolve_alias

__all__ = [
    'Fork',
    'Config',
    'RemoteSpec',
    'select_default',
    'resolve_alias',
]
