"""Operations module for the remote resolution engine.

This module contains:
- Default fork selection and alias resolution (pure functions)
- The per-run resolution plan tying config, remotes and forks together
"""

from addremote.operations.selection import (addable_forks, select_default, resolve_alias,
                                            check_alias, build_remote_spec)
from addremote.operations.resolution import ResolutionPlan, plan_remote

__all__ = [
    'addable_forks',
    'select_default',
    'resolve_alias',
    'check_alias',
    'build_remote_spec',
    'ResolutionPlan',
    'plan_remote',
]
