"""Integration tests for the git-config backed store."""

import subprocess

import pytest

from addremote.core.config import (FORK_ALIAS, GLOBAL, LOCAL, MAIN_FORK_OWNER_ALIAS, PREFERRED_FORK,
                                   GitConfigStore, resolve_config)
from addremote.core.errors import NotARepository
from conftest import requires_git

pytestmark = requires_git


def git_config(repo, *args):
    subprocess.run(['git', 'config'] + list(args), cwd=str(repo.work_tree), check=True)


def test_get_missing_key(git_repo):
    assert git_repo.config.get(GLOBAL, PREFERRED_FORK) is None
    assert git_repo.config.get(LOCAL, PREFERRED_FORK) is None


def test_get_per_scope(git_repo):
    git_config(git_repo, '--global', PREFERRED_FORK, 'global-owner')
    git_config(git_repo, '--local', PREFERRED_FORK, 'local-owner')

    assert git_repo.config.get(GLOBAL, PREFERRED_FORK) == 'global-owner'
    assert git_repo.config.get(LOCAL, PREFERRED_FORK) == 'local-owner'


def test_last_added_value_wins(git_repo):
    git_config(git_repo, '--global', '--add', PREFERRED_FORK, 'first')
    git_config(git_repo, '--global', '--add', PREFERRED_FORK, 'second')
    assert git_repo.config.get(GLOBAL, PREFERRED_FORK) == 'second'


def test_key_lookup_ignores_case(git_repo):
    git_config(git_repo, '--global', 'add-remote.mainforkowneralias', 'owner')
    assert git_repo.config.get(GLOBAL, MAIN_FORK_OWNER_ALIAS) == 'owner'


def test_get_table(git_repo):
    git_config(git_repo, '--global', f'{FORK_ALIAS}.anthonywilliams', 'Anthony')
    git_config(git_repo, '--global', f'{FORK_ALIAS}.hsutter', 'Herb')
    git_config(git_repo, '--global', PREFERRED_FORK, 'CasperLabs')

    assert git_repo.config.get_table(GLOBAL, FORK_ALIAS) == {
        'anthonywilliams': 'Anthony',
        'hsutter': 'Herb',
    }
    assert git_repo.config.get_table(LOCAL, FORK_ALIAS) == {}


def test_set_replaces_all_values(git_repo):
    git_config(git_repo, '--global', '--add', f'{FORK_ALIAS}.bob', 'One')
    git_config(git_repo, '--global', '--add', f'{FORK_ALIAS}.bob', 'Two')

    git_repo.config.set(GLOBAL, f'{FORK_ALIAS}.bob', 'Bobby')

    assert git_repo.config.get_table(GLOBAL, FORK_ALIAS) == {'bob': 'Bobby'}


def test_local_scope_needs_repository(git_home):
    store = GitConfigStore()
    with pytest.raises(NotARepository):
        store.get(LOCAL, PREFERRED_FORK)
    with pytest.raises(NotARepository):
        store.set(LOCAL, PREFERRED_FORK, 'x')
    assert store.get(GLOBAL, PREFERRED_FORK) is None


def test_resolve_config_merges_scopes(git_repo):
    """Test local entries override global ones owner by owner."""
    git_config(git_repo, '--global', f'{FORK_ALIAS}.x', 'Global X')
    git_config(git_repo, '--global', f'{FORK_ALIAS}.y', 'Global Y')
    git_config(git_repo, '--local', f'{FORK_ALIAS}.x', 'Local X')
    git_config(git_repo, '--global', MAIN_FORK_OWNER_ALIAS, 'owner')

    config = resolve_config(git_repo.config)

    assert config.fork_alias_by_owner == {'x': 'Local X', 'y': 'Global Y'}
    assert config.main_fork_owner_alias == 'owner'
    assert config.preferred_fork is None
