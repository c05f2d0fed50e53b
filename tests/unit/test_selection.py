"""Unit tests for default fork selection and alias resolution."""

import pytest

from addremote.core.errors import AliasCollision
from addremote.core.models import Config, RemoteSpec
from addremote.operations.selection import (addable_forks, build_remote_spec, check_alias,
                                            fetch_url_for, mark_local_forks, resolve_alias,
                                            select_default)
from conftest import make_fork


def test_single_candidate_is_selected(config):
    """Test the only addable fork wins over source owner and preferred fork."""
    forks = [
        make_fork('source', source=True, local=True),
        make_fork('preferred', local=True),
        make_fork('lonely'),
    ]
    preferred = Config(preferred_fork='preferred')

    assert select_default(forks, config).owner == 'lonely'
    assert select_default(forks, preferred).owner == 'lonely'


@pytest.mark.parametrize('source', [True, False])
def test_single_fork_selected_regardless_of_flags(source):
    """Test a list of one fork always yields that fork."""
    fork = make_fork('only', source=source)
    assert select_default([fork], Config(preferred_fork='someone-else')) == fork


def test_source_owner_preferred(config):
    """Test the source owner is the default among several candidates."""
    forks = [make_fork('origin-owner', source=True), make_fork('other')]
    assert select_default(forks, config).owner == 'origin-owner'


def test_source_owner_beats_preferred_fork():
    """Test the source owner wins even when a preferred fork is configured."""
    forks = [make_fork('other'), make_fork('origin-owner', source=True), make_fork('third')]
    assert select_default(forks, Config(preferred_fork='other')).owner == 'origin-owner'


def test_preferred_fork_when_source_is_local():
    """Test the preferred fork is used once the source owner is a local remote."""
    forks = [
        make_fork('origin-owner', source=True, local=True),
        make_fork('other'),
        make_fork('third'),
    ]
    assert select_default(forks, Config(preferred_fork='other')).owner == 'other'


def test_preferred_fork_ignored_when_local():
    """Test a preferred fork that is already local is not suggested."""
    forks = [make_fork('other', local=True), make_fork('a'), make_fork('b')]
    assert select_default(forks, Config(preferred_fork='other')) is None


def test_preferred_fork_is_case_sensitive():
    """Test owner matching for preferredFork is exact."""
    forks = [make_fork('Other'), make_fork('third')]
    assert select_default(forks, Config(preferred_fork='other')) is None


def test_no_default_without_rules(config):
    """Test no default when no rule applies."""
    forks = [make_fork('a'), make_fork('b')]
    assert select_default(forks, config) is None


def test_all_local_gives_no_default(config):
    """Test nothing is suggested when every fork is already local."""
    forks = [make_fork('a', source=True, local=True), make_fork('b', local=True)]
    assert addable_forks(forks) == []
    assert select_default(forks, Config(preferred_fork='b')) is None


def test_empty_list_gives_no_default(config):
    assert select_default([], config) is None


def test_mark_local_forks_exact_match():
    """Test already_local is set by case-sensitive owner match."""
    forks = mark_local_forks([make_fork('Alice'), make_fork('bob')], {'alice', 'bob'})
    assert [fork.already_local for fork in forks] == [False, True]


def test_newly_added_owner_is_excluded_next_run(config):
    """Test that adding a fork's owner converges towards nothing to add."""
    forks = [make_fork('source', source=True), make_fork('other')]
    local_owners = {'me'}

    first = select_default(mark_local_forks(forks, local_owners), config)
    local_owners.add(first.owner)
    second = select_default(mark_local_forks(forks, local_owners), config)
    local_owners.add(second.owner)

    assert first.owner == 'source'
    assert second.owner == 'other'
    assert addable_forks(mark_local_forks(forks, local_owners)) == []


def test_alias_for_source_defaults_to_upstream(config):
    assert resolve_alias(make_fork('root', source=True), config) == 'upstream'


def test_alias_for_source_uses_configured_alias():
    config = Config(main_fork_owner_alias='owner', fork_alias_by_owner={'root': 'Root'})
    assert resolve_alias(make_fork('root', source=True), config) == 'owner'


def test_alias_from_fork_alias_table():
    """Test a configured alias is used for a non-source fork."""
    config = Config(fork_alias_by_owner={'dirvine': 'David'})
    assert resolve_alias(make_fork('dirvine'), config) == 'David'


def test_alias_falls_back_to_owner():
    config = Config(fork_alias_by_owner={'dirvine': 'David'})
    assert resolve_alias(make_fork('Fraser999'), config) == 'Fraser999'


def test_alias_table_lookup_ignores_case():
    """Test lower-cased keys, as git stores them, still match."""
    config = Config(fork_alias_by_owner={'fraser999': 'Fraser'})
    assert resolve_alias(make_fork('Fraser999'), config) == 'Fraser'


def test_check_alias_rejects_existing_remote():
    with pytest.raises(AliasCollision) as exc_info:
        check_alias('origin', ['origin', 'upstream'])
    assert exc_info.value.alias == 'origin'


def test_check_alias_rejects_invalid_names():
    with pytest.raises(ValueError):
        check_alias('', ['origin'])
    with pytest.raises(ValueError):
        check_alias('two words', ['origin'])
    with pytest.raises(ValueError):
        check_alias('-x', ['origin'])


def test_check_alias_accepts_new_name():
    assert check_alias('David', ['origin']) == 'David'


def test_fetch_url_converted_to_https_when_locals_are_https():
    fork = make_fork('bob', url='git@github.com:bob/project.git')
    assert fetch_url_for(fork, all_local_https=True) == 'https://github.com/bob/project'
    assert fetch_url_for(fork, all_local_https=False) == 'git@github.com:bob/project.git'


def test_remote_spec_always_disables_push():
    """Test RemoteSpec cannot be built with push enabled."""
    spec = build_remote_spec('bob', 'https://github.com/bob/project')
    assert spec.push_disabled is True
    with pytest.raises(TypeError):
        RemoteSpec(name='bob', fetch_url='x', push_disabled=False)
