"""Unit tests for repository URL parsing."""

import pytest

from addremote.core.urls import parse_url


@pytest.mark.parametrize('url, host, owner, name, is_https', [
    ('https://github.com/user/repo.git', 'github.com', 'user', 'repo', True),
    ('https://github.com/user/repo', 'github.com', 'user', 'repo', True),
    ('git@github.com:user/repo.git', 'github.com', 'user', 'repo', False),
    ('ssh://git@github.com/user/repo.git', 'github.com', 'user', 'repo', False),
    ('https://gitlab.com/group/sub/repo.git', 'gitlab.com', 'group', 'sub/repo', True),
    ('git@gitlab.com:group/repo.git', 'gitlab.com', 'group', 'repo', False),
    ('https://token@github.com/user/repo.git', 'github.com', 'user', 'repo', True),
])
def test_parse_supported_urls(url, host, owner, name, is_https):
    parsed = parse_url(url)
    assert parsed is not None
    assert (parsed.host, parsed.owner, parsed.name, parsed.is_https) == (host, owner, name, is_https)


@pytest.mark.parametrize('url', [
    '/path/to/repo',
    '../other-repo',
    'file:///path/to/repo',
    'https://bitbucket.org/user/repo.git',
    'git@example.com:user/repo.git',
    'https://github.com/user',
])
def test_unsupported_urls(url):
    assert parse_url(url) is None


def test_to_https_from_ssh():
    assert parse_url('git@gitlab.com:group/repo.git').to_https() == 'https://gitlab.com/group/repo'


def test_to_https_keeps_https_url():
    url = 'https://github.com/user/repo.git'
    assert parse_url(url).to_https() == url
