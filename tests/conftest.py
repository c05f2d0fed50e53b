"""Shared pytest fixtures for add-remote tests."""

import shutil
import subprocess

import pytest

from addremote.core.config import GLOBAL, LOCAL
from addremote.core.git import GitRepository
from addremote.core.models import Config, Fork

requires_git = pytest.mark.skipif(shutil.which('git') is None, reason="git executable not available")


class MemoryConfigStore:
    """In-memory stand-in for GitConfigStore."""

    def __init__(self, values=None, tables=None):
        # values: {scope: {key: value}}, tables: {scope: {key: {name: value}}}
        self.values = values or {GLOBAL: {}, LOCAL: {}}
        self.tables = tables or {GLOBAL: {}, LOCAL: {}}
        self.reads = 0

    def get(self, scope, key):
        self.reads += 1
        return self.values.get(scope, {}).get(key)

    def get_table(self, scope, key):
        self.reads += 1
        return dict(self.tables.get(scope, {}).get(key, {}))

    def set(self, scope, key, value):
        self.values.setdefault(scope, {})[key] = value


class FakeDirectory:
    """Fork directory returning a fixed list."""

    def __init__(self, forks):
        self.forks = list(forks)
        self.calls = []

    def list_forks(self, origin):
        self.calls.append(origin)
        return list(self.forks)


def make_fork(owner, source=False, local=False, url=None):
    """Build a Fork with a GitHub SSH URL unless one is given."""
    return Fork(
        owner=owner,
        clone_url=url or f"git@github.com:{owner}/project.git",
        is_source_owner=source,
        already_local=local,
    )


@pytest.fixture
def config():
    """Config with every setting at its default."""
    return Config()


@pytest.fixture
def memory_store():
    return MemoryConfigStore()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ADD_REMOTE_* variables of the developer's shell out of the tests."""
    for name in ('PREFERREDFORK', 'MAINFORKOWNERALIAS', 'FORKALIAS', 'GITHUBTOKEN', 'GITLABTOKEN'):
        monkeypatch.delenv(f'ADD_REMOTE_{name}', raising=False)


@pytest.fixture
def git_home(tmp_path, monkeypatch):
    """Isolate git from the user's global and system config."""
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    monkeypatch.setenv('GIT_CONFIG_NOSYSTEM', '1')
    monkeypatch.setenv('GIT_TERMINAL_PROMPT', '0')
    monkeypatch.delenv('GIT_CONFIG_GLOBAL', raising=False)
    monkeypatch.delenv('XDG_CONFIG_HOME', raising=False)
    return home


@pytest.fixture
def git_repo(tmp_path, git_home):
    """A git repository whose origin is https://github.com/alice/project.git."""
    path = tmp_path / 'project'
    path.mkdir()
    subprocess.run(['git', 'init', '-q', str(path)], check=True)
    subprocess.run(['git', 'remote', 'add', 'origin', 'https://github.com/alice/project.git'],
                   cwd=str(path), check=True)
    return GitRepository(str(path))
