"""Local remote inspection and creation for add-remote."""

import logging
from typing import Dict, Optional, Set

from .errors import RemoteAlreadyExists, WriteFailure, UnsupportedHost
from .git import GitCommandError
from .models import RemoteSpec
from .urls import RepositoryUrl, parse_url

logger = logging.getLogger(__name__)

# Push URL written for every added remote; git rejects pushes to it.
DISABLED_PUSH_URL = 'disable_push'


class LocalRemoteInspector:
    """
    Reads the remotes already configured in a repository.

    Remote URLs are read from the repository's git config in a single call
    and cached, so each run sees one consistent snapshot.
    """

    def __init__(self, repo):
        """Initialize remote inspector."""
        self.repo = repo
        self._remotes = None

    def list_remotes(self) -> Dict[str, str]:
        """
        List all configured remotes.

        Returns:
            Dict mapping remote names to fetch URLs, in config order
        """
        if self._remotes is None:
            result = self.repo.git('config', '--local', '--get-regexp', r'^remote\..*\.url$', check=False)
            remotes = {}
            for line in result.stdout.splitlines():
                key, _, url = line.partition(' ')
                # Remote names may themselves contain dots
                name = key[len('remote.'):-len('.url')]
                remotes.setdefault(name, url)
            self._remotes = remotes
        return self._remotes

    def refresh(self) -> None:
        """Forget the cached remotes."""
        self._remotes = None

    def remote_names(self) -> Set[str]:
        """Names of all configured remotes."""
        return set(self.list_remotes())

    def parsed_remotes(self) -> Dict[str, RepositoryUrl]:
        """Remotes hosted on GitHub or GitLab, keyed by name."""
        parsed = {}
        for name, url in self.list_remotes().items():
            repository_url = parse_url(url)
            if repository_url is not None:
                parsed[name] = repository_url
        return parsed

    def list_remote_owners(self) -> Set[str]:
        """
        Owners already present as remotes.

        Derived from the owner segment of each GitHub/GitLab fetch URL;
        matching against fork owners is case-sensitive.
        """
        return {url.owner for url in self.parsed_remotes().values()}

    def origin_url(self) -> RepositoryUrl:
        """
        The URL that identifies the repository on its hosting provider.

        Uses the 'origin' remote when it is hosted on GitHub or GitLab,
        otherwise the first remote that is.

        Raises:
            UnsupportedHost: No remote points at GitHub or GitLab
        """
        parsed = self.parsed_remotes()
        if 'origin' in parsed:
            return parsed['origin']
        for repository_url in parsed.values():
            return repository_url
        raise UnsupportedHost(
            "This repository doesn't appear to be hosted on GitLab or GitHub. "
            "'add-remote' can only be used with GitLab or GitHub projects."
        )

    def all_https(self) -> bool:
        """True if every hosted remote uses an HTTPS URL."""
        parsed = self.parsed_remotes()
        return bool(parsed) and all(url.is_https for url in parsed.values())

    def verbose_listing(self) -> str:
        """Output of 'git remote -v'."""
        return self.repo.git('remote', '-v').stdout.rstrip()

    def branch_listing(self, name: str) -> str:
        """Remote-tracking branches of ``name``, most recently committed first."""
        result = self.repo.git('branch', '--list', f'{name}/*', '-vr', '--sort=-committerdate', check=False)
        return result.stdout.rstrip()


class GitRemoteApplier:
    """
    Writes a RemoteSpec to the repository.

    The remote is added with its fetch URL and then its push URL is
    replaced; if the second step fails the remote is removed again, so
    either both succeed or nothing is left behind.
    """

    def __init__(self, repo):
        """Initialize remote applier."""
        self.repo = repo

    def add_remote(self, name: str, fetch_url: str) -> None:
        """
        Add a remote with the given fetch URL.

        Raises:
            RemoteAlreadyExists: A remote called ``name`` exists
            WriteFailure: git failed
        """
        if name in self.repo.remotes.remote_names():
            raise RemoteAlreadyExists(f"Remote '{name}' already exists")
        try:
            self.repo.git('remote', 'add', name, fetch_url)
        except GitCommandError as e:
            raise WriteFailure(f"Failed to add remote '{name}': {e}") from e
        finally:
            self.repo.remotes.refresh()

    def disable_push(self, name: str) -> None:
        """
        Point the push URL of ``name`` at a value git cannot push to.

        Raises:
            WriteFailure: git failed
        """
        try:
            self.repo.git('remote', 'set-url', '--push', name, DISABLED_PUSH_URL)
        except GitCommandError as e:
            raise WriteFailure(f"Failed to disable push for remote '{name}': {e}") from e

    def remove_remote(self, name: str) -> None:
        """
        Remove a remote, ignoring one that doesn't exist.

        Raises:
            WriteFailure: git failed to remove it
        """
        if name not in self.repo.remotes.remote_names():
            return
        try:
            self.repo.git('remote', 'remove', name)
        except GitCommandError as e:
            raise WriteFailure(f"Failed to remove remote '{name}': {e}") from e
        finally:
            self.repo.remotes.refresh()

    def apply(self, spec: RemoteSpec) -> None:
        """
        Create the remote described by ``spec`` with push disabled.

        Raises:
            RemoteAlreadyExists: A remote with that name exists
            WriteFailure: git failed; the remote was removed again, or the
                message names the half-configured remote left behind
        """
        self.add_remote(spec.name, spec.fetch_url)
        try:
            self.disable_push(spec.name)
        except WriteFailure as push_error:
            logger.debug("Rolling back remote '%s'", spec.name)
            try:
                self.remove_remote(spec.name)
            except WriteFailure as rollback_error:
                raise WriteFailure(
                    f"Remote '{spec.name}' is half-configured with push still enabled; "
                    f"remove it with 'git remote remove {spec.name}'. {push_error}. {rollback_error}"
                ) from rollback_error
            raise
        logger.debug("Added remote '%s' -> %s", spec.name, spec.fetch_url)

    def fetch(self, name: str) -> Optional[str]:
        """
        Fetch from a remote.

        Returns:
            None on success, otherwise git's error output
        """
        result = self.repo.git('fetch', name, check=False)
        if result.returncode != 0:
            return result.stderr.strip() or f"git fetch {name} failed"
        return None
