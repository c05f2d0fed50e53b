"""Git repository discovery and the git subprocess helper."""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class GitCommandError(Exception):
    """A git invocation exited with a non-zero status."""

    def __init__(self, args: List[str], returncode: int, stderr: str):
        message = f"'git {' '.join(args)}' failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)
        self.args_list = args
        self.returncode = returncode
        self.stderr = stderr


def run_git(args: List[str], cwd: Optional[Path] = None, check: bool = True) -> subprocess.CompletedProcess:
    """
    Run git with ``args`` and capture its output as text.

    Args:
        args: Arguments following ``git``
        cwd: Working directory for the command
        check: Raise GitCommandError on a non-zero exit

    Returns:
        The completed process
    """
    logger.debug("Running git %s", ' '.join(args))
    try:
        result = subprocess.run(
            ['git'] + args,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise GitCommandError(args, 127, "git executable not found")
    if check and result.returncode != 0:
        raise GitCommandError(args, result.returncode, result.stderr.strip())
    return result


def is_valid_remote_name(name: str) -> bool:
    """
    Ask git whether ``name`` can name a remote.

    Rejects what 'git remote add' would, e.g. ``a..b``, ``a:b`` or a name
    ending in ``.lock``. A leading dash would be read as an option.
    """
    if not name or name.startswith('-'):
        return False
    return run_git(['check-ref-format', f'refs/remotes/{name}'], check=False).returncode == 0


class GitRepository:
    """
    A Git work tree on disk.

    Collaborators (config store, remote inspector, remote applier) are
    created lazily so that a repository can be inspected without touching
    git config until needed.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to the work tree root
        """
        self.work_tree = Path(path).resolve()
        self.git_path = self.work_tree / '.git'

        self._config_store = None
        self._remote_inspector = None
        self._remote_applier = None

    @property
    def config(self):
        """Get GitConfigStore instance."""
        if self._config_store is None:
            from .config import GitConfigStore
            self._config_store = GitConfigStore(self.work_tree)
        return self._config_store

    @property
    def remotes(self):
        """Get LocalRemoteInspector instance."""
        if self._remote_inspector is None:
            from .remote import LocalRemoteInspector
            self._remote_inspector = LocalRemoteInspector(self)
        return self._remote_inspector

    @property
    def applier(self):
        """Get GitRemoteApplier instance."""
        if self._remote_applier is None:
            from .remote import GitRemoteApplier
            self._remote_applier = GitRemoteApplier(self)
        return self._remote_applier

    def git(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        """Run a git command inside this work tree."""
        return run_git(list(args), cwd=self.work_tree, check=check)

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['GitRepository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .git directory
        (or a .git file, as used by worktrees and submodules) or reaches the
        filesystem root.

        Args:
            path: Starting path for search

        Returns:
            GitRepository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / '.git').exists():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    def __repr__(self) -> str:
        return f"GitRepository({self.work_tree})"
