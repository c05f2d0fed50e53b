"""Fork listing for repositories hosted on GitLab."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from addremote.core.errors import NetworkFailure
from addremote.core.models import Fork
from addremote.core.urls import RepositoryUrl

from .api import ApiClient, PER_PAGE

logger = logging.getLogger(__name__)

GITLAB_API = 'https://gitlab.com/api/v4/projects'

# Guards against a forked_from_project cycle in a malformed response
MAX_PARENT_DEPTH = 50


def project_url(path_with_namespace: str) -> str:
    """API URL for a project addressed by its full path."""
    return f"{GITLAB_API}/{quote(path_with_namespace, safe='')}"


def owner_of(path_with_namespace: str) -> str:
    """Top-level namespace of a project path."""
    return path_with_namespace.split('/', 1)[0]


class GitLabForkDirectory:
    """Lists the fork network of a GitLab project."""

    host = 'gitlab.com'

    def __init__(self, token: Optional[str] = None, session=None):
        headers = {'PRIVATE-TOKEN': token} if token else {}
        self.client = ApiClient(session=session, headers=headers)

    def find_source(self, origin: RepositoryUrl) -> Dict[str, Any]:
        """Follow ``forked_from_project`` up to the project at the root of the network."""
        project = self.client.get(project_url(origin.path))
        for _ in range(MAX_PARENT_DEPTH):
            parent = project.get('forked_from_project')
            if not parent:
                return project
            try:
                parent_path = parent['path_with_namespace']
            except (KeyError, TypeError) as e:
                raise NetworkFailure(f"Unexpected project details for {origin.path}") from e
            logger.debug("%s is a fork of %s", project.get('path_with_namespace'), parent_path)
            project = self.client.get(project_url(parent_path))
        raise NetworkFailure(f"Fork chain of {origin.path} is too deep")

    def list_forks(self, origin: RepositoryUrl) -> List[Fork]:
        """
        List the direct forks of the network root plus the root itself.

        Forks of forks are not listed; each fork that has its own forks is
        reported with a warning.

        Raises:
            FetchError: The provider could not be queried
        """
        source = self.find_source(origin)
        try:
            source_path = source['path_with_namespace']
            source_id = source['id']
            source_url = source['ssh_url_to_repo']
        except (KeyError, TypeError) as e:
            raise NetworkFailure(f"Unexpected project details for {origin.path}") from e
        source_owner = owner_of(source_path)

        forks = []
        seen = {source_owner}
        for item in self.client.get_all(f"{GITLAB_API}/{source_id}/forks", params={'per_page': PER_PAGE}):
            try:
                owner = owner_of(item['path_with_namespace'])
                url = item['ssh_url_to_repo']
            except (KeyError, TypeError) as e:
                raise NetworkFailure(f"Unexpected fork entry for {source_path}") from e

            subfork_count = item.get('forks_count') or 0
            if subfork_count > 0:
                logger.warning("%s which is a fork of %s has %d fork%s being ignored.",
                               url, source_url, subfork_count, 's' if subfork_count > 1 else '')
            if owner in seen:
                continue
            seen.add(owner)
            forks.append(Fork(owner=owner, clone_url=url))

        forks.append(Fork(owner=source_owner, clone_url=source_url, is_source_owner=True))
        return forks
