"""Fork listing for repositories hosted on GitHub."""

import logging
from typing import List, Optional

from addremote.core.errors import NetworkFailure
from addremote.core.models import Fork
from addremote.core.urls import RepositoryUrl

from .api import ApiClient, PER_PAGE

logger = logging.getLogger(__name__)

GITHUB_API = 'https://api.github.com/repos'


def github_auth(token: Optional[str]):
    """
    Build request credentials from the configured token.

    A ``username:token`` value is sent with HTTP basic auth; a bare token is
    sent as a bearer token.

    Returns:
        Tuple of (headers, auth)
    """
    if not token:
        return {}, None
    if ':' in token:
        username, _, secret = token.partition(':')
        return {}, (username, secret)
    return {'Authorization': f'Bearer {token}'}, None


class GitHubForkDirectory:
    """Lists the fork network of a GitHub repository."""

    host = 'github.com'

    def __init__(self, token: Optional[str] = None, session=None):
        headers, auth = github_auth(token)
        headers['Accept'] = 'application/vnd.github+json'
        self.client = ApiClient(session=session, headers=headers, auth=auth)

    def list_forks(self, origin: RepositoryUrl) -> List[Fork]:
        """
        List every fork of the network ``origin`` belongs to.

        The network root comes from the repository's ``source`` object, or is
        the repository itself when it is not a fork. Forks are listed for the
        root and the root is appended as the source-owner record.

        Raises:
            FetchError: The provider could not be queried
        """
        repository = self.client.get(f"{GITHUB_API}/{origin.owner}/{origin.name}")
        source = repository.get('source') or repository
        try:
            source_owner = source['owner']['login']
            source_name = source['name']
            source_url = source['ssh_url']
        except (KeyError, TypeError) as e:
            raise NetworkFailure(f"Unexpected repository details for {origin.path}") from e
        logger.debug("Source repository is %s/%s", source_owner, source_name)

        forks = []
        seen = {source_owner}
        for item in self.client.get_all(f"{GITHUB_API}/{source_owner}/{source_name}/forks",
                                        params={'per_page': PER_PAGE}):
            try:
                owner = item['owner']['login']
                url = item['ssh_url']
            except (KeyError, TypeError) as e:
                raise NetworkFailure(f"Unexpected fork entry for {source_owner}/{source_name}") from e
            if owner in seen:
                continue
            seen.add(owner)
            forks.append(Fork(owner=owner, clone_url=url))

        forks.append(Fork(owner=source_owner, clone_url=source_url, is_source_owner=True))
        return forks
