"""HTTP access to the hosting provider APIs."""

import logging
from typing import Any, Dict, Iterator, List, Optional

import requests

from addremote import __version__
from addremote.core.errors import NetworkFailure, NotFound, Unauthorized

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
PER_PAGE = 100

TOKEN_HINT = ("Note that Personal Access Tokens are required in some cases; "
              "run 'add-remote --help' for details.")


def is_rate_limited(response: requests.Response) -> bool:
    """GitHub answers an exhausted quota with 403 and no remaining requests; GitLab with 429."""
    if response.status_code == 429:
        return True
    return response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'


class ApiClient:
    """
    Thin wrapper over a requests session that maps HTTP failures onto the
    FetchError taxonomy and follows Link-header pagination.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 headers: Optional[Dict[str, str]] = None, auth=None,
                 timeout: int = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': f'add-remote/{__version__}'})
        if headers:
            self.session.headers.update(headers)
        if auth is not None:
            self.session.auth = auth
        self.timeout = timeout

    def _request(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkFailure(f"Failed to GET {url}: {e}") from e

        if is_rate_limited(response):
            hint = ""
            if response.headers.get('Retry-After'):
                hint = f" (retry after {response.headers['Retry-After']}s)"
            elif response.headers.get('X-RateLimit-Reset'):
                hint = f" (resets at {response.headers['X-RateLimit-Reset']})"
            raise NetworkFailure(f"Failed to GET {url}: API rate limit exceeded{hint}. {TOKEN_HINT}")
        if response.status_code in (401, 403):
            raise Unauthorized(f"Failed to GET {url}: {response.status_code} {response.reason}. {TOKEN_HINT}")
        if response.status_code == 404:
            raise NotFound(f"Failed to GET {url}: repository not found. {TOKEN_HINT}")
        if not response.ok:
            raise NetworkFailure(f"Failed to GET {url}: {response.status_code} {response.reason}")
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise NetworkFailure(f"Invalid JSON from {response.url}") from e

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a single JSON object."""
        data = self._json(self._request(url, params))
        if not isinstance(data, dict):
            raise NetworkFailure(f"Unexpected response from {url}")
        return data

    def get_pages(self, url: str, params: Optional[Dict[str, Any]] = None) -> Iterator[List[Dict[str, Any]]]:
        """
        GET a JSON list and every following page.

        Follows ``Link: <...>; rel="next"`` until the provider sends no next
        link. The next link already carries the query string.
        """
        next_url = url
        page = 0
        while next_url:
            response = self._request(next_url, params if page == 0 else None)
            data = self._json(response)
            if not isinstance(data, list):
                raise NetworkFailure(f"Unexpected response from {next_url}")
            page += 1
            logger.debug("Page %d: %d entries", page, len(data))
            yield data
            next_url = response.links.get('next', {}).get('url')

    def get_all(self, url: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Collect every page into one list; nothing is returned if any page fails."""
        items = []
        for page in self.get_pages(url, params):
            items.extend(page)
        return items
