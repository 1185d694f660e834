"""
GitHub API client infrastructure for ghafs.

Provides the remote side of the release filesystem:
- Repository metadata, release and asset listings (paginated)
- Rate limit tracking from response headers

The client keeps no per-request state, so catalogs refreshing from
several FUSE threads at once can share a single instance.
"""

import time
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

import requests

from ..config import ClientSettings
from ..domain import Repository, Release, Asset
from ..errors import RemoteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RateLimitStatus:
    """GitHub API rate limit status."""
    remaining: int
    limit: int
    reset_time: int  # Unix timestamp
    used: int

    @property
    def minutes_until_reset(self) -> int:
        """Minutes until rate limit resets."""
        now = int(time.time())
        return max(0, (self.reset_time - now) // 60)

    @property
    def is_low(self) -> bool:
        """Check if rate limit is getting low (< 100 remaining)."""
        return self.remaining < 100

    @classmethod
    def from_headers(cls, headers) -> Optional['RateLimitStatus']:
        """Parse X-RateLimit-* headers, or None when absent or malformed."""
        try:
            remaining = int(headers.get('X-RateLimit-Remaining', -1))
            limit = int(headers.get('X-RateLimit-Limit', -1))
            reset_time = int(headers.get('X-RateLimit-Reset', 0))
            used = int(headers.get('X-RateLimit-Used', 0))
        except (ValueError, TypeError):
            return None
        if remaining < 0 or limit < 0:
            return None
        return cls(remaining=remaining, limit=limit, reset_time=reset_time, used=used)


class GitHubClient:
    """
    GitHub REST client for repository, release and asset metadata.

    Every failure surfaces as RemoteError; nothing is retried and no
    partially paginated result is ever returned.

    Example:
        client = GitHubClient(ClientSettings(token="ghp_..."))
        for release in client.list_releases("owner", "repo"):
            print(release.tag_name)
    """

    def __init__(self, settings: Optional[ClientSettings] = None):
        """
        Initialize GitHubClient.

        Args:
            settings: Shared access settings (token, API URL, timeout)
        """
        self.settings = settings or ClientSettings()
        self._rate_limit_status: Optional[RateLimitStatus] = None

    def _headers(self) -> Dict[str, str]:
        headers = {
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': self.settings.user_agent,
        }
        headers.update(self.settings.auth_headers())
        return headers

    def _url(self, endpoint: str) -> str:
        return f"{self.settings.api_url}/{endpoint.lstrip('/')}"

    def _update_rate_limit_from_headers(self, headers) -> None:
        """Update rate limit status from response headers."""
        status = RateLimitStatus.from_headers(headers)
        if status is None:
            return
        # Single reference swap; readers see either the old or new status
        self._rate_limit_status = status
        if status.is_low:
            logger.warning(
                f"GitHub API rate limit low: {status.remaining}/{status.limit} remaining, "
                f"resets in {status.minutes_until_reset} minutes"
            )

    def get_rate_limit_status(self) -> Optional[RateLimitStatus]:
        """Rate limit status seen on the last response, if any."""
        return self._rate_limit_status

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Issue one GET and fail with RemoteError on anything but 200."""
        try:
            response = requests.get(
                url,
                headers=self._headers(),
                params=params,
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"GitHub API request failed: {e}")
            raise RemoteError(None, str(e)) from e

        self._update_rate_limit_from_headers(response.headers)

        if response.status_code != 200:
            message = f"{response.status_code} {response.reason}"
            logger.warning(f"GitHub API error {message} for {url}")
            raise RemoteError(response.status_code, message)
        return response

    def _api(self, endpoint: str) -> Any:
        """GET a single JSON document."""
        response = self._get(self._url(endpoint))
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(response.status_code, f"Invalid JSON from {endpoint}: {e}") from e

    def _api_paginated(self, endpoint: str) -> List[Dict[str, Any]]:
        """
        GET every page of a list endpoint.

        Follows the Link: rel="next" header until it is absent.

        Args:
            endpoint: API path relative to the base URL

        Returns:
            Items from all pages, in service order
        """
        items: List[Dict[str, Any]] = []
        url: Optional[str] = self._url(endpoint)
        params: Optional[Dict[str, Any]] = {'per_page': self.settings.per_page}

        while url:
            response = self._get(url, params=params)
            try:
                page = response.json()
            except ValueError as e:
                raise RemoteError(response.status_code, f"Invalid JSON from {endpoint}: {e}") from e
            if not isinstance(page, list):
                raise RemoteError(response.status_code, f"Expected a list from {endpoint}")
            items.extend(page)

            # The next link already carries the query string
            url = response.links.get('next', {}).get('url')
            params = None

        return items

    def _parse(self, endpoint: str, parser: Callable[[Dict[str, Any]], T], data: Any) -> T:
        """Build a domain object, treating a malformed payload as a remote failure."""
        try:
            return parser(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed item from {endpoint}: {e}")
            raise RemoteError(200, f"Malformed response from {endpoint}: {e}") from e

    def get_repo(self, owner: str, name: str) -> Repository:
        """
        Get repository metadata.

        Args:
            owner: Repository owner
            name: Repository name

        Returns:
            Repository

        Raises:
            RemoteError: If the repository cannot be fetched
        """
        endpoint = f"repos/{owner}/{name}"
        return self._parse(endpoint, Repository.from_api_response, self._api(endpoint))

    def list_releases(self, owner: str, name: str) -> List[Release]:
        """
        Get every release of a repository.

        Args:
            owner: Repository owner
            name: Repository name

        Returns:
            List of Release, in service order

        Raises:
            RemoteError: If any page fails or an item is malformed
        """
        endpoint = f"repos/{owner}/{name}/releases"
        return [
            self._parse(endpoint, Release.from_api_response, item)
            for item in self._api_paginated(endpoint)
        ]

    def list_release_assets(self, owner: str, name: str, release_id: int) -> List[Asset]:
        """
        Get every asset attached to a release.

        Args:
            owner: Repository owner
            name: Repository name
            release_id: Numeric release id

        Returns:
            List of Asset, in service order

        Raises:
            RemoteError: If any page fails or an item is malformed
        """
        endpoint = f"repos/{owner}/{name}/releases/{release_id}/assets"
        return [
            self._parse(endpoint, Asset.from_api_response, item)
            for item in self._api_paginated(endpoint)
        ]
