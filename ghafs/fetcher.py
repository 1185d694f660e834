"""
Asset content retrieval for ghafs.

Downloads the full body of one release asset. GitHub answers the API
asset URL with a redirect to its storage backend when the raw
representation is requested; requests follows it and strips the
Authorization header when the redirect leaves the API host.
"""

import logging
from typing import Optional

import requests

from .config import ClientSettings
from .domain import Asset
from .errors import RemoteError

logger = logging.getLogger(__name__)

OCTET_STREAM = 'application/octet-stream'


class ContentFetcher:
    """Fetches asset bytes; safe for concurrent use."""

    def __init__(self, settings: Optional[ClientSettings] = None):
        self.settings = settings or ClientSettings()

    def fetch(self, asset: Asset) -> bytes:
        """
        Download the complete content of an asset.

        Args:
            asset: Asset whose url is fetched

        Returns:
            The whole response body

        Raises:
            RemoteError: On transport failure or any status other than 200.
                Nothing is retried.
        """
        headers = {
            'Accept': OCTET_STREAM,
            'User-Agent': self.settings.user_agent,
        }
        headers.update(self.settings.auth_headers())

        try:
            response = requests.get(asset.url, headers=headers, timeout=self.settings.timeout)
        except requests.RequestException as e:
            logger.warning(f"Asset download failed for {asset.url}: {e}")
            raise RemoteError(None, str(e)) from e

        if response.status_code != 200:
            raise RemoteError(response.status_code, f"{response.status_code} {response.reason}")

        body = response.content
        logger.debug(f"Asset URL: {asset.url}, Content-Length: {len(body)}")
        return body
