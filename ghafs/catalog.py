"""
Release and asset catalogs for ghafs.

A catalog is an in-memory snapshot of remote metadata that is replaced
wholesale on every refresh. Refreshes never merge: a new snapshot is
built completely and then swapped in with a single reference
assignment, so concurrent readers see either the old or the new
snapshot and never a mix of both. A failed refresh leaves the previous
snapshot untouched.

No locks are taken and concurrent refreshes are not de-duplicated;
N concurrent refreshes issue N remote fetches.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Sequence, Tuple

from .domain import Asset, Release
from .errors import NotFoundError

logger = logging.getLogger(__name__)

# Tags may contain "/", which no directory entry name can hold
SLASH_STANDIN = "\u2215"


class ReleaseSource(Protocol):
    """Remote operations the catalogs consume. GitHubClient satisfies it."""

    def list_releases(self, owner: str, name: str) -> Sequence[Release]:
        ...

    def list_release_assets(self, owner: str, name: str, release_id: int) -> Sequence[Asset]:
        ...


class AssetCatalog:
    """
    Refreshable list of the assets of one release.

    Nothing is fetched until the first refresh() or lookup().
    """

    def __init__(self, client: ReleaseSource, owner: str, name: str, release: Release):
        self.client = client
        self.owner = owner
        self.name = name
        self.release = release
        self._assets: Tuple[Asset, ...] = ()

    def snapshot(self) -> Tuple[Asset, ...]:
        """The last refreshed snapshot, without fetching."""
        return self._assets

    def refresh(self) -> Tuple[Asset, ...]:
        """
        Fetch the current asset list and replace the snapshot.

        Returns:
            The new snapshot, in service order

        Raises:
            RemoteError: If the listing fails; the prior snapshot is kept
        """
        assets = tuple(self.client.list_release_assets(self.owner, self.name, self.release.id))
        self._assets = assets
        logger.debug(f"Refreshed {len(assets)} assets for {self.release.tag_name}")
        return assets

    def lookup(self, asset_name: str) -> Asset:
        """
        Refresh, then find an asset by exact name.

        The first match wins if the listing contains duplicates.

        Raises:
            NotFoundError: If no asset has that name
            RemoteError: If the refresh fails
        """
        asset = find_asset(self.refresh(), asset_name)
        if asset is None:
            raise NotFoundError(asset_name)
        return asset


def entry_name(tag: str) -> str:
    """Directory entry name for a release tag."""
    return tag.replace("/", SLASH_STANDIN)


def find_asset(assets: Sequence[Asset], asset_name: str) -> Optional[Asset]:
    """Linear, case-sensitive scan; first match wins."""
    for asset in assets:
        if asset.name == asset_name:
            return asset
    return None


@dataclass(frozen=True)
class ReleaseEntry:
    """A release together with the catalog of its assets."""
    release: Release
    assets: AssetCatalog


class ReleaseCatalog:
    """Refreshable mapping from directory entry name to release for one repository."""

    def __init__(self, client: ReleaseSource, owner: str, name: str):
        self.client = client
        self.owner = owner
        self.name = name
        self._entries: Dict[str, ReleaseEntry] = {}

    def snapshot(self) -> Dict[str, ReleaseEntry]:
        """The last refreshed snapshot, without fetching."""
        return self._entries

    def refresh(self) -> Dict[str, ReleaseEntry]:
        """
        Fetch all releases and replace the snapshot.

        Entries are keyed by entry_name(tag), so a tag such as "app/v1"
        is listed as "app∕v1". Duplicate keys resolve last-seen-wins.
        Each entry gets a fresh, still-empty AssetCatalog.

        Returns:
            The new entry name -> ReleaseEntry mapping

        Raises:
            RemoteError: If the listing fails; the prior snapshot is kept
        """
        entries: Dict[str, ReleaseEntry] = {}
        for release in self.client.list_releases(self.owner, self.name):
            entries[entry_name(release.tag_name)] = ReleaseEntry(
                release=release,
                assets=AssetCatalog(self.client, self.owner, self.name, release),
            )
        self._entries = entries
        logger.debug(f"Refreshed {len(entries)} releases for {self.owner}/{self.name}")
        return entries

    def lookup(self, tag: str) -> ReleaseEntry:
        """
        Refresh, then find a release by its entry name or exact tag.

        Raises:
            NotFoundError: If no release has that tag
            RemoteError: If the refresh fails
        """
        entry = self.refresh().get(entry_name(tag))
        if entry is None:
            raise NotFoundError(tag)
        return entry
