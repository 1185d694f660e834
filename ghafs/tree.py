"""
The release filesystem tree.

Three node kinds answer the filesystem callbacks:

    /                       RootNode          one entry per release tag
    /<tag>/                 ReleaseDirectory  one entry per asset name
    /<tag>/<asset>          AssetFile         asset bytes on read

Every node exposes the same capability methods: attributes(),
list_children(), lookup(name) and read(). A node kind that lacks a
capability raises the matching OSError subclass.

A "/" inside a tag cannot appear in a directory entry, so such tags are
listed with U+2215 (DIVISION SLASH) in its place; see catalog.entry_name.

Nodes are immutable. A ReleaseDirectory or AssetFile pins the Release or
Asset returned by the lookup that created it and never re-resolves
against later snapshots. Listing or looking up children always
refreshes the owning catalog first.
"""

import os
import stat
from dataclasses import dataclass
from datetime import datetime
from typing import List, Union

from .catalog import AssetCatalog, ReleaseCatalog, entry_name
from .domain import Asset, Release, Repository
from .fetcher import ContentFetcher

ROOT_INODE = 1
DIR_MODE = stat.S_IFDIR | 0o775
FILE_MODE = stat.S_IFREG | 0o664


@dataclass(frozen=True)
class NodeAttributes:
    """Attributes reported for a node."""
    inode: int
    mode: int
    size: int
    atime: datetime
    mtime: datetime
    ctime: datetime
    crtime: datetime
    nlink: int = 1

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def to_stat(self) -> dict:
        """Stat dictionary suitable for fuse.Operations.getattr()."""
        return {
            'st_ino': self.inode,
            'st_mode': self.mode,
            'st_nlink': self.nlink,
            'st_uid': os.getuid(),
            'st_gid': os.getgid(),
            'st_size': self.size,
            'st_atime': self.atime.timestamp(),
            'st_mtime': self.mtime.timestamp(),
            'st_ctime': self.ctime.timestamp(),
            'st_birthtime': self.crtime.timestamp(),
        }


def _dir_attributes(inode: int, cma_time: datetime, crtime: datetime) -> NodeAttributes:
    return NodeAttributes(
        inode=inode,
        mode=DIR_MODE,
        size=0,
        atime=cma_time,
        mtime=cma_time,
        ctime=cma_time,
        crtime=crtime,
        nlink=2,
    )


@dataclass(frozen=True)
class AssetFile:
    """A release asset exposed as a regular file."""
    asset: Asset
    fetcher: ContentFetcher

    @property
    def name(self) -> str:
        return self.asset.name

    def attributes(self) -> NodeAttributes:
        # GitHub does not track access time; updated time stands in
        updated = self.asset.updated_at
        return NodeAttributes(
            inode=self.asset.id,
            mode=FILE_MODE,
            size=self.asset.size,
            atime=updated,
            mtime=updated,
            ctime=updated,
            crtime=self.asset.created_at,
        )

    def children(self) -> List['Node']:
        raise NotADirectoryError(self.asset.name)

    def list_children(self) -> List[str]:
        raise NotADirectoryError(self.asset.name)

    def lookup(self, name: str) -> 'Node':
        raise NotADirectoryError(self.asset.name)

    def read(self) -> bytes:
        """Fetch the complete content. Every call downloads again."""
        return self.fetcher.fetch(self.asset)


@dataclass(frozen=True)
class ReleaseDirectory:
    """A release exposed as a directory of its assets."""
    release: Release
    assets: AssetCatalog
    fetcher: ContentFetcher

    @property
    def name(self) -> str:
        return entry_name(self.release.tag_name)

    def attributes(self) -> NodeAttributes:
        # The tag may predate the release; only the publish time is meaningful
        return _dir_attributes(self.release.id, self.release.publish_time, self.release.created_at)

    def children(self) -> List[AssetFile]:
        """Child nodes from one fresh asset snapshot."""
        return [AssetFile(asset=asset, fetcher=self.fetcher) for asset in self.assets.refresh()]

    def list_children(self) -> List[str]:
        return [asset.name for asset in self.assets.refresh()]

    def lookup(self, name: str) -> AssetFile:
        return AssetFile(asset=self.assets.lookup(name), fetcher=self.fetcher)

    def read(self) -> bytes:
        raise IsADirectoryError(self.release.tag_name)


@dataclass(frozen=True)
class RootNode:
    """The repository root, one directory per release tag."""
    repository: Repository
    releases: ReleaseCatalog
    fetcher: ContentFetcher

    @property
    def name(self) -> str:
        return ''

    def attributes(self) -> NodeAttributes:
        return _dir_attributes(ROOT_INODE, self.repository.updated_at, self.repository.created_at)

    def children(self) -> List[ReleaseDirectory]:
        """Child nodes from one fresh release snapshot."""
        return [
            ReleaseDirectory(release=entry.release, assets=entry.assets, fetcher=self.fetcher)
            for entry in self.releases.refresh().values()
        ]

    def list_children(self) -> List[str]:
        return list(self.releases.refresh().keys())

    def lookup(self, name: str) -> ReleaseDirectory:
        entry = self.releases.lookup(name)
        return ReleaseDirectory(release=entry.release, assets=entry.assets, fetcher=self.fetcher)

    def read(self) -> bytes:
        raise IsADirectoryError('/')


Node = Union[RootNode, ReleaseDirectory, AssetFile]


class DirectoryTree:
    """
    Entry point for path-based access to the release tree.

    Example:
        tree = DirectoryTree(repository, ReleaseCatalog(client, "owner", "repo"), fetcher)
        for tag in tree.root.list_children():
            print(tag)
        data = tree.resolve("/v1.0/app.tar.gz").read()
    """

    def __init__(self, repository: Repository, releases: ReleaseCatalog, fetcher: ContentFetcher):
        self.root = RootNode(repository=repository, releases=releases, fetcher=fetcher)

    def resolve(self, path: str) -> Node:
        """
        Resolve an absolute path by successive lookups from the root.

        Each step refreshes the catalog it looks into.

        Raises:
            NotFoundError: If a component does not exist
            NotADirectoryError: If a component below a file is requested
            RemoteError: If a refresh fails
        """
        node: Node = self.root
        for part in split_path(path):
            node = node.lookup(part)
        return node


def split_path(path: str) -> List[str]:
    """Split a filesystem path into its non-empty components."""
    return [part for part in path.split('/') if part]
