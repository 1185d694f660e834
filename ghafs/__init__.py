"""
ghafs - GitHub release assets as a read-only filesystem.

Each release of a repository appears as a directory named by its tag,
and each release asset as a file inside it:

    /                    repository root
    /v1.0/               release v1.0
    /v1.0/app.tar.gz     asset of release v1.0

Quick Start:
    import ghafs

    tree = ghafs.open_tree("owner/repo")
    print(tree.root.list_children())
    data = tree.resolve("/v1.0/app.tar.gz").read()

Mounting (requires libfuse):
    from ghafs.mount import mount_release_fs
    mount_release_fs("owner", "repo", "/mnt/releases", ghafs.ClientSettings())

Listings and lookups always query GitHub afresh; nothing is cached
between calls and nothing is persisted on disk.
"""

__version__ = "0.1.0"

# High-level API
from .api import open_tree, build_tree, parse_repo_spec

# Domain objects
from .domain import Repository, Release, Asset

# Core
from .catalog import ReleaseCatalog, AssetCatalog, ReleaseEntry
from .fetcher import ContentFetcher
from .tree import DirectoryTree, RootNode, ReleaseDirectory, AssetFile, NodeAttributes

# Errors
from .errors import GhafsError, NotFoundError, RemoteError, UnsupportedOperationError, MountError

# Configuration
from .config import ClientSettings, load_config, save_config

__all__ = [
    # Version
    "__version__",
    # High-level API
    "open_tree",
    "build_tree",
    "parse_repo_spec",
    # Domain objects
    "Repository",
    "Release",
    "Asset",
    # Core
    "ReleaseCatalog",
    "AssetCatalog",
    "ReleaseEntry",
    "ContentFetcher",
    "DirectoryTree",
    "RootNode",
    "ReleaseDirectory",
    "AssetFile",
    "NodeAttributes",
    # Errors
    "GhafsError",
    "NotFoundError",
    "RemoteError",
    "UnsupportedOperationError",
    "MountError",
    # Configuration
    "ClientSettings",
    "load_config",
    "save_config",
]
