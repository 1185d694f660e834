"""
High-level API for ghafs.

Builds a DirectoryTree for a repository without mounting it, so the
release tree can be browsed and read from Python:

    import ghafs

    tree = ghafs.open_tree("owner/repo")
    for tag in tree.root.list_children():
        print(tag)
    data = tree.resolve("/v1.0/app.tar.gz").read()
"""

import logging
from typing import Optional, Tuple

from .catalog import ReleaseCatalog
from .config import ClientSettings
from .fetcher import ContentFetcher
from .infra import GitHubClient
from .tree import DirectoryTree

logger = logging.getLogger(__name__)


def parse_repo_spec(spec: str) -> Tuple[str, str]:
    """
    Split an "owner/name" repository reference.

    Raises:
        ValueError: If the reference is not of the form owner/name
    """
    parts = spec.strip().strip('/').split('/')
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Expected OWNER/REPO, got '{spec}'")
    return parts[0], parts[1]


def build_tree(owner: str, name: str, settings: Optional[ClientSettings] = None,
               client: Optional[GitHubClient] = None) -> DirectoryTree:
    """
    Build a DirectoryTree for a repository.

    The repository metadata is fetched here, once; releases and assets
    are fetched lazily by the catalogs.

    Args:
        owner: Repository owner
        name: Repository name
        settings: Shared remote access settings
        client: Client to use instead of a new GitHubClient

    Raises:
        RemoteError: If the repository metadata cannot be fetched
    """
    settings = settings or ClientSettings()
    client = client or GitHubClient(settings)
    repository = client.get_repo(owner, name)
    logger.info(f"Loaded repository {repository.full_name or f'{owner}/{name}'}")
    return DirectoryTree(
        repository=repository,
        releases=ReleaseCatalog(client, owner, name),
        fetcher=ContentFetcher(settings),
    )


def open_tree(repo: str, settings: Optional[ClientSettings] = None) -> DirectoryTree:
    """Build a DirectoryTree from an "owner/name" reference."""
    owner, name = parse_repo_spec(repo)
    return build_tree(owner, name, settings)
