"""
Mounting the release filesystem.

Loads the repository metadata once, builds the tree and hands it to
fusepy. Everything after mount is driven by kernel callbacks.
"""

import logging
from pathlib import Path

from fuse import FUSE

from .api import build_tree
from .config import ClientSettings
from .errors import MountError
from .fuse_ops import ReleaseAssetsOperations

logger = logging.getLogger(__name__)


def mount_release_fs(
    owner: str,
    name: str,
    mountpoint: str,
    settings: ClientSettings,
    foreground: bool = True,
    threads: bool = True,
    allow_other: bool = False,
) -> None:
    """
    Mount the releases of owner/name at mountpoint.

    Blocks until the filesystem is unmounted when foreground is True.

    Args:
        owner: Repository owner
        name: Repository name
        mountpoint: Existing directory to mount on
        settings: Shared remote access settings
        foreground: Stay attached to the terminal
        threads: Let fusepy dispatch callbacks concurrently
        allow_other: Let other users access the mount

    Raises:
        MountError: If the mount point is unusable or FUSE fails
        RemoteError: If the repository metadata cannot be fetched
    """
    target = Path(mountpoint).expanduser()
    if not target.is_dir():
        raise MountError(f"Mount point is not a directory: {target}")

    tree = build_tree(owner, name, settings)
    operations = ReleaseAssetsOperations(tree)

    logger.info(f"Mounting {owner}/{name} at {target}")
    try:
        FUSE(
            operations,
            str(target),
            foreground=foreground,
            nothreads=not threads,
            ro=True,
            fsname=f"ghafs:{owner}/{name}",
            allow_other=allow_other,
        )
    except RuntimeError as e:
        raise MountError(f"Failed to mount {target}: {e}") from e
