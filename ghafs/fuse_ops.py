"""
FUSE operations for the release filesystem.

Adapts the path-based fusepy callback protocol onto the DirectoryTree.
Every callback re-resolves its path from the root, so listings and
lookups always reflect a fresh remote snapshot. Opening a file pins the
resolved AssetFile to the file handle; reads on that handle use the
pinned asset even if the release changes remotely.

The kernel reads in page-sized chunks. The first read on a handle
downloads the full asset and buffers it on the handle; later reads on
the same handle slice that buffer. Each new open downloads again.
"""

import errno
import functools
import itertools
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional

from fuse import FuseOSError, Operations

from .errors import GhafsError, NotFoundError, UnsupportedOperationError
from .tree import AssetFile, DirectoryTree

logger = logging.getLogger(__name__)

_WRITE_FLAGS = os.O_WRONLY | os.O_RDWR | os.O_APPEND | os.O_TRUNC | os.O_CREAT


def errno_for(exc: BaseException) -> int:
    """Map an exception raised by the tree to the errno reported to the kernel."""
    if isinstance(exc, GhafsError):
        return exc.errno
    if isinstance(exc, IsADirectoryError):
        return errno.EISDIR
    if isinstance(exc, NotADirectoryError):
        return errno.ENOTDIR
    return errno.EIO


def translate_errors(method):
    """Convert tree errors into FuseOSError with the matching errno."""
    @functools.wraps(method)
    def wrapper(self, path, *args, **kwargs):
        try:
            return method(self, path, *args, **kwargs)
        except FuseOSError:
            raise
        except (GhafsError, IsADirectoryError, NotADirectoryError) as e:
            code = errno_for(e)
            if isinstance(e, NotFoundError):
                logger.debug(f"{method.__name__}({path}): {e}")
            else:
                logger.warning(f"{method.__name__}({path}) failed: {e}")
            raise FuseOSError(code) from e
    return wrapper


def _read_only(operation: str):
    def method(self, path, *args, **kwargs):
        raise FuseOSError(UnsupportedOperationError(operation).errno)
    method.__name__ = operation
    method.__doc__ = f"Reject {operation}; the filesystem is read-only."
    return method


@dataclass
class OpenAsset:
    """State behind one file handle."""
    node: AssetFile
    content: Optional[bytes] = None
    lock: threading.Lock = field(default_factory=threading.Lock)

    def read(self) -> bytes:
        with self.lock:
            if self.content is None:
                self.content = self.node.read()
            return self.content


class ReleaseAssetsOperations(Operations):
    """
    fusepy Operations serving a DirectoryTree.

    Example:
        ops = ReleaseAssetsOperations(tree)
        fuse.FUSE(ops, "/mnt/releases", foreground=True, ro=True)
    """

    def __init__(self, tree: DirectoryTree):
        self.tree = tree
        self._handles: Dict[int, OpenAsset] = {}
        self._handles_lock = threading.Lock()
        self._next_fh = itertools.count(1)

    # Read path

    @translate_errors
    def getattr(self, path, fh=None):
        if fh is not None:
            handle = self._handles.get(fh)
            if handle is not None:
                return handle.node.attributes().to_stat()
        return self.tree.resolve(path).attributes().to_stat()

    @translate_errors
    def readdir(self, path, fh):
        return ['.', '..'] + self.tree.resolve(path).list_children()

    @translate_errors
    def open(self, path, flags):
        if flags & _WRITE_FLAGS:
            raise UnsupportedOperationError('open for writing')
        node = self.tree.resolve(path)
        if not isinstance(node, AssetFile):
            raise IsADirectoryError(path)
        with self._handles_lock:
            fh = next(self._next_fh)
            self._handles[fh] = OpenAsset(node=node)
        return fh

    @translate_errors
    def read(self, path, size, offset, fh):
        handle = self._handles.get(fh)
        if handle is None:
            # Read without a handle from open(); resolve and fetch afresh
            node = self.tree.resolve(path)
            content = node.read()
        else:
            content = handle.read()
        return content[offset:offset + size]

    def release(self, path, fh):
        with self._handles_lock:
            self._handles.pop(fh, None)
        return 0

    def open_handles(self) -> int:
        """Number of currently open file handles."""
        with self._handles_lock:
            return len(self._handles)

    # Write path

    chmod = _read_only('chmod')
    chown = _read_only('chown')
    create = _read_only('create')
    link = _read_only('link')
    mkdir = _read_only('mkdir')
    mknod = _read_only('mknod')
    removexattr = _read_only('removexattr')
    rename = _read_only('rename')
    rmdir = _read_only('rmdir')
    setxattr = _read_only('setxattr')
    symlink = _read_only('symlink')
    truncate = _read_only('truncate')
    unlink = _read_only('unlink')
    utimens = _read_only('utimens')
    write = _read_only('write')
