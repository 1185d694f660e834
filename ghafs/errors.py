"""
Error taxonomy for ghafs.

Every error the filesystem core raises derives from GhafsError and
carries the errno it maps to at the FUSE boundary:

- NotFoundError: a tag or asset name is absent from the current snapshot
- RemoteError: the GitHub API failed or answered with a non-success status
- UnsupportedOperationError: any write-family call on the read-only tree
"""

import errno
from typing import Optional


class GhafsError(Exception):
    """Base class for ghafs errors."""
    errno = errno.EIO


class NotFoundError(GhafsError):
    """Raised when a lookup finds no entry with the given name."""
    errno = errno.ENOENT

    def __init__(self, name: str):
        super().__init__(f"No such entry: {name}")
        self.name = name


class RemoteError(GhafsError):
    """
    Raised on a transport failure or a non-success remote response.

    Attributes:
        status_code: HTTP status code, or None for transport failures
        message: Status text or diagnostic reported by the service
    """
    errno = errno.EIO

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(f"Status Code: {status_code}, message: {message}")
        self.status_code = status_code
        self.message = message


class UnsupportedOperationError(GhafsError):
    """Raised for write-family operations; the tree is read-only."""
    errno = errno.EROFS

    def __init__(self, operation: str):
        super().__init__(f"Operation not supported on read-only filesystem: {operation}")
        self.operation = operation


class MountError(GhafsError):
    """Raised when the filesystem cannot be mounted."""
