"""
Domain layer for ghafs.

Contains pure domain objects with no I/O or side effects:
- Repository: The GitHub repository being mounted
- Release: A published release, keyed by tag
- Asset: A named binary artifact attached to a release

These objects are immutable and provide to_dict() for JSON output.
"""

from .release import Repository, Release, Asset, parse_timestamp, EPOCH

__all__ = [
    'Repository',
    'Release',
    'Asset',
    'parse_timestamp',
    'EPOCH',
]
