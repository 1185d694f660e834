"""
Infrastructure layer for ghafs.

Contains abstractions for external systems:
- GitHubClient: GitHub REST API access for repository, release and asset metadata

These provide clean interfaces that can be mocked for testing.
"""

from .github_client import GitHubClient, RateLimitStatus

__all__ = [
    'GitHubClient',
    'RateLimitStatus',
]
