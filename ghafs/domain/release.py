"""
Release domain objects for ghafs.

Repository, Release and Asset are immutable snapshots of GitHub REST
payloads. They hold metadata only; asset bytes are fetched on demand.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Optional[str]) -> datetime:
    """
    Parse a GitHub ISO-8601 timestamp into an aware datetime.

    GitHub reports times as "2020-01-01T00:00:00Z". Missing values
    (e.g. the publish time of a draft) become the Unix epoch.

    Args:
        value: Timestamp string or None

    Returns:
        Timezone-aware datetime in UTC
    """
    if not value:
        return EPOCH
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Repository:
    """GitHub repository whose releases are exposed."""
    id: int
    name: str
    full_name: str
    created_at: datetime = EPOCH
    updated_at: datetime = EPOCH

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'Repository':
        """Create from a GET /repos/{owner}/{repo} response."""
        return cls(
            id=data.get('id', 0),
            name=data.get('name', ''),
            full_name=data.get('full_name', ''),
            created_at=parse_timestamp(data.get('created_at')),
            updated_at=parse_timestamp(data.get('updated_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'full_name': self.full_name,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class Release:
    """
    A published release, keyed by its tag.

    created_at is the creation time of the underlying tag, which may
    predate publication. published_at is the time surfaced to users.
    """
    id: int
    tag_name: str
    name: str = ""
    created_at: datetime = EPOCH
    published_at: Optional[datetime] = None
    draft: bool = False
    prerelease: bool = False

    @property
    def publish_time(self) -> datetime:
        """Publish time, falling back to creation time for drafts."""
        return self.published_at if self.published_at is not None else self.created_at

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'Release':
        """Create from one element of GET /repos/{owner}/{repo}/releases."""
        published = data.get('published_at')
        return cls(
            id=data.get('id', 0),
            tag_name=data.get('tag_name', ''),
            name=data.get('name') or '',
            created_at=parse_timestamp(data.get('created_at')),
            published_at=parse_timestamp(published) if published else None,
            draft=data.get('draft', False),
            prerelease=data.get('prerelease', False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'tag_name': self.tag_name,
            'name': self.name,
            'created_at': self.created_at.isoformat(),
            'published_at': self.published_at.isoformat() if self.published_at else None,
            'draft': self.draft,
            'prerelease': self.prerelease,
        }


@dataclass(frozen=True)
class Asset:
    """
    A binary artifact attached to a release.

    url is the API locator; requesting it with
    "Accept: application/octet-stream" yields the raw bytes.
    """
    id: int
    name: str
    size: int
    url: str
    created_at: datetime = EPOCH
    updated_at: datetime = EPOCH
    content_type: str = "application/octet-stream"
    browser_download_url: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'Asset':
        """Create from one element of GET /repos/{owner}/{repo}/releases/{id}/assets."""
        return cls(
            id=data.get('id', 0),
            name=data.get('name', ''),
            size=data.get('size', 0),
            url=data.get('url', ''),
            created_at=parse_timestamp(data.get('created_at')),
            updated_at=parse_timestamp(data.get('updated_at')),
            content_type=data.get('content_type') or 'application/octet-stream',
            browser_download_url=data.get('browser_download_url'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'size': self.size,
            'url': self.url,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'content_type': self.content_type,
            'browser_download_url': self.browser_download_url,
        }
