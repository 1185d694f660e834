"""Tests for the domain layer."""

import pytest
from datetime import datetime, timezone

from ghafs.domain import Asset, Release, Repository, parse_timestamp, EPOCH


RELEASE_PAYLOAD = {
    "id": 1001,
    "tag_name": "v1.0",
    "name": "First release",
    "draft": False,
    "prerelease": True,
    "created_at": "2020-01-01T10:00:00Z",
    "published_at": "2020-03-15T12:30:00Z",
    "assets": [],
}

ASSET_PAYLOAD = {
    "id": 5001,
    "name": "app.tar.gz",
    "size": 2048,
    "url": "https://api.github.com/repos/owner/repo/releases/assets/5001",
    "browser_download_url": "https://github.com/owner/repo/releases/download/v1.0/app.tar.gz",
    "content_type": "application/gzip",
    "created_at": "2020-03-15T12:00:00Z",
    "updated_at": "2020-03-15T12:05:00Z",
}


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_parses_zulu_suffix(self):
        parsed = parse_timestamp("2020-03-15T12:30:00Z")
        assert parsed == datetime(2020, 3, 15, 12, 30, tzinfo=timezone.utc)

    def test_parses_offset(self):
        parsed = parse_timestamp("2020-03-15T14:30:00+02:00")
        assert parsed == datetime(2020, 3, 15, 12, 30, tzinfo=timezone.utc)

    def test_naive_value_is_utc(self):
        parsed = parse_timestamp("2020-03-15T12:30:00")
        assert parsed.tzinfo is not None
        assert parsed == datetime(2020, 3, 15, 12, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_value_is_epoch(self, value):
        assert parse_timestamp(value) == EPOCH


class TestRepository:
    """Tests for Repository."""

    def test_from_api_response(self):
        repo = Repository.from_api_response({
            "id": 7,
            "name": "repo",
            "full_name": "owner/repo",
            "created_at": "2019-01-01T00:00:00Z",
            "updated_at": "2021-06-01T00:00:00Z",
        })
        assert repo.id == 7
        assert repo.full_name == "owner/repo"
        assert repo.created_at.year == 2019
        assert repo.updated_at.year == 2021

    def test_to_dict(self):
        repo = Repository(id=7, name="repo", full_name="owner/repo")
        data = repo.to_dict()
        assert data["full_name"] == "owner/repo"
        assert data["created_at"] == EPOCH.isoformat()


class TestRelease:
    """Tests for Release."""

    def test_from_api_response(self):
        release = Release.from_api_response(RELEASE_PAYLOAD)
        assert release.id == 1001
        assert release.tag_name == "v1.0"
        assert release.name == "First release"
        assert release.prerelease is True
        assert release.created_at == datetime(2020, 1, 1, 10, tzinfo=timezone.utc)
        assert release.published_at == datetime(2020, 3, 15, 12, 30, tzinfo=timezone.utc)

    def test_publish_time_prefers_published_at(self):
        release = Release.from_api_response(RELEASE_PAYLOAD)
        assert release.publish_time == release.published_at
        assert release.publish_time != release.created_at

    def test_draft_falls_back_to_created_at(self):
        payload = dict(RELEASE_PAYLOAD, draft=True, published_at=None)
        release = Release.from_api_response(payload)
        assert release.published_at is None
        assert release.publish_time == release.created_at

    def test_null_name_becomes_empty(self):
        release = Release.from_api_response(dict(RELEASE_PAYLOAD, name=None))
        assert release.name == ""

    def test_is_immutable(self):
        release = Release.from_api_response(RELEASE_PAYLOAD)
        with pytest.raises(AttributeError):
            release.tag_name = "v2.0"

    def test_to_dict(self):
        data = Release.from_api_response(RELEASE_PAYLOAD).to_dict()
        assert data["tag_name"] == "v1.0"
        assert data["published_at"] == "2020-03-15T12:30:00+00:00"


class TestAsset:
    """Tests for Asset."""

    def test_from_api_response(self):
        asset = Asset.from_api_response(ASSET_PAYLOAD)
        assert asset.id == 5001
        assert asset.name == "app.tar.gz"
        assert asset.size == 2048
        assert asset.url.endswith("/releases/assets/5001")
        assert asset.content_type == "application/gzip"
        assert asset.updated_at == datetime(2020, 3, 15, 12, 5, tzinfo=timezone.utc)

    def test_missing_content_type_defaults_to_octet_stream(self):
        payload = dict(ASSET_PAYLOAD)
        del payload["content_type"]
        assert Asset.from_api_response(payload).content_type == "application/octet-stream"

    def test_to_dict(self):
        data = Asset.from_api_response(ASSET_PAYLOAD).to_dict()
        assert data["name"] == "app.tar.gz"
        assert data["size"] == 2048
