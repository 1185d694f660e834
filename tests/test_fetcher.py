"""Tests for ghafs.fetcher."""

from unittest.mock import patch, Mock

import pytest
import requests

from ghafs.config import ClientSettings
from ghafs.errors import RemoteError
from ghafs.fetcher import ContentFetcher

from fakes import make_asset


def make_response(content=b'', status_code=200, reason='OK'):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.content = content
    return response


class TestContentFetcher:
    """Tests for ContentFetcher.fetch."""

    def test_requests_octet_stream_from_asset_url(self):
        asset = make_asset(5, 'a.txt', size=10)
        fetcher = ContentFetcher(ClientSettings())

        with patch('ghafs.fetcher.requests.get', return_value=make_response(b'0123456789')) as mock_get:
            content = fetcher.fetch(asset)

        assert content == b'0123456789'
        assert len(content) == asset.size
        assert mock_get.call_args[0][0] == asset.url
        assert mock_get.call_args[1]['headers']['Accept'] == 'application/octet-stream'

    def test_token_header_only_when_configured(self):
        asset = make_asset(5, 'a.txt')

        with patch('ghafs.fetcher.requests.get', return_value=make_response(b'x')) as mock_get:
            ContentFetcher(ClientSettings()).fetch(asset)
        assert 'Authorization' not in mock_get.call_args[1]['headers']

        with patch('ghafs.fetcher.requests.get', return_value=make_response(b'x')) as mock_get:
            ContentFetcher(ClientSettings(token='abc123')).fetch(asset)
        assert mock_get.call_args[1]['headers']['Authorization'] == 'token abc123'

    def test_non_success_preserves_status_and_message(self):
        asset = make_asset(5, 'a.txt')
        response = make_response(status_code=403, reason='rate limit exceeded')

        with patch('ghafs.fetcher.requests.get', return_value=response) as mock_get:
            with pytest.raises(RemoteError) as exc_info:
                ContentFetcher().fetch(asset)

        assert mock_get.call_count == 1
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == '403 rate limit exceeded'
        assert str(exc_info.value) == 'Status Code: 403, message: 403 rate limit exceeded'

    def test_transport_error(self):
        asset = make_asset(5, 'a.txt')

        with patch('ghafs.fetcher.requests.get', side_effect=requests.Timeout('read timed out')):
            with pytest.raises(RemoteError) as exc_info:
                ContentFetcher().fetch(asset)

        assert exc_info.value.status_code is None

    def test_logs_content_length(self, caplog):
        asset = make_asset(5, 'a.txt')

        with patch('ghafs.fetcher.requests.get', return_value=make_response(b'abc')):
            with caplog.at_level('DEBUG', logger='ghafs.fetcher'):
                ContentFetcher().fetch(asset)

        assert 'Content-Length: 3' in caplog.text
