"""
CLI tests using click's CliRunner.

The tree is built from an in-memory source, so no network access is needed.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ghafs.catalog import ReleaseCatalog
from ghafs.cli import cli
from ghafs.errors import RemoteError
from ghafs.exit_codes import API_ERROR, NOT_FOUND
from ghafs.tree import DirectoryTree

from fakes import FakeFetcher, FakeReleaseSource, make_asset, make_release

try:
    import ghafs.mount  # noqa: F401  loads libfuse
    FUSE_AVAILABLE = True
except (ImportError, OSError):
    FUSE_AVAILABLE = False


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.delenv('GHAFS_CONFIG', raising=False)
    monkeypatch.delenv('GHAFS_GITHUB_TOKEN', raising=False)
    monkeypatch.delenv('GITHUB_TOKEN', raising=False)
    with patch('ghafs.cli_utils.configure_logging'):
        yield


@pytest.fixture
def source():
    return FakeReleaseSource(
        releases=[make_release(1, 'v1'), make_release(2, 'v2')],
        assets={1: [make_asset(10, 'a.txt', size=10)], 2: []},
    )


@pytest.fixture
def fake_build_tree(source):
    fetcher = FakeFetcher({10: b'0123456789'})

    def build(owner, name, settings=None, client=None):
        return DirectoryTree(source.repository, ReleaseCatalog(source, owner, name), fetcher)

    with patch('ghafs.commands.fs.build_tree', side_effect=build) as mock_build:
        yield mock_build


class TestLs:
    """Tests for the ls command."""

    def test_ls_root_json(self, fake_build_tree):
        result = CliRunner().invoke(cli, ['ls', 'owner/repo', '--json'])

        assert result.exit_code == 0, result.output
        entries = [json.loads(line) for line in result.output.splitlines()]
        assert [e['name'] for e in entries] == ['v1', 'v2']
        assert all(e['type'] == 'directory' for e in entries)

    def test_ls_release_json(self, fake_build_tree):
        result = CliRunner().invoke(cli, ['ls', 'owner/repo', '/v1', '--json'])

        assert result.exit_code == 0, result.output
        entry = json.loads(result.output.strip())
        assert entry == {
            'name': 'a.txt',
            'type': 'file',
            'size': 10,
            'modified': entry['modified'],
        }

    def test_ls_table(self, fake_build_tree):
        result = CliRunner().invoke(cli, ['ls', 'owner/repo', '/v1'])
        assert result.exit_code == 0, result.output
        assert 'a.txt' in result.output

    def test_ls_passes_token(self, fake_build_tree):
        CliRunner().invoke(cli, ['ls', 'owner/repo', '--token', 'secret', '--json'])
        settings = fake_build_tree.call_args[0][2]
        assert settings.token == 'secret'

    def test_ls_missing_path(self, fake_build_tree):
        result = CliRunner().invoke(cli, ['ls', 'owner/repo', '/v9'])
        assert result.exit_code == NOT_FOUND

    def test_ls_remote_error(self, fake_build_tree, source):
        source.error = RemoteError(403, '403 rate limit exceeded')
        result = CliRunner().invoke(cli, ['ls', 'owner/repo'])
        assert result.exit_code == API_ERROR

    def test_bad_repo_argument(self, fake_build_tree):
        result = CliRunner().invoke(cli, ['ls', 'not-a-repo'])
        assert result.exit_code == 2
        assert 'OWNER/REPO' in result.output


class TestCat:
    """Tests for the cat command."""

    def test_cat_to_stdout(self, fake_build_tree):
        result = CliRunner().invoke(cli, ['cat', 'owner/repo', '/v1/a.txt'])
        assert result.exit_code == 0
        assert result.stdout_bytes == b'0123456789'

    def test_cat_to_file(self, fake_build_tree, tmp_path):
        out = tmp_path / 'a.txt'
        result = CliRunner().invoke(cli, ['cat', 'owner/repo', '/v1/a.txt', '-o', str(out)])
        assert result.exit_code == 0
        assert out.read_bytes() == b'0123456789'

    def test_cat_directory_fails(self, fake_build_tree):
        result = CliRunner().invoke(cli, ['cat', 'owner/repo', '/v1'])
        assert result.exit_code == 1


@pytest.mark.skipif(not FUSE_AVAILABLE, reason="fusepy/libfuse not available")
class TestMount:
    """Tests for the mount command wiring."""

    def test_mount_passes_options(self, tmp_path):
        with patch('ghafs.mount.mount_release_fs') as mock_mount:
            result = CliRunner().invoke(
                cli, ['mount', 'owner/repo', str(tmp_path), '--single-thread', '--token', 't'])

        assert result.exit_code == 0, result.output
        args, kwargs = mock_mount.call_args
        assert args[:3] == ('owner', 'repo', str(tmp_path))
        assert args[3].token == 't'
        assert kwargs['threads'] is False
        assert kwargs['foreground'] is True
        assert kwargs['allow_other'] is False


class TestConfigShow:
    """Tests for config show."""

    def test_token_is_masked(self, monkeypatch):
        monkeypatch.setenv('GITHUB_TOKEN', 'ghp_abcdefghijklmnop1234567890')
        result = CliRunner().invoke(cli, ['config', 'show'])

        assert result.exit_code == 0, result.output
        config = json.loads(result.output)
        assert config['github']['token'] == 'ghp_...7890'

    def test_path(self):
        result = CliRunner().invoke(cli, ['config', 'show', '--path'])
        assert result.exit_code == 0
        assert json.loads(result.output)['config_path'].endswith('config.json')

    def test_numeric_token_is_masked(self, monkeypatch):
        monkeypatch.setenv('GHAFS_GITHUB_TOKEN', '1234567890123')
        result = CliRunner().invoke(cli, ['config', 'show'])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)['github']['token'] == '1234...0123'


class TestConfigGenerate:
    """Tests for config generate."""

    def test_writes_defaults(self, tmp_path):
        result = CliRunner().invoke(cli, ['config', 'generate'])

        assert result.exit_code == 0, result.output
        path = tmp_path / '.ghafs' / 'config.json'
        assert str(path) in result.output
        assert json.loads(path.read_text())['github']['per_page'] == 100

    def test_keeps_existing_file(self, tmp_path):
        path = tmp_path / '.ghafs' / 'config.json'
        path.parent.mkdir()
        path.write_text('{"github": {"per_page": 5}}')

        result = CliRunner().invoke(cli, ['config', 'generate'])

        assert result.exit_code == 0, result.output
        assert 'already exists' in result.output
        assert json.loads(path.read_text()) == {'github': {'per_page': 5}}

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / '.ghafs' / 'config.json'
        path.parent.mkdir()
        path.write_text('{"github": {"per_page": 5}}')

        result = CliRunner().invoke(cli, ['config', 'generate', '--force'])

        assert result.exit_code == 0, result.output
        assert json.loads(path.read_text())['github']['per_page'] == 100
