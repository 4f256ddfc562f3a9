"""Tests for the command line interface."""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from typer.testing import CliRunner

from onedrivepy.cli.main import app, format_size
from onedrivepy.core.api.errors import RemoteError
from onedrivepy.core.drive.models import DriveItem


runner = CliRunner()


@pytest.fixture
def drive(drive_item_data, folder_item_data):
    """OneDriveClient mock usable as an async context manager."""
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    client.get_by_path = AsyncMock(return_value=DriveItem.from_dict(folder_item_data))
    client.list = AsyncMock(return_value=[
        DriveItem.from_dict(drive_item_data),
        DriveItem.from_dict(folder_item_data),
    ])
    client.create_folder = AsyncMock(return_value=DriveItem.from_dict(folder_item_data))
    client.delete = AsyncMock()
    client.upload = AsyncMock(return_value=DriveItem.from_dict(drive_item_data))
    return client


def invoke(drive, *args):
    with patch('onedrivepy.OneDriveClient', return_value=drive) as factory:
        result = runner.invoke(app, ['--token', 'tok', *args])
    return result, factory


class TestFormatSize:

    def test_units(self):
        assert format_size(512) == "512 B"
        assert format_size(2048) == "2.0 KB"
        assert format_size(5 * 1024 * 1024) == "5.0 MB"


class TestCommands:
    """Test suite for CLI commands."""

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv('ONEDRIVE_ACCESS_TOKEN', raising=False)

        result = runner.invoke(app, ['ls'])

        assert result.exit_code == 1
        assert "No access token" in result.output

    def test_ls(self, drive):
        result, factory = invoke(drive, 'ls', '/Documents')

        assert result.exit_code == 0
        factory.assert_called_once_with('tok')
        drive.get_by_path.assert_awaited_once_with('/Documents')
        drive.list.assert_awaited_once_with('FOLDER1')
        assert "report.pdf" in result.output
        assert "Documents/" in result.output

    def test_mkdir(self, drive):
        result, _ = invoke(drive, 'mkdir', 'Documents')

        assert result.exit_code == 0
        drive.create_folder.assert_awaited_once_with('Documents', 'FOLDER1')
        assert "Created folder" in result.output

    def test_rm_force(self, drive):
        result, _ = invoke(drive, 'rm', '-f', '/Documents')

        assert result.exit_code == 0
        drive.delete.assert_awaited_once_with('FOLDER1')

    def test_path_not_found(self, drive):
        drive.get_by_path.side_effect = RemoteError(status=404, code='itemNotFound', message='Not found')

        result, _ = invoke(drive, 'info', '/missing')

        assert result.exit_code == 1
        assert "Path not found" in result.output

    def test_sdk_error_reported(self, drive):
        drive.list.side_effect = RemoteError(status=403, code='accessDenied', message='Denied')

        result, _ = invoke(drive, 'ls')

        assert result.exit_code == 1
        assert "accessDenied - Denied" in result.output

    def test_upload(self, drive, tmp_path):
        local = tmp_path / "report.pdf"
        local.write_bytes(b"%PDF-1.7")

        result, _ = invoke(drive, 'upload', str(local), '--conflict', 'replace', '--chunk-size', '327680')

        assert result.exit_code == 0
        kwargs = drive.upload.call_args.kwargs
        assert drive.upload.call_args.args[1] == 'FOLDER1'
        assert kwargs['conflict_behavior'] == 'replace'
        assert kwargs['chunk_size'] == 327680
        assert "Uploaded" in result.output
