"""Tests for drive models."""
from datetime import datetime, timezone

from onedrivepy.core.drive.models import (
    DriveItem,
    DriveItemsResponse,
    ParentReference,
    RenameItemResponse,
    UploadSession,
    parse_timestamp
)
from onedrivepy.core.drive.paths import child_path, drive_path, item_path


class TestParseTimestamp:
    """Test suite for parse_timestamp."""

    def test_utc_suffix(self):
        assert parse_timestamp('2026-10-19T09:21:55Z') == datetime(2026, 10, 19, 9, 21, 55, tzinfo=timezone.utc)

    def test_short_fraction(self):
        assert parse_timestamp('2026-10-19T09:21:55.5Z').microsecond == 500000

    def test_long_fraction(self):
        assert parse_timestamp('2026-10-19T09:21:55.1234567Z').microsecond == 123456

    def test_invalid(self):
        assert parse_timestamp('yesterday') is None
        assert parse_timestamp(None) is None


class TestDriveItem:
    """Test suite for DriveItem."""

    def test_file_from_dict(self, drive_item_data):
        item = DriveItem.from_dict(drive_item_data)

        assert item.id == 'ITEM1'
        assert item.size == 2048
        assert item.is_file
        assert not item.is_folder
        assert item.file.mime_type == 'application/pdf'
        assert item.download_url == 'https://download.example.com/f/ITEM1'
        assert item.parent_reference.drive_id == 'DRIVE1'
        assert item.raw == drive_item_data

    def test_folder_from_dict(self, folder_item_data):
        item = DriveItem.from_dict(folder_item_data)

        assert item.is_folder
        assert item.folder.child_count == 3
        assert item.parent_reference is None

    def test_media_facets(self):
        item = DriveItem.from_dict({
            'id': 'P',
            'image': {'height': 600, 'width': 800},
            'photo': {'cameraMake': 'Canon'},
        })

        assert item.image.width == 800
        assert item.photo.camera_make == 'Canon'
        assert item.video is None


class TestDriveItemsResponse:
    """Test suite for DriveItemsResponse."""

    def test_from_dict(self, drive_item_data, folder_item_data):
        page = DriveItemsResponse.from_dict({
            '@odata.context': 'ctx',
            '@odata.nextLink': 'https://next',
            'value': [drive_item_data, folder_item_data],
        })

        assert len(page) == 2
        assert page.count == 2
        assert [item.name for item in page] == ['report.pdf', 'Documents']
        assert page.next_link == 'https://next'


class TestParentReference:
    """Test suite for ParentReference."""

    def test_to_dict_omits_empty(self):
        assert ParentReference(id='F').to_dict() == {'id': 'F'}
        assert ParentReference(id='F', drive_id='D').to_dict() == {'id': 'F', 'driveId': 'D'}


class TestRenameItemResponse:

    def test_is_file(self):
        assert RenameItemResponse.from_dict({'id': '1', 'name': 'a', 'file': {}}).is_file
        assert not RenameItemResponse.from_dict({'id': '1', 'name': 'a', 'folder': {}}).is_file


class TestUploadSession:
    """Test suite for UploadSession."""

    def test_from_dict(self):
        session = UploadSession.from_dict({
            'uploadUrl': 'https://upload/1',
            'expirationDateTime': '2026-10-19T09:21:55.523Z',
            'nextExpectedRanges': ['0-'],
        })

        assert session.upload_url == 'https://upload/1'
        assert session.expiration_date_time.year == 2026
        assert session.next_expected_ranges == ['0-']

    def test_merge_keeps_upload_url(self):
        session = UploadSession(upload_url='https://upload/1', next_expected_ranges=['0-'])
        update = UploadSession.from_dict({'nextExpectedRanges': ['4194304-']})

        merged = session.merge(update)

        assert merged.upload_url == 'https://upload/1'
        assert merged.next_expected_ranges == ['4194304-']


class TestPaths:
    """Test suite for path helpers."""

    def test_drive_path(self):
        assert drive_path() == 'me/drive'
        assert drive_path('b!abc') == 'me/drives/b%21abc'

    def test_item_path(self):
        assert item_path('ID1') == 'me/drive/items/ID1'
        assert item_path('ID1', 'D') == 'me/drives/D/items/ID1'

    def test_child_path_escapes_name(self):
        assert child_path('F', 'a b/c#.txt') == 'me/drive/items/F:/a%20b%2Fc%23.txt:'
