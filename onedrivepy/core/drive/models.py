"""
Data models for drive items.

Dataclasses mirroring the JSON shapes returned by the OneDrive API.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional, List


_FRACTION = re.compile(r'\.(\d+)')


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp as returned by the API.

    Accepts a trailing 'Z' and fractions of any precision.
    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    text = _FRACTION.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class ConflictBehavior(str, Enum):
    """How the server resolves a name clash in the destination folder."""
    FAIL = 'fail'
    REPLACE = 'replace'
    RENAME = 'rename'


class DriveSpecialFolder(str, Enum):
    """Well-known folders addressable by name."""
    DOCUMENTS = 'documents'
    PHOTOS = 'photos'
    CAMERA_ROLL = 'cameraroll'
    APP_ROOT = 'approot'
    MUSIC = 'music'


@dataclass
class ParentReference:
    """Reference to a folder, optionally on another drive."""
    id: str = ''
    path: str = ''
    drive_id: str = ''

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        if self.id:
            result['id'] = self.id
        if self.path:
            result['path'] = self.path
        if self.drive_id:
            result['driveId'] = self.drive_id
        return result

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ParentReference':
        data = data or {}
        return cls(
            id=data.get('id', ''),
            path=data.get('path', ''),
            drive_id=data.get('driveId', '')
        )


@dataclass(frozen=True)
class DriveItemFile:
    """File facet."""
    mime_type: str = ''


@dataclass(frozen=True)
class DriveItemFolder:
    """Folder facet."""
    child_count: int = 0


@dataclass(frozen=True)
class AudioFacet:
    title: str = ''
    album: str = ''
    album_artist: str = ''
    duration: int = 0


@dataclass(frozen=True)
class ImageFacet:
    height: float = 0.0
    width: float = 0.0


@dataclass(frozen=True)
class PhotoFacet:
    camera_make: str = ''
    camera_model: str = ''


@dataclass(frozen=True)
class VideoFacet:
    duration: int = 0
    height: float = 0.0
    width: float = 0.0


@dataclass
class DriveItem:
    """
    A file or folder stored in a drive.

    Attributes:
        id: Item identifier
        name: Item name
        size: Size in bytes
        download_url: Short-lived pre-authenticated download URL (files only)
        description: User-visible description
        web_url: URL to open the item in a browser
        file: File facet, present for files
        folder: Folder facet, present for folders
        parent_reference: Parent folder reference
        raw: Full JSON object as returned by the API
    """
    id: str = ''
    name: str = ''
    size: int = 0
    download_url: str = ''
    description: str = ''
    web_url: str = ''
    file: Optional[DriveItemFile] = None
    folder: Optional[DriveItemFolder] = None
    parent_reference: Optional[ParentReference] = None
    audio: Optional[AudioFacet] = None
    image: Optional[ImageFacet] = None
    photo: Optional[PhotoFacet] = None
    video: Optional[VideoFacet] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_file(self) -> bool:
        return self.file is not None

    @property
    def is_folder(self) -> bool:
        return self.folder is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DriveItem':
        """Create from API JSON object."""
        file_data = data.get('file')
        folder_data = data.get('folder')
        audio = data.get('audio')
        image = data.get('image')
        photo = data.get('photo')
        video = data.get('video')
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            size=data.get('size') or 0,
            download_url=data.get('@microsoft.graph.downloadUrl', ''),
            description=data.get('description', ''),
            web_url=data.get('webUrl', ''),
            file=DriveItemFile(mime_type=file_data.get('mimeType', '')) if isinstance(file_data, dict) else None,
            folder=DriveItemFolder(child_count=folder_data.get('childCount', 0)) if isinstance(folder_data, dict) else None,
            parent_reference=ParentReference.from_dict(data['parentReference']) if data.get('parentReference') else None,
            audio=AudioFacet(
                title=audio.get('title', ''),
                album=audio.get('album', ''),
                album_artist=audio.get('albumArtist', ''),
                duration=audio.get('duration', 0)
            ) if isinstance(audio, dict) else None,
            image=ImageFacet(
                height=image.get('height', 0.0),
                width=image.get('width', 0.0)
            ) if isinstance(image, dict) else None,
            photo=PhotoFacet(
                camera_make=photo.get('cameraMake', ''),
                camera_model=photo.get('cameraModel', '')
            ) if isinstance(photo, dict) else None,
            video=VideoFacet(
                duration=video.get('duration', 0),
                height=video.get('height', 0.0),
                width=video.get('width', 0.0)
            ) if isinstance(video, dict) else None,
            raw=dict(data)
        )


@dataclass
class DriveItemsResponse:
    """A page of drive items."""
    odata_context: str = ''
    count: int = 0
    items: List[DriveItem] = field(default_factory=list)
    next_link: str = ''

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DriveItemsResponse':
        items = [DriveItem.from_dict(item) for item in data.get('value') or []]
        return cls(
            odata_context=data.get('@odata.context', ''),
            count=data.get('@odata.count', len(items)),
            items=items,
            next_link=data.get('@odata.nextLink', '')
        )


@dataclass(frozen=True)
class MoveItemResponse:
    id: str
    name: str
    parent_reference: ParentReference

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MoveItemResponse':
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            parent_reference=ParentReference.from_dict(data.get('parentReference'))
        )


@dataclass(frozen=True)
class RenameItemResponse:
    id: str
    name: str
    is_file: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenameItemResponse':
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            is_file='file' in data
        )


@dataclass(frozen=True)
class CopyItemResponse:
    """Copy is asynchronous; location is the URL to poll for its status."""
    location: str


@dataclass(frozen=True)
class Drive:
    id: str
    drive_type: str = ''
    name: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Drive':
        return cls(
            id=data.get('id', ''),
            drive_type=data.get('driveType', ''),
            name=data.get('name', '')
        )


@dataclass
class UploadSession:
    """
    Resumable upload session issued by the server.

    Attributes:
        upload_url: Pre-authenticated URL receiving the chunk PUTs
        expiration_date_time: When the session expires
        next_expected_ranges: Byte ranges the server still expects ("start-" or "start-end")
        odata_context: OData context of the response
    """
    upload_url: str = ''
    expiration_date_time: Optional[datetime] = None
    next_expected_ranges: List[str] = field(default_factory=list)
    odata_context: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UploadSession':
        return cls(
            upload_url=data.get('uploadUrl', ''),
            expiration_date_time=parse_timestamp(data.get('expirationDateTime')),
            next_expected_ranges=list(data.get('nextExpectedRanges') or []),
            odata_context=data.get('@odata.context', '')
        )

    def merge(self, update: 'UploadSession') -> 'UploadSession':
        """Return the session as updated by a chunk response (which omits the URL)."""
        return UploadSession(
            upload_url=update.upload_url or self.upload_url,
            expiration_date_time=update.expiration_date_time or self.expiration_date_time,
            next_expected_ranges=update.next_expected_ranges,
            odata_context=update.odata_context or self.odata_context
        )
