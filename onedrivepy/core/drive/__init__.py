"""Drive items module."""
from .models import (
    DriveItem,
    DriveItemFile,
    DriveItemFolder,
    DriveItemsResponse,
    ParentReference,
    MoveItemResponse,
    RenameItemResponse,
    CopyItemResponse,
    Drive,
    UploadSession,
    ConflictBehavior,
    DriveSpecialFolder,
    parse_timestamp
)
from .service import DriveItemsService

__all__ = [
    'DriveItem',
    'DriveItemFile',
    'DriveItemFolder',
    'DriveItemsResponse',
    'ParentReference',
    'MoveItemResponse',
    'RenameItemResponse',
    'CopyItemResponse',
    'Drive',
    'UploadSession',
    'ConflictBehavior',
    'DriveSpecialFolder',
    'parse_timestamp',
    'DriveItemsService',
]
