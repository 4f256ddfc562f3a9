"""
Upload module for OneDrive large file uploads.

Uploads go through a resumable upload session: the file is sent in
chunks, in the order the server asks for them, until the server returns
the finished drive item.
"""
from .facade import UploadFacade
from .coordinator import UploadCoordinator
from .models import (
    LargeFile,
    UploadLargeFileOptions,
    ChunkPlan,
    UploadProgress,
    UploadState,
    DEFAULT_CHUNK_SIZE
)
from .protocols import ReaderAt, RangeStrategy, ApiClientProtocol
from .services import AsyncFileReader, BytesReader

__all__ = [
    # Main classes
    'UploadFacade',
    'UploadCoordinator',

    # Models
    'LargeFile',
    'UploadLargeFileOptions',
    'ChunkPlan',
    'UploadProgress',
    'UploadState',
    'DEFAULT_CHUNK_SIZE',

    # Readers
    'AsyncFileReader',
    'BytesReader',

    # Protocols
    'ReaderAt',
    'RangeStrategy',
    'ApiClientProtocol',
]
