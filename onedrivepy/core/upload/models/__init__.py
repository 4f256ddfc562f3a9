"""Upload models."""
from .upload_models import (
    LargeFile,
    UploadLargeFileOptions,
    ChunkPlan,
    UploadProgress,
    UploadState,
    DEFAULT_CHUNK_SIZE
)

__all__ = [
    'LargeFile',
    'UploadLargeFileOptions',
    'ChunkPlan',
    'UploadProgress',
    'UploadState',
    'DEFAULT_CHUNK_SIZE'
]
