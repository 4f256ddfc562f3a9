"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader, BytesReader
from .chunk_service import ChunkUploader, ChunkResult
from .session_service import SessionNegotiator, SessionCleaner

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'BytesReader',
    'ChunkUploader',
    'ChunkResult',
    'SessionNegotiator',
    'SessionCleaner',
]
