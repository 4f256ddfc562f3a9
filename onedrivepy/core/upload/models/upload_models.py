"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ...drive.models import ConflictBehavior
from ...exceptions import DataTruncatedError, ValidationError
from ..protocols import ReaderAt


DEFAULT_CHUNK_SIZE = 4 * 1024 * 1024  # 4 MiB


class UploadState(str, Enum):
    """States of the chunked upload state machine."""
    SENDING = 'sending'
    CONTINUING = 'continuing'
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class LargeFile:
    """
    A file to upload through an upload session.

    Attributes:
        name: Name of the file in the destination folder
        size: Total size in bytes
        data: Random-access reader over the file bytes
    """
    name: str
    size: int
    data: Optional[ReaderAt]


@dataclass
class UploadLargeFileOptions:
    """
    Options for a large file upload.

    Attributes:
        drive_id: Target drive (default drive of the user when empty)
        conflict_behavior: fail, replace or rename (server default when None)
        chunk_size: Bytes per chunk request
    """
    drive_id: Optional[str] = None
    conflict_behavior: Optional[Union[ConflictBehavior, str]] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        if isinstance(self.conflict_behavior, str) and not isinstance(self.conflict_behavior, ConflictBehavior):
            try:
                self.conflict_behavior = ConflictBehavior(self.conflict_behavior)
            except ValueError:
                raise ValidationError(
                    f"Invalid conflict behavior {self.conflict_behavior!r}, "
                    f"expected one of: fail, replace, rename"
                )
        if self.chunk_size <= 0:
            raise ValidationError("Chunk size must be positive")


@dataclass
class ChunkPlan:
    """
    Working state of the upload engine.

    Holds the range requested for the next chunk and a buffer reused
    across chunks. The buffer only ever grows.

    Attributes:
        offset: Byte offset of the chunk
        length: Requested chunk length
        buffer: Reusable chunk buffer
        read_count: Bytes read into the buffer for the current chunk
    """
    offset: int
    length: int
    buffer: bytearray = field(repr=False, default_factory=bytearray)
    read_count: int = 0

    @classmethod
    def allocate(cls, chunk_size: int) -> 'ChunkPlan':
        """Create the plan for the first chunk."""
        return cls(offset=0, length=chunk_size, buffer=bytearray(chunk_size))

    def move(self, offset: int, length: int) -> None:
        """Point the plan at the next requested range."""
        self.offset = offset
        self.length = length
        self.read_count = 0

    async def fill(self, reader: ReaderAt, total_size: int) -> int:
        """
        Read the planned range from the source into the buffer.

        A range reaching past the end of the source is clamped to the
        remaining bytes, so the final chunk may be shorter than requested.

        Args:
            reader: Source of the file bytes
            total_size: Declared size of the source

        Returns:
            Number of bytes read

        Raises:
            DataTruncatedError: If the source yields fewer bytes than the
                clamped range, including none at all
        """
        wanted = min(self.length, total_size - self.offset)
        if wanted <= 0:
            raise DataTruncatedError(
                f"Nothing left to read at offset {self.offset} of {total_size}",
                offset=self.offset, expected=self.length, received=0
            )

        if len(self.buffer) < wanted:
            self.buffer = bytearray(wanted)

        data = await reader.read_at(self.offset, wanted)
        received = len(data) if data else 0

        if received == 0:
            raise DataTruncatedError(
                f"Unexpected end of data at offset {self.offset}",
                offset=self.offset, expected=wanted, received=0
            )
        if received < wanted:
            raise DataTruncatedError(
                f"Short read at offset {self.offset}: got {received} of {wanted} bytes "
                f"before end of data",
                offset=self.offset, expected=wanted, received=received
            )

        self.buffer[:wanted] = data[:wanted]
        self.read_count = wanted
        return wanted

    def view(self) -> memoryview:
        """The bytes read for the current chunk."""
        return memoryview(self.buffer)[:self.read_count]

    @property
    def last_byte(self) -> int:
        """Zero-based inclusive position of the last byte read."""
        return self.offset + self.read_count - 1


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_bytes: Total file size
        uploaded_bytes: Bytes acknowledged by the server so far
        chunks_sent: Number of chunk requests completed
        state: Current state of the upload
    """
    total_bytes: int
    uploaded_bytes: int = 0
    chunks_sent: int = 0
    state: UploadState = UploadState.SENDING

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 0.0
        return (self.uploaded_bytes / self.total_bytes) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.state == UploadState.DONE
