"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Union
import logging
import aiofiles

from ...exceptions import ValidationError


class FileValidator:
    """
    Validates local files before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValidationError: If path is not a regular file or is empty
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValidationError(f"Only files can be uploaded, got: {path}")

        file_size = path.stat().st_size
        if file_size == 0:
            raise ValidationError(f"Cannot upload empty file: {path}")

        return path, file_size


class AsyncFileReader:
    """
    Random-access reader over a local file.

    Uses aiofiles for non-blocking I/O. Every read opens its own handle,
    so concurrent reads never share a file position.
    """

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize file reader.

        Args:
            file_path: Path to the file to read
        """
        self._path = Path(file_path)
        self._logger = logging.getLogger('onedrivepy.upload.file')

    @property
    def path(self) -> Path:
        return self._path

    async def read_at(self, offset: int, size: int) -> bytes:
        """
        Read up to size bytes starting at offset.

        Args:
            offset: Start position in bytes
            size: Number of bytes wanted

        Returns:
            The bytes read (empty at end of file)
        """
        async with aiofiles.open(self._path, 'rb') as f:
            await f.seek(offset)
            data = await f.read(size)
        self._logger.debug(f"Read {len(data)} bytes at {offset} from {self._path.name}")
        return data


class BytesReader:
    """Random-access reader over in-memory bytes."""

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    async def read_at(self, offset: int, size: int) -> bytes:
        return self._data[offset:offset + size]
