"""
Upload facade.

Provides a simplified interface for large file uploads.
Follows Facade Pattern - hides the session and chunk handling.
"""
from pathlib import Path
from typing import Optional, Union, Callable
import logging

from .coordinator import UploadCoordinator
from .models import LargeFile, UploadLargeFileOptions, UploadProgress, DEFAULT_CHUNK_SIZE
from .protocols import ApiClientProtocol, RangeStrategy
from .services import FileValidator, AsyncFileReader
from ..drive.models import ConflictBehavior, DriveItem


class UploadFacade:
    """
    Simplified interface for OneDrive large file uploads.

    Example:
        >>> from onedrivepy.core.upload import UploadFacade
        >>> uploader = UploadFacade(api_client)
        >>> item = await uploader.upload("video.mp4", "folder_id")
        >>> print(f"Uploaded: {item.id}")
    """

    def __init__(
        self,
        api_client: ApiClientProtocol,
        range_strategy: Optional[RangeStrategy] = None,
        log_level: int = logging.INFO
    ):
        """
        Initialize upload facade.

        Args:
            api_client: OneDrive API client
            range_strategy: Optional custom range strategy
            log_level: Logging level
        """
        self._api = api_client
        self._range_strategy = range_strategy
        self._validator = FileValidator()
        self._logger = logging.getLogger('onedrivepy.upload')
        self._logger.setLevel(log_level)

    async def upload(
        self,
        file_path: Union[str, Path],
        folder_id: str,
        name: Optional[str] = None,
        drive_id: Optional[str] = None,
        conflict_behavior: Optional[Union[ConflictBehavior, str]] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> DriveItem:
        """
        Upload a local file.

        Args:
            file_path: Path to file to upload
            folder_id: ID of the destination folder
            name: Optional remote name (defaults to the local name)
            drive_id: Optional target drive
            conflict_behavior: fail, replace or rename
            chunk_size: Bytes per chunk request
            progress_callback: Optional callback for progress updates

        Returns:
            The created or replaced drive item

        Raises:
            FileNotFoundError: If file doesn't exist
            ValidationError: If the path is not a non-empty file

        Example:
            >>> item = await uploader.upload(
            ...     "backup.tar",
            ...     "folder_id",
            ...     conflict_behavior="rename"
            ... )
        """
        path, size = self._validator.validate(file_path)
        file = LargeFile(name=name or path.name, size=size, data=AsyncFileReader(path))
        options = UploadLargeFileOptions(
            drive_id=drive_id,
            conflict_behavior=conflict_behavior,
            chunk_size=chunk_size
        )
        return await self.upload_large_file(folder_id, file, options, progress_callback)

    async def upload_large_file(
        self,
        folder_id: str,
        file: LargeFile,
        options: Optional[UploadLargeFileOptions] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> DriveItem:
        """
        Upload from any random-access reader.

        Args:
            folder_id: ID of the destination folder
            file: Name, size and reader of the file
            options: Drive, conflict behavior and chunk size
            progress_callback: Optional callback for progress updates

        Returns:
            The created or replaced drive item
        """
        coordinator = UploadCoordinator(
            api_client=self._api,
            range_strategy=self._range_strategy,
            progress_callback=progress_callback
        )
        return await coordinator.upload(folder_id, file, options)
