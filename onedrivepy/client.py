"""
OneDriveClient - High-level async client for OneDrive.

Example:
    >>> async with OneDriveClient(access_token) as drive:
    ...     for item in await drive.list():
    ...         print(item.name)
"""
from pathlib import Path
from typing import Optional, Union, Callable

import aiofiles

from .core.api import AsyncAPIClient, APIConfig
from .core.drive import (
    CopyItemResponse,
    Drive,
    DriveItem,
    DriveItemsResponse,
    DriveItemsService,
    DriveSpecialFolder,
    MoveItemResponse,
    RenameItemResponse,
    ConflictBehavior
)
from .core.logging import get_logger
from .core.upload import (
    DEFAULT_CHUNK_SIZE,
    LargeFile,
    UploadFacade,
    UploadLargeFileOptions,
    UploadProgress
)

logger = get_logger('onedrivepy.client')


class OneDriveClient:
    """
    High-level async client for OneDrive.

    Wires the API transport, the drive items service and the large file
    uploader. The access token is used as given; obtaining and refreshing
    it is up to the caller.

    Example:
        >>> async with OneDriveClient(token) as drive:
        ...     folder = await drive.create_folder("Backups")
        ...     item = await drive.upload("backup.tar", folder.id)
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        config: Optional[APIConfig] = None
    ):
        """
        Initialize client.

        Args:
            access_token: Bearer token for the API
            config: API configuration (token argument takes precedence)
        """
        self._config = config or APIConfig()
        if access_token:
            self._config.access_token = access_token
        self._api = AsyncAPIClient(self._config)
        self._items = DriveItemsService(self._api)
        self._uploader = UploadFacade(self._api, log_level=self._config.log_level)

    @property
    def api(self) -> AsyncAPIClient:
        """Underlying API client."""
        return self._api

    @property
    def items(self) -> DriveItemsService:
        """Drive items service."""
        return self._items

    async def __aenter__(self) -> 'OneDriveClient':
        await self._api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying HTTP session."""
        await self._api.close()

    # Listing and lookup

    async def list(self, folder_id: Optional[str] = None) -> DriveItemsResponse:
        """List a folder of the default drive (the root when folder_id is empty)."""
        return await self._items.list(folder_id)

    async def list_special(self, folder: Union[DriveSpecialFolder, str]) -> DriveItemsResponse:
        return await self._items.list_special(folder)

    async def get(self, item_id: str) -> DriveItem:
        return await self._items.get(item_id)

    async def get_by_path(self, path: str) -> DriveItem:
        return await self._items.get_by_path(path)

    async def get_special(self, folder: Union[DriveSpecialFolder, str]) -> DriveItem:
        return await self._items.get_special(folder)

    async def get_default_drive(self) -> Drive:
        return await self._items.get_default_drive()

    # Item operations

    async def create_folder(
        self,
        folder_name: str,
        parent_folder_id: Optional[str] = None,
        drive_id: Optional[str] = None
    ) -> DriveItem:
        return await self._items.create_folder(folder_name, parent_folder_id, drive_id)

    async def delete(self, item_id: str, drive_id: Optional[str] = None) -> None:
        await self._items.delete(item_id, drive_id)

    async def move(
        self,
        item_id: str,
        destination_folder_id: str,
        drive_id: Optional[str] = None
    ) -> MoveItemResponse:
        return await self._items.move(item_id, destination_folder_id, drive_id)

    async def rename(
        self,
        item_id: str,
        new_name: str,
        drive_id: Optional[str] = None
    ) -> RenameItemResponse:
        return await self._items.rename(item_id, new_name, drive_id)

    async def copy(
        self,
        item_id: str,
        destination_folder_id: str,
        new_name: str,
        source_drive_id: Optional[str] = None,
        destination_drive_id: Optional[str] = None
    ) -> CopyItemResponse:
        return await self._items.copy(
            item_id, destination_folder_id, new_name, source_drive_id, destination_drive_id
        )

    # Transfers

    async def download(
        self,
        item: Union[DriveItem, str],
        output: Optional[Union[str, Path]] = None
    ) -> bytes:
        """
        Download a file.

        Args:
            item: Drive item or item id
            output: Optional local path to write the content to

        Returns:
            File content
        """
        data = await self._items.download(item)
        if output is not None:
            async with aiofiles.open(output, 'wb') as f:
                await f.write(data)
            logger.info(f"Downloaded {len(data)} bytes to {output}")
        return data

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
        Upload a local file through an upload session.

        Args:
            file_path: Local file
            folder_id: ID of the destination folder
            name: Remote name (defaults to the local name)
            drive_id: Target drive
            conflict_behavior: fail, replace or rename
            chunk_size: Bytes per chunk request
            progress_callback: Called after every acknowledged chunk

        Returns:
            The created or replaced drive item
        """
        return await self._uploader.upload(
            file_path,
            folder_id,
            name=name,
            drive_id=drive_id,
            conflict_behavior=conflict_behavior,
            chunk_size=chunk_size,
            progress_callback=progress_callback
        )

    async def upload_large_file(
        self,
        folder_id: str,
        file: LargeFile,
        options: Optional[UploadLargeFileOptions] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ) -> DriveItem:
        """Upload from any random-access reader through an upload session."""
        return await self._uploader.upload_large_file(folder_id, file, options, progress_callback)
