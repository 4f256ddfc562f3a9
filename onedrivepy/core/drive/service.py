"""
Drive items service.

Request builders for the drive item operations of the OneDrive API.
"""
import logging
from typing import Optional, Union

from .models import (
    CopyItemResponse,
    Drive,
    DriveItem,
    DriveItemsResponse,
    DriveSpecialFolder,
    MoveItemResponse,
    ParentReference,
    RenameItemResponse
)
from .paths import escape, item_path
from ..api.async_client import AsyncAPIClient
from ..api.errors import map_error_response
from ..exceptions import ValidationError


class DriveItemsService:
    """
    Drive item operations.

    An empty drive_id selects the default drive of the authenticated user.
    Input is validated before any request is sent.
    """

    def __init__(self, api_client: AsyncAPIClient):
        self._api = api_client
        self._logger = logging.getLogger('onedrivepy.drive')

    async def list(self, folder_id: Optional[str] = None) -> DriveItemsResponse:
        """
        List the children of a folder in the default drive.

        Args:
            folder_id: Folder to list; the drive root when empty
        """
        path = f"{item_path(folder_id)}/children" if folder_id else "me/drive/root/children"
        data = await self._api.request('GET', path)
        return DriveItemsResponse.from_dict(data or {})

    async def list_special(self, folder: Union[DriveSpecialFolder, str]) -> DriveItemsResponse:
        """List the children of a special folder."""
        name = _special_name(folder)
        data = await self._api.request('GET', f"me/drive/special/{escape(name)}/children")
        return DriveItemsResponse.from_dict(data or {})

    async def get(self, item_id: str) -> DriveItem:
        """Get an item of the default drive by id."""
        if not item_id:
            raise ValidationError("Please provide the Item ID of the item.")
        data = await self._api.request('GET', item_path(item_id))
        return DriveItem.from_dict(data or {})

    async def get_by_path(self, path: str) -> DriveItem:
        """Get an item of the default drive by its path from the root."""
        if not path:
            raise ValidationError("Please provide the path of the item.")
        segments = [escape(part) for part in path.strip('/').split('/') if part]
        if not segments:
            data = await self._api.request('GET', "me/drive/root")
        else:
            data = await self._api.request('GET', "me/drive/root:/" + '/'.join(segments))
        return DriveItem.from_dict(data or {})

    async def get_special(self, folder: Union[DriveSpecialFolder, str]) -> DriveItem:
        """Get a special folder."""
        name = _special_name(folder)
        data = await self._api.request('GET', f"me/drive/special/{escape(name)}")
        return DriveItem.from_dict(data or {})

    async def get_default_drive(self) -> Drive:
        """Get the default drive of the authenticated user."""
        data = await self._api.request('GET', "me/drive")
        return Drive.from_dict(data or {})

    async def create_folder(
        self,
        folder_name: str,
        parent_folder_id: Optional[str] = None,
        drive_id: Optional[str] = None
    ) -> DriveItem:
        """
        Create a folder.

        If a folder with the same name already exists in the parent, the
        server picks a new name for the created one.

        Args:
            folder_name: Name of the new folder
            parent_folder_id: Parent folder; the drive root when empty
            drive_id: Target drive
        """
        if not folder_name:
            raise ValidationError("Please provide the folder name.")
        path = f"{item_path(parent_folder_id or 'root', drive_id)}/children"
        body = {
            'name': folder_name,
            'folder': {},
            '@microsoft.graph.conflictBehavior': 'rename',
        }
        data = await self._api.request('POST', path, body=body)
        return DriveItem.from_dict(data or {})

    async def delete(self, item_id: str, drive_id: Optional[str] = None) -> None:
        """
        Delete an item.

        The item is moved to the recycle bin, not permanently deleted.
        """
        if not item_id:
            raise ValidationError("Please provide the Item ID of the item to be deleted.")
        await self._api.request('DELETE', item_path(item_id, drive_id))
        self._logger.debug(f"Deleted item {item_id}")

    async def move(
        self,
        item_id: str,
        destination_folder_id: str,
        drive_id: Optional[str] = None
    ) -> MoveItemResponse:
        """
        Move an item to a new parent folder.

        To move an item to the drive root, pass the actual id of the
        root folder; "root" is not accepted here.
        """
        if not item_id:
            raise ValidationError("Please provide the Item ID of the item to be moved.")
        if not destination_folder_id:
            raise ValidationError(
                "Please provide the destination, i.e. the ID of the new parent folder for the item."
            )
        body = {'parentReference': ParentReference(id=destination_folder_id).to_dict()}
        data = await self._api.request('PATCH', item_path(item_id, drive_id), body=body)
        return MoveItemResponse.from_dict(data or {})

    async def rename(
        self,
        item_id: str,
        new_name: str,
        drive_id: Optional[str] = None
    ) -> RenameItemResponse:
        """Rename an item."""
        if not item_id:
            raise ValidationError("Please provide the Item ID of the item to be renamed.")
        if not new_name:
            raise ValidationError("Please provide a new name for the item.")
        data = await self._api.request('PATCH', item_path(item_id, drive_id), body={'name': new_name})
        return RenameItemResponse.from_dict(data or {})

    async def copy(
        self,
        item_id: str,
        destination_folder_id: str,
        new_name: str,
        source_drive_id: Optional[str] = None,
        destination_drive_id: Optional[str] = None
    ) -> CopyItemResponse:
        """
        Copy an item to a folder under a new name.

        The copy runs asynchronously on the server; the returned location
        is the monitor URL of the operation. The server rejects a name
        that already exists in the destination.
        """
        if not item_id:
            raise ValidationError("Please provide the Item ID of the item to be copied.")
        if not destination_folder_id:
            raise ValidationError(
                "Please provide the destination, i.e. the ID of the new parent folder for the item."
            )
        if not new_name:
            raise ValidationError("Please provide the name of the new item after the copy is done.")

        if not destination_drive_id:
            destination_drive_id = (await self.get_default_drive()).id

        body = {
            'name': new_name,
            'parentReference': ParentReference(
                id=destination_folder_id,
                drive_id=destination_drive_id
            ).to_dict(),
        }
        response = await self._api.send('POST', f"{item_path(item_id, source_drive_id)}/copy", body=body)

        location = response.header('Location') or ''
        if not location:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict):
                location = payload.get('location', '')
        return CopyItemResponse(location=location)

    async def download(self, item: Union[DriveItem, str]) -> bytes:
        """
        Download the content of a file.

        Args:
            item: Drive item or item id; the item is fetched again when
                it carries no download URL

        Returns:
            File content
        """
        if isinstance(item, str):
            item = await self.get(item)
        elif not item.download_url:
            item = await self.get(item.id)

        if not item.download_url:
            raise ValidationError(f"Item {item.id} has no download URL; only files can be downloaded.")

        response = await self._api.raw_request('GET', item.download_url)
        if response.status != 200:
            raise map_error_response(response.status, response.reason, response.body)
        return response.body


def _special_name(folder: Union[DriveSpecialFolder, str]) -> str:
    name = folder.value if isinstance(folder, DriveSpecialFolder) else folder
    if not name:
        raise ValidationError("Please specify which special folder to use.")
    return name
