"""
Upload session services.

Creates resumable upload sessions and cancels them once an upload is over.
"""
import logging
from typing import Optional

from ...drive.models import UploadSession
from ...drive.paths import child_path
from ...exceptions import ProtocolError, ValidationError
from ..models import LargeFile, UploadLargeFileOptions
from ..protocols import ApiClientProtocol


CONFLICT_BEHAVIOR_PARAM = '@microsoft.graph.conflictBehavior'


class SessionNegotiator:
    """
    Requests upload sessions from the API.

    Responsibilities:
    - Validate the upload request before any network call
    - Build the createUploadSession path for the destination
    - Decode the session returned by the server
    """

    def __init__(self, api_client: ApiClientProtocol):
        self._api = api_client
        self._logger = logging.getLogger('onedrivepy.upload.session')

    @staticmethod
    def validate(folder_id: str, file: LargeFile) -> None:
        """
        Check the upload request.

        Raises:
            ValidationError: If the folder id, name, size or data source is missing
        """
        if not folder_id:
            raise ValidationError(
                "Please provide the destination, i.e. the ID of the parent folder for this new item."
            )
        if file is None or not file.name:
            raise ValidationError("Please provide the file name.")
        if not file.size or file.size <= 0:
            raise ValidationError("Please provide the file size.")
        if file.data is None:
            raise ValidationError("Please provide the file reader.")

    async def create(
        self,
        folder_id: str,
        file: LargeFile,
        options: Optional[UploadLargeFileOptions] = None
    ) -> UploadSession:
        """
        Create an upload session for file in folder_id.

        Args:
            folder_id: ID of the destination folder
            file: File to upload
            options: Drive and conflict behavior selection

        Returns:
            The new upload session

        Raises:
            ValidationError: If the request is incomplete
            RemoteError: If the server rejects the session
            ProtocolError: If the response carries no upload URL
        """
        self.validate(folder_id, file)
        options = options or UploadLargeFileOptions()

        path = child_path(folder_id, file.name, options.drive_id) + "/createUploadSession"
        params = None
        if options.conflict_behavior:
            params = {CONFLICT_BEHAVIOR_PARAM: options.conflict_behavior.value}

        self._logger.debug(f"Creating upload session for {file.name} in {folder_id}")
        data = await self._api.request('POST', path, body={}, params=params)

        session = UploadSession.from_dict(data or {})
        if not session.upload_url:
            raise ProtocolError("Upload session response has no upload URL")

        self._logger.debug(f"Upload session expires at {session.expiration_date_time}")
        return session


class SessionCleaner:
    """
    Cancels upload sessions.

    Cancellation is advisory: by the time it runs the outcome of the
    upload is already known, so failures are logged and never raised.
    """

    def __init__(self, api_client: ApiClientProtocol):
        self._api = api_client
        self._logger = logging.getLogger('onedrivepy.upload.session')

    async def cancel(self, session: UploadSession) -> bool:
        """
        Delete the session on the server.

        Args:
            session: Session to cancel

        Returns:
            True if the server confirmed the cancellation with 204
        """
        if not session or not session.upload_url:
            return False
        try:
            response = await self._api.raw_request('DELETE', session.upload_url)
        except Exception as e:
            self._logger.warning(f"Failed to cancel upload session: {e}")
            return False

        if response.status != 204:
            self._logger.debug(f"Upload session cancellation returned HTTP {response.status}")
            return False

        self._logger.debug("Upload session cancelled")
        return True
