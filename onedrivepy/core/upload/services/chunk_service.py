"""
Chunk upload service.

Handles sending individual chunks to an upload session URL.
"""
from dataclasses import dataclass
from typing import Optional, Union
import json
import logging
import time

from ...api.errors import map_error_response
from ...drive.models import DriveItem, UploadSession
from ...exceptions import ProtocolError
from ..protocols import ApiClientProtocol
from ..strategies.ranges import content_range


@dataclass(frozen=True)
class ChunkResult:
    """
    Server answer to a chunk.

    Exactly one of item (upload finished) and session (more data
    expected) is set.
    """
    status: int
    item: Optional[DriveItem] = None
    session: Optional[UploadSession] = None

    @property
    def is_final(self) -> bool:
        return self.item is not None


class ChunkUploader:
    """
    Sends chunks to an upload session.

    Responsibilities:
    - PUT chunk bytes with Content-Length and Content-Range headers
    - Interpret the response status
    - Decode the drive item or session update, or map the error
    """

    def __init__(self, api_client: ApiClientProtocol):
        """
        Initialize chunk uploader.

        Args:
            api_client: Client providing raw_request
        """
        self._api = api_client
        self._logger = logging.getLogger('onedrivepy.upload.chunk')

    async def upload_chunk(
        self,
        upload_url: str,
        data: Union[bytes, bytearray, memoryview],
        offset: int,
        total_size: int
    ) -> ChunkResult:
        """
        Upload one chunk.

        Args:
            upload_url: Session URL
            data: Chunk bytes, exactly as many as will be declared
            offset: Position of the first byte in the file
            total_size: Total file size

        Returns:
            ChunkResult with the final item or the session update

        Raises:
            RemoteError: If the server answers with an error status
            ProtocolError: If a success body cannot be decoded
            TransportError: If the request fails at the network level
        """
        count = len(data)
        headers = {
            'Content-Length': str(count),
            'Content-Range': content_range(offset, count, total_size),
        }
        chunk_size_kb = count / 1024

        upload_start = time.time()
        self._logger.debug(f"Uploading {headers['Content-Range']} ({chunk_size_kb:.1f} KB)")

        response = await self._api.raw_request('PUT', upload_url, data=data, headers=headers)

        upload_time = time.time() - upload_start
        speed_kbps = (chunk_size_kb / upload_time) if upload_time > 0 else 0
        self._logger.debug(
            f"Chunk at {offset} answered HTTP {response.status} in {upload_time:.2f}s ({speed_kbps:.1f} KB/s)"
        )

        return self._process_response(response.status, response.reason, response.body)

    def _process_response(
        self,
        status: int,
        reason: Optional[str],
        body: bytes
    ) -> ChunkResult:
        """
        Process server response.

        Raises:
            RemoteError: For any status other than 200, 201 and 202
            ProtocolError: If a 200, 201 or 202 body is not a JSON object
        """
        if status in (200, 201):
            return ChunkResult(status=status, item=DriveItem.from_dict(self._decode(status, body)))

        if status == 202:
            return ChunkResult(status=status, session=UploadSession.from_dict(self._decode(status, body)))

        self._logger.error(f"Server returned HTTP {status} for chunk")
        raise map_error_response(status, reason, body)

    @staticmethod
    def _decode(status: int, body: bytes) -> dict:
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise ProtocolError(f"Invalid JSON in HTTP {status} chunk response: {e}", status) from e
        if not isinstance(payload, dict):
            raise ProtocolError(f"Unexpected HTTP {status} chunk response: {payload!r}", status)
        return payload
