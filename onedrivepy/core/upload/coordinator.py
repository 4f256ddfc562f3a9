"""
Upload coordinator.

Drives the chunked upload state machine using injected dependencies.
Follows Dependency Inversion Principle - depends on abstractions, not concretions.
"""
import time
from typing import Optional, Callable

from .protocols import ApiClientProtocol, RangeStrategy
from .models import (
    ChunkPlan,
    LargeFile,
    UploadLargeFileOptions,
    UploadProgress,
    UploadState
)
from .strategies import ServerRangeStrategy
from .services import ChunkUploader, SessionNegotiator, SessionCleaner
from ..drive.models import DriveItem, UploadSession
from ..logging import get_logger

logger = get_logger('onedrivepy.upload.coordinator')


class _ActiveSession:
    """The upload session as last updated by the server."""

    def __init__(self, session: UploadSession):
        self.session = session


class UploadCoordinator:
    """
    Coordinates a large file upload through an upload session.

    Creates the session, sends chunks one at a time in the order the
    server asks for them until it returns the finished drive item, and
    cancels the session on every exit path.

    Uses dependency injection for all components, making it:
    - Testable (mock dependencies)
    - Extensible (swap the range strategy)
    """

    def __init__(
        self,
        api_client: ApiClientProtocol,
        range_strategy: Optional[RangeStrategy] = None,
        negotiator: Optional[SessionNegotiator] = None,
        cleaner: Optional[SessionCleaner] = None,
        chunk_uploader: Optional[ChunkUploader] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            api_client: OneDrive API client
            range_strategy: Strategy resolving the next chunk range
            negotiator: Upload session factory
            cleaner: Upload session canceller
            chunk_uploader: Chunk sender
            progress_callback: Optional callback for progress updates
        """
        self._api = api_client
        self._ranges = range_strategy or ServerRangeStrategy()
        self._negotiator = negotiator or SessionNegotiator(api_client)
        self._cleaner = cleaner or SessionCleaner(api_client)
        self._uploader = chunk_uploader or ChunkUploader(api_client)
        self._progress_callback = progress_callback

    async def upload(
        self,
        folder_id: str,
        file: LargeFile,
        options: Optional[UploadLargeFileOptions] = None
    ) -> DriveItem:
        """
        Upload a file through a new upload session.

        Args:
            folder_id: ID of the destination folder
            file: File to upload
            options: Drive, conflict behavior and chunk size

        Returns:
            The created or replaced drive item

        Raises:
            ValidationError: If the request is incomplete
            ProtocolError: If the server breaks the session contract
            DataTruncatedError: If the source yields fewer bytes than its size
            RemoteError: If the server rejects the session or a chunk
            TransportError: If a request fails at the network level
        """
        SessionNegotiator.validate(folder_id, file)
        options = options or UploadLargeFileOptions()
        file_size_mb = file.size / (1024 * 1024)
        logger.info(f"Starting upload: {file.name} ({file_size_mb:.2f} MB)")

        active = _ActiveSession(await self._negotiator.create(folder_id, file, options))
        logger.info("Upload session created")

        try:
            item = await self._upload_chunks(active, file, options.chunk_size)
        finally:
            await self._cleaner.cancel(active.session)

        logger.info(f"Upload complete: {item.name} ({item.id})")
        return item

    async def _upload_chunks(
        self,
        active: _ActiveSession,
        file: LargeFile,
        chunk_size: int
    ) -> DriveItem:
        """
        Send chunks until the server returns the drive item.

        Each chunk waits for the server's answer before the next one is
        read, since the answer decides which range comes next. Session
        updates are merged into active, so cleanup targets the latest URL.
        """
        offset, length = self._ranges.first_range(file.size, chunk_size)
        plan = ChunkPlan.allocate(chunk_size)
        plan.move(offset, length)
        progress = UploadProgress(total_bytes=file.size)

        try:
            while True:
                progress.state = UploadState.SENDING
                chunk_start_time = time.time()
                count = await plan.fill(file.data, file.size)

                result = await self._uploader.upload_chunk(
                    active.session.upload_url, plan.view(), plan.offset, file.size
                )

                elapsed = time.time() - chunk_start_time
                logger.debug(
                    f"Chunk {progress.chunks_sent} ({plan.offset}-{plan.last_byte}, "
                    f"{count} bytes) completed in {elapsed:.2f}s"
                )
                progress.chunks_sent += 1
                progress.uploaded_bytes = plan.offset + count

                if result.is_final:
                    progress.state = UploadState.DONE
                    progress.uploaded_bytes = file.size
                    self._report(progress)
                    return result.item

                progress.state = UploadState.CONTINUING
                self._report(progress)

                active.session = active.session.merge(result.session)
                offset, length = self._ranges.next_range(
                    active.session.next_expected_ranges, plan.offset, plan.length, file.size
                )
                plan.move(offset, length)
        except Exception as e:
            progress.state = UploadState.FAILED
            logger.error(f"Upload of {file.name} failed after {progress.chunks_sent} chunks: {e}")
            raise

    def _report(self, progress: UploadProgress) -> None:
        if self._progress_callback:
            self._progress_callback(progress)
