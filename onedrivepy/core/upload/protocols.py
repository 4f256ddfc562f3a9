"""
Protocol definitions for upload module.

Defines interfaces (protocols) for dependency injection and strategy pattern.
"""
from typing import Protocol, Dict, Any, List, Tuple, Optional, Union


class ReaderAt(Protocol):
    """
    Random-access reader over the bytes of a file.

    Implementations must allow concurrent calls at arbitrary offsets,
    so that independent uploads can share one source.
    """

    async def read_at(self, offset: int, size: int) -> bytes:
        """
        Read up to size bytes starting at offset.

        Args:
            offset: Start position in bytes
            size: Number of bytes wanted

        Returns:
            The bytes read; shorter than size only at end of data
        """
        ...


class RangeStrategy(Protocol):
    """Protocol for deciding which byte range to send next."""

    def first_range(self, file_size: int, chunk_size: int) -> Tuple[int, int]:
        """Returns (offset, length) of the first chunk."""
        ...

    def next_range(
        self,
        next_expected_ranges: List[str],
        offset: int,
        length: int,
        file_size: int
    ) -> Tuple[int, int]:
        """
        Resolve the server's next expected ranges into the next chunk.

        Args:
            next_expected_ranges: Ranges from the latest session update
            offset: Offset of the chunk just sent
            length: Requested length of the chunk just sent
            file_size: Total file size

        Returns:
            (offset, length) of the next chunk
        """
        ...


class ApiClientProtocol(Protocol):
    """Subset of the API client used by the upload services."""

    def build_url(self, path: str, params: Optional[Dict[str, str]] = None) -> str:
        ...

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Dict[str, str]] = None
    ) -> Any:
        ...

    async def raw_request(
        self,
        method: str,
        url: str,
        data: Optional[Union[bytes, bytearray, memoryview]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        ...
