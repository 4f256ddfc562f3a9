"""
Range strategies for chunked uploads.

The server decides which bytes it wants next through the
``nextExpectedRanges`` of each session update; the strategy turns that
list into the next (offset, length) pair and rejects answers that would
never let the upload finish.
"""
import re
from typing import List, Optional, Tuple

from ...exceptions import ProtocolError


_RANGE = re.compile(r'^\s*(\d+)\s*-\s*(\d*)\s*$')


def parse_range(entry: str) -> Tuple[int, Optional[int]]:
    """
    Parse a "start-end" or "start-" range entry.

    Args:
        entry: Range string from nextExpectedRanges

    Returns:
        (start, end) with end None when open-ended

    Raises:
        ProtocolError: If the entry is malformed
    """
    match = _RANGE.match(entry or '')
    if not match:
        raise ProtocolError(f"Malformed next expected range: {entry!r}")
    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else None
    if end is not None and end < start:
        raise ProtocolError(f"Next expected range ends before it starts: {entry!r}")
    return start, end


def content_range(offset: int, count: int, total: int) -> str:
    """Content-Range header value for count bytes sent at offset (inclusive end)."""
    return f"bytes {offset}-{offset + count - 1}/{total}"


class ServerRangeStrategy:
    """
    Follows the ranges requested by the server.

    The first chunk starts at 0 with the configured chunk size. After
    that, the first entry of nextExpectedRanges gives the next offset,
    and its end (when present) the next length; an open-ended entry
    reuses the previous length.
    """

    def first_range(self, file_size: int, chunk_size: int) -> Tuple[int, int]:
        return 0, chunk_size

    def next_range(
        self,
        next_expected_ranges: List[str],
        offset: int,
        length: int,
        file_size: int
    ) -> Tuple[int, int]:
        """
        Resolve the next chunk from the server's expected ranges.

        Raises:
            ProtocolError: If no range is given, the range is malformed,
                the offset does not advance, or it lies past the end of the file
        """
        if not next_expected_ranges:
            raise ProtocolError(
                "Server asked to continue but specified no next range "
                "and returned no drive item"
            )

        start, end = parse_range(next_expected_ranges[0])

        if start <= offset:
            raise ProtocolError(
                f"Server did not advance the upload: next range starts at {start}, "
                f"last chunk started at {offset}"
            )
        if start >= file_size:
            raise ProtocolError(
                f"Server expects data at {start}, past the end of the {file_size} byte file"
            )

        next_length = end - start + 1 if end is not None else length
        return start, next_length
