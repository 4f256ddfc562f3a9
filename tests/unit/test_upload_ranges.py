"""Tests for upload range strategies."""
import pytest

from onedrivepy.core.exceptions import ProtocolError
from onedrivepy.core.upload.strategies import ServerRangeStrategy
from onedrivepy.core.upload.strategies.ranges import parse_range, content_range


MiB = 1024 * 1024


class TestParseRange:
    """Test suite for parse_range."""

    def test_open_range(self):
        assert parse_range("4194304-") == (4194304, None)

    def test_closed_range(self):
        assert parse_range("1048576-2097151") == (1048576, 2097151)

    def test_whitespace_tolerated(self):
        assert parse_range(" 12 - 20 ") == (12, 20)

    @pytest.mark.parametrize("entry", ["", "abc", "-100", "10-abc", "1-2-3", None])
    def test_malformed(self, entry):
        with pytest.raises(ProtocolError, match="Malformed"):
            parse_range(entry)

    def test_end_before_start(self):
        with pytest.raises(ProtocolError):
            parse_range("200-100")


class TestContentRange:
    """Test suite for content_range."""

    def test_full_chunk(self):
        assert content_range(0, 4 * MiB, 10_000_000) == "bytes 0-4194303/10000000"

    def test_final_partial_chunk(self):
        assert content_range(8388608, 1611392, 10_000_000) == "bytes 8388608-9999999/10000000"

    def test_single_byte(self):
        assert content_range(5, 1, 6) == "bytes 5-5/6"


class TestServerRangeStrategy:
    """Test suite for ServerRangeStrategy."""

    @pytest.fixture
    def strategy(self):
        return ServerRangeStrategy()

    def test_first_range(self, strategy):
        assert strategy.first_range(10_000_000, 4 * MiB) == (0, 4 * MiB)

    def test_open_range_reuses_length(self, strategy):
        offset, length = strategy.next_range(["4194304-"], 0, 4 * MiB, 10_000_000)

        assert offset == 4194304
        assert length == 4 * MiB

    def test_closed_range_sets_inclusive_length(self, strategy):
        offset, length = strategy.next_range(["1048576-2097151"], 0, 4 * MiB, 10_000_000)

        assert offset == 1048576
        assert length == 1048576

    def test_first_entry_wins(self, strategy):
        offset, length = strategy.next_range(
            ["100-199", "500-"], 0, 50, 1000
        )

        assert (offset, length) == (100, 100)

    def test_empty_ranges(self, strategy):
        with pytest.raises(ProtocolError, match="no next range"):
            strategy.next_range([], 0, 4 * MiB, 10_000_000)

    def test_none_ranges(self, strategy):
        with pytest.raises(ProtocolError):
            strategy.next_range(None, 0, 4 * MiB, 10_000_000)

    def test_same_offset_rejected(self, strategy):
        with pytest.raises(ProtocolError, match="did not advance"):
            strategy.next_range(["4194304-"], 4194304, 4 * MiB, 10_000_000)

    def test_backwards_offset_rejected(self, strategy):
        with pytest.raises(ProtocolError, match="did not advance"):
            strategy.next_range(["0-"], 4194304, 4 * MiB, 10_000_000)

    def test_offset_past_end_rejected(self, strategy):
        with pytest.raises(ProtocolError, match="past the end"):
            strategy.next_range(["10000000-"], 0, 4 * MiB, 10_000_000)
