"""
Tests for the query packet reader
"""

import pytest

from pyutquery.protocol.reader import (
    InsufficientDataError, ProtocolError, QueryPacketReader,
)


class TestReadInt:
    """Test 4-byte little-endian integers"""

    def test_little_endian(self):
        reader = QueryPacketReader(b"\x61\x1e\x00\x00")
        assert reader.read_int() == 7777
        assert reader.pos == 4

    def test_signed(self):
        reader = QueryPacketReader(b"\xff\xff\xff\xff\x00\x00\x00\x80")
        assert reader.read_int() == -1
        assert reader.read_int() == -2147483648

    def test_truncated_raises_and_keeps_position(self):
        reader = QueryPacketReader(b"\x01\x02\x03")
        with pytest.raises(InsufficientDataError):
            reader.read_int()
        assert reader.pos == 0

    def test_truncation_is_protocol_error(self):
        assert issubclass(InsufficientDataError, ProtocolError)


class TestReadString:
    """Test length-prefixed strings"""

    def test_empty_string_advances_one_byte(self):
        reader = QueryPacketReader(b"\x00\x00\x06Arena\x00")
        assert reader.read_string() == ""
        assert reader.pos == 1
        assert reader.read_string() == ""
        assert reader.pos == 2
        assert reader.read_string() == "Arena"

    def test_length_counts_terminator(self):
        reader = QueryPacketReader(b"\x08DM-Deck\x00\x2a\x00\x00\x00")
        assert reader.read_string() == "DM-Deck"
        assert reader.pos == 9
        assert reader.read_int() == 42

    def test_terminator_only(self):
        reader = QueryPacketReader(b"\x01\x00")
        assert reader.read_string() == ""
        assert reader.pos == 2
        assert not reader.has_data()

    def test_marker_at_start_is_stripped(self):
        reader = QueryPacketReader(b"\x0a\x1b\n\xf5\nArena\x00")
        assert reader.read_string() == "Arena"

    def test_marker_anywhere_strips_leading_four_bytes(self):
        reader = QueryPacketReader(b"\x09AB\x1b\n\xf5\nCD\x00")
        assert reader.read_string() == "\xf5\nCD"

    def test_string_without_marker_unmodified(self):
        reader = QueryPacketReader(b"\x0bDeathMatch\x00")
        assert reader.read_string() == "DeathMatch"

    def test_latin1_text(self):
        reader = QueryPacketReader(b"\x05J\xf6rg\x00")
        assert reader.read_string() == "Jörg"

    def test_truncated_string_raises(self):
        reader = QueryPacketReader(b"\x10short\x00")
        with pytest.raises(InsufficientDataError):
            reader.read_string()
        assert reader.pos == 0

    def test_missing_length_byte_raises(self):
        reader = QueryPacketReader(b"")
        with pytest.raises(InsufficientDataError):
            reader.read_string()


class TestCursor:
    """Test position tracking"""

    def test_has_data_and_remaining(self):
        reader = QueryPacketReader(b"\x80\x00\x00\x00\x00\x05\x00\x00\x00", pos=5)
        assert reader.has_data()
        assert reader.remaining() == 4
        assert reader.read_int() == 5
        assert not reader.has_data()
        assert reader.remaining() == 0

    def test_read_byte(self):
        reader = QueryPacketReader(b"\x80")
        assert reader.read_byte() == 0x80
        with pytest.raises(InsufficientDataError):
            reader.read_byte()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
