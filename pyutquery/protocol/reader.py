"""
Query Packet Reader for pyutquery

Forward-only cursor over a single received datagram. Integers are 4-byte
little-endian signed values, strings carry one length byte that counts the
trailing NUL terminator.
"""

import logging
import struct

from .constants import COLOR_MARKER, COLOR_MARKER_SIZE, DEFAULT_ENCODING

logger = logging.getLogger(__name__)

_INT32 = struct.Struct('<i')


class ProtocolError(Exception):
    """Base exception for protocol-related errors"""
    pass


class InsufficientDataError(ProtocolError):
    """Raised when not enough data is available for reading"""
    pass


class QueryPacketReader:
    """Binary reader for query replies

    One reader is created per datagram and never rewound. Reads past the end
    of the data raise InsufficientDataError and leave the position untouched.
    """

    def __init__(self, data: bytes, pos: int = 0, encoding: str = DEFAULT_ENCODING):
        """Initialize the reader

        Args:
            data: Raw datagram bytes
            pos: Starting position, usually just past the reply header
            encoding: Text encoding used for strings
        """
        self.data = bytes(data)
        self.pos = pos
        self.encoding = encoding

    def remaining(self) -> int:
        """Bytes remaining to read"""
        return max(len(self.data) - self.pos, 0)

    def has_data(self) -> bool:
        """True while unread bytes remain"""
        return self.pos < len(self.data)

    def read_byte(self) -> int:
        """Read a single unsigned byte"""
        if not self.has_data():
            raise InsufficientDataError("End of data reached")
        value = self.data[self.pos]
        self.pos += 1
        return value

    def read_int(self) -> int:
        """Read a 4-byte little-endian signed integer"""
        if self.remaining() < _INT32.size:
            raise InsufficientDataError(
                f"Not enough data for int32 at offset {self.pos} ({self.remaining()} bytes left)")
        (value,) = _INT32.unpack_from(self.data, self.pos)
        self.pos += _INT32.size
        return value

    def read_string(self) -> str:
        """Read a length-prefixed string

        A zero length byte is an empty string. Otherwise the length counts the
        terminator: length + 1 bytes are consumed and length - 1 bytes of text
        are returned.
        """
        if not self.has_data():
            raise InsufficientDataError("Not enough data for string length")

        length = self.data[self.pos]
        if length == 0:
            self.pos += 1
            return ""

        if self.remaining() < length + 1:
            raise InsufficientDataError(
                f"Not enough data for string of length {length} at offset {self.pos}")

        raw = self.data[self.pos + 1:self.pos + length]
        self.pos += length + 1

        if COLOR_MARKER in raw:
            raw = raw[COLOR_MARKER_SIZE:]

        return raw.decode(self.encoding, errors='replace')

    def __repr__(self) -> str:
        return f"QueryPacketReader(pos={self.pos}, size={len(self.data)})"
