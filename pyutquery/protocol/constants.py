"""
Protocol constants for pyutquery
"""

from enum import IntEnum


class QueryType(IntEnum):
    """Query opcodes, also used as the last byte of each reply header"""
    SERVER_INFO = 0
    GAME_INFO = 1
    PLAYER_INFO = 2


# Every request and reply starts with this prefix followed by the opcode
QUERY_PREFIX = b'\x80\x00\x00\x00'


def query_header(query_type: QueryType) -> bytes:
    """Build the 5-byte header for a query type"""
    return QUERY_PREFIX + bytes([query_type])


QRY_SERVERINFO = query_header(QueryType.SERVER_INFO)
QRY_GAMEINFO = query_header(QueryType.GAME_INFO)
QRY_PLAYERSINFO = query_header(QueryType.PLAYER_INFO)

HEADERS = {
    QueryType.SERVER_INFO: QRY_SERVERINFO,
    QueryType.GAME_INFO: QRY_GAMEINFO,
    QueryType.PLAYER_INFO: QRY_PLAYERSINFO,
}

HEADER_SIZE = len(QRY_SERVERINFO)  # 5 bytes

# One reply is expected per request
REPLY_COUNT = len(HEADERS)

# Some servers prefix names with this sequence; the first 4 bytes get dropped
COLOR_MARKER = b'\x1b\n\xf5\n'
COLOR_MARKER_SIZE = 4

# Longest string text: the single length byte also counts the NUL terminator
MAX_STRING_LENGTH = 0xFF - 1

# Default values
DEFAULT_QUERY_PORT = 7778
DEFAULT_TIMEOUT = 2.0
DEFAULT_POLL_INTERVAL = 0.1
MAX_DATAGRAM_SIZE = 2048
DEFAULT_ENCODING = 'latin-1'
