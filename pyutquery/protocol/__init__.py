"""
Query protocol encoding and decoding
"""

from .constants import (
    QueryType, QRY_SERVERINFO, QRY_GAMEINFO, QRY_PLAYERSINFO,
    HEADER_SIZE, REPLY_COUNT, COLOR_MARKER,
)
from .reader import QueryPacketReader, ProtocolError, InsufficientDataError
from .replies import (
    identify_reply, decode_reply, decode_server_info,
    decode_game_info, decode_player_info,
)
from .writer import (
    QueryPacketWriter, REQUEST_PACKETS, build_server_info_reply,
    build_game_info_reply, build_player_info_reply,
)

__all__ = [
    'QueryType',
    'QRY_SERVERINFO',
    'QRY_GAMEINFO',
    'QRY_PLAYERSINFO',
    'HEADER_SIZE',
    'REPLY_COUNT',
    'COLOR_MARKER',
    'QueryPacketReader',
    'ProtocolError',
    'InsufficientDataError',
    'identify_reply',
    'decode_reply',
    'decode_server_info',
    'decode_game_info',
    'decode_player_info',
    'QueryPacketWriter',
    'REQUEST_PACKETS',
    'build_server_info_reply',
    'build_game_info_reply',
    'build_player_info_reply',
]
