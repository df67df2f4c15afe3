"""
Query Packet Writer

Builds request datagrams and replies in the same positional layout the
reader understands. Replies are mostly useful for test servers.
"""

import struct
from typing import Dict, Iterable

from ..models import PlayerInfo, ServerInfo
from .constants import (
    DEFAULT_ENCODING, HEADERS, MAX_STRING_LENGTH, QueryType,
    QRY_GAMEINFO, QRY_PLAYERSINFO, QRY_SERVERINFO,
)
from .replies import FieldType, PLAYER_INFO_LAYOUT, SERVER_INFO_LAYOUT

_INT32 = struct.Struct('<i')

# Requests in the order a session sends them
REQUEST_PACKETS = (QRY_SERVERINFO, QRY_GAMEINFO, QRY_PLAYERSINFO)


class QueryPacketWriter:
    """Accumulates little-endian integers and length-prefixed strings"""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding
        self._buffer = bytearray()

    def write_byte(self, value: int) -> 'QueryPacketWriter':
        self._buffer.append(value & 0xFF)
        return self

    def write_bytes(self, data: bytes) -> 'QueryPacketWriter':
        self._buffer.extend(data)
        return self

    def write_int(self, value: int) -> 'QueryPacketWriter':
        """Write a 4-byte little-endian signed integer"""
        if not -0x80000000 <= value <= 0x7FFFFFFF:
            raise ValueError(f"Value {value} does not fit in a signed 32-bit integer")
        self._buffer.extend(_INT32.pack(value))
        return self

    def write_string(self, text: str) -> 'QueryPacketWriter':
        """Write a string as length byte + text + NUL (empty string is one zero byte)"""
        if not text:
            self._buffer.append(0)
            return self

        raw = text.encode(self.encoding)
        if len(raw) > MAX_STRING_LENGTH:
            raise ValueError(f"String too long for a query reply ({len(raw)} bytes)")

        self._buffer.append(len(raw) + 1)
        self._buffer.extend(raw)
        self._buffer.append(0)
        return self

    def write_fields(self, layout, values) -> 'QueryPacketWriter':
        """Write values (an object or a dict) following a reply layout"""
        for reply_field in layout:
            if isinstance(values, dict):
                value = values[reply_field.name]
            else:
                value = getattr(values, reply_field.name)

            if reply_field.field_type == FieldType.INT32:
                self.write_int(value)
            else:
                self.write_string(value)
        return self

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


def build_server_info_reply(server: ServerInfo, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Build a server-info reply from a ServerInfo"""
    writer = QueryPacketWriter(encoding)
    writer.write_bytes(HEADERS[QueryType.SERVER_INFO])
    writer.write_fields(SERVER_INFO_LAYOUT, server)
    return writer.to_bytes()


def build_game_info_reply(attributes: Dict[str, str], encoding: str = DEFAULT_ENCODING) -> bytes:
    """Build a game-info reply from key/value attributes"""
    writer = QueryPacketWriter(encoding)
    writer.write_bytes(HEADERS[QueryType.GAME_INFO])
    for key, value in attributes.items():
        writer.write_string(key)
        writer.write_string(value)
    return writer.to_bytes()


def build_player_info_reply(players: Iterable[PlayerInfo], encoding: str = DEFAULT_ENCODING) -> bytes:
    """Build a player-info reply from player records"""
    writer = QueryPacketWriter(encoding)
    writer.write_bytes(HEADERS[QueryType.PLAYER_INFO])
    for player in players:
        writer.write_fields(PLAYER_INFO_LAYOUT, player)
    return writer.to_bytes()
