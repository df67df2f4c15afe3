#!/usr/bin/env python3
"""
Reply layouts and decoders

Each reply is a header marker followed by positional fields. The server-info
reply has a fixed layout, game-info and player-info replies repeat their
record until the datagram is exhausted.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models import PlayerInfo
from .constants import DEFAULT_ENCODING, HEADERS, QueryType
from .reader import QueryPacketReader

logger = logging.getLogger(__name__)


class FieldType(IntEnum):
    """Field types in reply layouts"""
    INT32 = 1      # 4 bytes, little-endian signed
    STRING = 2     # Length byte (counting the NUL) + text + NUL


@dataclass(frozen=True)
class ReplyField:
    """Definition of a field within a reply"""
    name: str
    field_type: FieldType


SERVER_INFO_LAYOUT = (
    ReplyField('id', FieldType.INT32),
    ReplyField('ip', FieldType.STRING),
    ReplyField('port', FieldType.INT32),
    ReplyField('query_port', FieldType.INT32),
    ReplyField('name', FieldType.STRING),
    ReplyField('map', FieldType.STRING),
    ReplyField('game_type', FieldType.STRING),
    ReplyField('players', FieldType.INT32),
    ReplyField('max_players', FieldType.INT32),
    ReplyField('ping', FieldType.INT32),
    ReplyField('flags', FieldType.INT32),
    ReplyField('skill_level', FieldType.INT32),
)

PLAYER_INFO_LAYOUT = (
    ReplyField('id', FieldType.INT32),
    ReplyField('name', FieldType.STRING),
    ReplyField('ping', FieldType.INT32),
    ReplyField('score', FieldType.INT32),
    ReplyField('stats_id', FieldType.INT32),
)

DecodedReply = Union[Dict[str, Any], Dict[str, str], List[PlayerInfo]]


def _read_fields(reader: QueryPacketReader, layout) -> Dict[str, Any]:
    values = {}
    for reply_field in layout:
        if reply_field.field_type == FieldType.INT32:
            values[reply_field.name] = reader.read_int()
        else:
            values[reply_field.name] = reader.read_string()
    return values


def identify_reply(datagram: bytes) -> Optional[Tuple[QueryType, int]]:
    """Find which reply a datagram carries

    Headers are searched anywhere in the datagram. A header right at the start
    wins, otherwise the earliest match is used.

    Returns:
        (query type, offset of the first payload byte) or None
    """
    best = None
    for query_type, header in HEADERS.items():
        index = datagram.find(header)
        if index == -1:
            continue
        if best is None or index < best[1]:
            best = (query_type, index)
        if index == 0:
            break

    if best is None:
        return None

    query_type, index = best
    return query_type, index + len(HEADERS[query_type])


def decode_server_info(reader: QueryPacketReader) -> Dict[str, Any]:
    """Decode the fixed server-info layout into ServerInfo field values"""
    return _read_fields(reader, SERVER_INFO_LAYOUT)


def decode_game_info(reader: QueryPacketReader) -> Dict[str, str]:
    """Decode key/value pairs until the datagram is exhausted"""
    attributes = {}
    while reader.has_data():
        key = reader.read_string()
        attributes[key] = reader.read_string()
    return attributes


def decode_player_info(reader: QueryPacketReader) -> List[PlayerInfo]:
    """Decode player records until the datagram is exhausted"""
    players = []
    while reader.has_data():
        players.append(PlayerInfo(**_read_fields(reader, PLAYER_INFO_LAYOUT)))
    return players


DECODERS = {
    QueryType.SERVER_INFO: decode_server_info,
    QueryType.GAME_INFO: decode_game_info,
    QueryType.PLAYER_INFO: decode_player_info,
}


def decode_reply(datagram: bytes,
                 encoding: str = DEFAULT_ENCODING) -> Optional[Tuple[QueryType, DecodedReply]]:
    """Identify and decode one datagram

    Returns:
        (query type, decoded value) or None if no header matched

    Raises:
        ProtocolError: the payload ended in the middle of a field
    """
    match = identify_reply(datagram)
    if match is None:
        return None

    query_type, offset = match
    reader = QueryPacketReader(datagram, offset, encoding)
    decoded = DECODERS[query_type](reader)
    logger.debug(f"Decoded {query_type.name} reply ({len(datagram)} bytes)")
    return query_type, decoded
