"""
pyutquery - A minimal Python client for the UT2004 server query protocol

Usage:
    from pyutquery import QuerySession

    with QuerySession() as session:
        session.connect("203.0.113.10:7778")
        response = session.receive_all()

    if response.success:
        server = response.server
        print(f"{server.name} on {server.map}: {server.players}/{server.max_players}")
        for player in server.player_list:
            print(f"  {player.name} ({player.score})")

Or in the background:
    session = QuerySession(QueryConfig(timeout=1.0))
    session.connect("203.0.113.10:7778")
    future = session.start()
    ...
    response = future.result()
    session.close()

Or quick query:
    from pyutquery import query_server, query_servers

    response = query_server("203.0.113.10:7778")
    results = query_servers(["203.0.113.10:7778", "198.51.100.4:7778"])
"""

__version__ = "1.0.0"

from .config import QueryConfig, ConfigValidationError
from .models import ServerInfo, PlayerInfo
from .protocol import QueryType, ProtocolError, InsufficientDataError
from .query import (
    QuerySession,
    QueryResponse,
    QueryError,
    QueryConnectionError,
    QueryTimeoutError,
    QueryCancelledError,
    parse_address,
    query_server,
    query_servers,
)

__all__ = [
    "QuerySession",
    "QueryResponse",
    "QueryConfig",
    "ServerInfo",
    "PlayerInfo",
    "QueryType",
    "QueryError",
    "QueryConnectionError",
    "QueryTimeoutError",
    "QueryCancelledError",
    "ProtocolError",
    "InsufficientDataError",
    "ConfigValidationError",
    "parse_address",
    "query_server",
    "query_servers",
]
