"""
Shared fixtures: canned server data and a local UDP server that answers the
three status queries.
"""

import socket
import threading

import pytest

from pyutquery.config import QueryConfig
from pyutquery.models import PlayerInfo, ServerInfo
from pyutquery.protocol import (
    QueryType, build_game_info_reply, build_player_info_reply, build_server_info_reply,
)


class FakeQueryServer:
    """Local UDP server that waits for the three queries, then sends canned datagrams"""

    def __init__(self, replies):
        self.replies = list(replies)
        self.requests = []
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.settimeout(5.0)
        self.address = f"127.0.0.1:{self.sock.getsockname()[1]}"
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> 'FakeQueryServer':
        self._thread.start()
        return self

    def _serve(self):
        try:
            client = None
            for _ in range(3):
                data, client = self.sock.recvfrom(2048)
                self.requests.append(data)
            for reply in self.replies:
                self.sock.sendto(reply, client)
        except OSError:
            # Socket closed by stop() or no client showed up
            pass

    def stop(self):
        self.sock.close()
        self._thread.join(timeout=5)


@pytest.fixture
def fake_server():
    """Factory starting FakeQueryServer instances, stopped after the test"""
    servers = []

    def factory(replies):
        server = FakeQueryServer(replies).start()
        servers.append(server)
        return server

    yield factory

    for server in servers:
        server.stop()


@pytest.fixture
def fast_config():
    return QueryConfig(timeout=1.0, poll_interval=0.02)


@pytest.fixture
def sample_server():
    return ServerInfo(
        id=7, ip="10.0.0.5", port=7777, query_port=7778,
        name="Arena", map="DM-Deck", game_type="DeathMatch",
        players=3, max_players=16, ping=42, flags=0, skill_level=5,
    )


@pytest.fixture
def sample_game_info():
    return {
        "ServerMode": "dedicated",
        "AdminName": "WebAdmin",
        "GoalScore": "25",
        "TimeLimit": "20",
    }


@pytest.fixture
def sample_players():
    return [
        PlayerInfo(id=1, name="Malcolm", ping=35, score=12, stats_id=1001),
        PlayerInfo(id=2, name="Brock", ping=80, score=-1, stats_id=0),
        PlayerInfo(id=3, name="Lauren", ping=128, score=0, stats_id=1003),
    ]


@pytest.fixture
def sample_replies(sample_server, sample_game_info, sample_players):
    """The three reply datagrams keyed by query type"""
    return {
        QueryType.SERVER_INFO: build_server_info_reply(sample_server),
        QueryType.GAME_INFO: build_game_info_reply(sample_game_info),
        QueryType.PLAYER_INFO: build_player_info_reply(sample_players),
    }
