"""Server and player information data structures."""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List


@dataclass(frozen=True)
class PlayerInfo:
    """A player entry from the player-info reply."""

    id: int = 0
    name: str = ""
    ping: int = 0
    score: int = 0
    stats_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'ping': self.ping,
            'score': self.score,
            'stats_id': self.stats_id,
        }

    def __str__(self) -> str:
        return f"{self.name} (score {self.score}, ping {self.ping})"


@dataclass
class ServerInfo:
    """Status of a single game server.

    Filled in reply by reply while a query runs. Fields belonging to a reply
    type that has not arrived yet keep their zero value, so only trust the
    whole object once the query reported success.
    """

    # Identity / network
    id: int = 0
    ip: str = ""
    address: str = ""  # Host part of the address the caller queried
    port: int = 0
    query_port: int = 0

    # Match state
    name: str = ""
    map: str = ""
    map_image: str = ""  # Not part of the server-info reply
    game_type: str = ""
    players: int = 0
    max_players: int = 0
    ping: int = 0
    flags: int = 0
    skill_level: int = 0

    # Collections
    player_list: List[PlayerInfo] = field(default_factory=list)
    game_info: Dict[str, str] = field(default_factory=dict)

    @property
    def game_address(self) -> str:
        """Get the game address (ip:port), falling back to the queried host."""
        return f"{self.ip or self.address}:{self.port}"

    def update(self, **kwargs):
        """Update scalar fields, ignoring unknown names"""
        for key, value in kwargs.items():
            if key in ('player_list', 'game_info'):
                continue
            if hasattr(self, key):
                setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data['player_list'] = [player.to_dict() for player in self.player_list]
        data['game_info'] = dict(self.game_info)
        return data

    def __str__(self) -> str:
        return f"{self.name} [{self.map}] ({self.players}/{self.max_players} players) - {self.game_address}"
