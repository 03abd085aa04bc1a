"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

# Type aliases to make GameModel easier to read
PieceData = dict[str, str]  # {"color": ..., "orientation": ...}
StackData = list[PieceData]  # top of the stack first
CoordsData = dict[str, int]  # {"x": ..., "y": ...}
ActionData = dict[str, Any]  # {"action": "place" | "move", ...}
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a Tak game used between API, Service, DB, and Game layers."""

    game_id: UUID
    size: int
    game_board: list[list[StackData]]  # indexed [x][y]
    is_black_turn: bool
    start_time: datetime
    black_player: PlayerName = ""
    white_player: PlayerName = ""
    game_owner: PlayerName = ""
    is_public: bool = False
    game_over: bool = False
    black_winner: bool = False
    white_winner: bool = False
    draw_game: bool = False
    road_win: bool = False
    flat_win: bool = False
    game_winner: str = ""
    winning_path: list[CoordsData] = field(default_factory=list)
    turn_history: list[ActionData] = field(default_factory=list)
    win_time: Optional[datetime] = None


@dataclass
class PlayerModel:
    """A registered player. Credentials are handled outside of this project."""

    player_id: UUID
    username: PlayerName
    played_games: list[UUID] = field(default_factory=list)
