"""Protocol repositories (can implement later for SQL Alchemy / simple Excel table etc.)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, PlayerModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game under its own game_id and return the stored data."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...


class PlayerRepository(Protocol):
    """Registered players. No credentials are stored here."""

    def get_player(self, username: str) -> PlayerModel | None:
        ...

    def player_exists(self, username: str) -> bool:
        ...

    def create_player(self, player: PlayerModel) -> PlayerModel:
        ...

    def update_player(self, player: PlayerModel) -> PlayerModel | None:
        ...
