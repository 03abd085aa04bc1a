"""Implementation of the Game- and PlayerRepository using SQLAlchemy"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel, PlayerModel
from src.db.schema import DBGame, DBPlayer

# columns of DBGame that map one-to-one onto fields of GameModel
GAME_FIELDS = (
    "size",
    "game_board",
    "is_black_turn",
    "black_player",
    "white_player",
    "game_owner",
    "is_public",
    "game_over",
    "black_winner",
    "white_winner",
    "draw_game",
    "road_win",
    "flat_win",
    "game_winner",
    "winning_path",
    "turn_history",
    "start_time",
    "win_time",
)


def as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes. Everything stored is UTC."""
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=timezone.utc)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> GameModel:
        """Store a new game under its own game_id and return the stored data."""
        if self._fetch_game(game.game_id) is not None:
            raise RepositoryError(f"Game with game_id={game.game_id} already exists.")
        game_db = DBGame(id=game.game_id)
        self._copy_fields(game, game_db)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_fields(game, game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_fields(self, game: GameModel, game_db: DBGame) -> None:
        for name in GAME_FIELDS:
            setattr(game_db, name, getattr(game, name))

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        fields = {name: getattr(game_db, name) for name in GAME_FIELDS}
        fields["start_time"] = as_utc(game_db.start_time)
        fields["win_time"] = as_utc(game_db.win_time)
        return GameModel(game_id=game_db.id, **fields)


class SQLPlayerRepository:
    """Players stored using SQL. Looked up by their (unique) username."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_player(self, username: str) -> PlayerModel | None:
        player_db = self._fetch_player(username)
        if player_db:
            return self._to_model(player_db)
        return None

    def player_exists(self, username: str) -> bool:
        return self._fetch_player(username) is not None

    def create_player(self, player: PlayerModel) -> PlayerModel:
        player_db = DBPlayer(
            id=player.player_id,
            username=player.username,
            played_games=[str(game_id) for game_id in player.played_games],
        )
        self.db.add(player_db)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise RepositoryError(
                f"Player {player.username!r} conflicts with an existing player."
            ) from e
        self.db.refresh(player_db)
        return self._to_model(player_db)

    def update_player(self, player: PlayerModel) -> PlayerModel | None:
        player_db = self._fetch_player(player.username)
        if not player_db:
            return None
        player_db.played_games = [str(game_id) for game_id in player.played_games]
        self.db.commit()
        self.db.refresh(player_db)
        return self._to_model(player_db)

    def _fetch_player(self, username: str) -> DBPlayer | None:
        query = select(DBPlayer).where(DBPlayer.username == username)
        return self.db.scalar(query)

    def _to_model(self, player_db: DBPlayer) -> PlayerModel:
        return PlayerModel(
            player_id=player_db.id,
            username=player_db.username,
            played_games=[UUID(game_id) for game_id in player_db.played_games],
        )
