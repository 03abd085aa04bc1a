"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    size: Mapped[int]
    game_board: Mapped[list[Any]] = mapped_column(JSON)
    is_black_turn: Mapped[bool]
    black_player: Mapped[str] = mapped_column(default="")
    white_player: Mapped[str] = mapped_column(default="")
    game_owner: Mapped[str] = mapped_column(default="")
    is_public: Mapped[bool] = mapped_column(default=False)
    game_over: Mapped[bool] = mapped_column(default=False)
    black_winner: Mapped[bool] = mapped_column(default=False)
    white_winner: Mapped[bool] = mapped_column(default=False)
    draw_game: Mapped[bool] = mapped_column(default=False)
    road_win: Mapped[bool] = mapped_column(default=False)
    flat_win: Mapped[bool] = mapped_column(default=False)
    game_winner: Mapped[str] = mapped_column(default="")
    winning_path: Mapped[list[dict[str, int]]] = mapped_column(JSON, default=list)
    turn_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    win_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBPlayer(Base):
    __tablename__ = "players"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(unique=True)
    played_games: Mapped[list[str]] = mapped_column(JSON, default=list)
