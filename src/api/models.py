"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color

PieceColor = str
PlayerName = str


def _validate_player_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise InvalidRequestError("Player name cannot be empty.")
    return name


def _validate_coords(value: str) -> str:
    """Only the shape is checked here; whether the square is on the board is up to the game."""

    def _is_tak_notation(value: str) -> bool:
        if len(value) != 2:
            return False

        first_character = value[0]
        second_character = value[1]
        if not (first_character.isalpha() and second_character.isnumeric()):
            return False
        return True

    if not _is_tak_notation(value):
        raise InvalidRequestError(
            f"Cannot interpret coords: {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class RegisterPlayerRequest(BaseModel):
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)


class CreateGameRequest(BaseModel):
    player_name: str
    size: int
    is_public: bool = False

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)

    @field_validator("size")
    @classmethod
    def validate_size(cls, value: int) -> int:
        if not 3 <= value <= 8:
            raise InvalidRequestError(
                f"Board size must be in the range 3 to 8 squares, got {value}."
            )
        return value


class TakeSeatRequest(BaseModel):
    game_id: UUID
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)


class GetGameRequest(BaseModel):
    game_id: UUID
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)


class PieceData(BaseModel):
    color: str
    orientation: str


class PlaceRequest(BaseModel):
    game_id: UUID
    player_name: str
    piece: PieceData
    coords: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)

    @field_validator("coords")
    @classmethod
    def validate_coords(cls, value: str) -> str:
        return _validate_coords(value)


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    coords: str
    direction: str
    carry: int
    drops: list[int]

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)

    @field_validator("coords")
    @classmethod
    def validate_coords(cls, value: str) -> str:
        return _validate_coords(value)

    @field_validator("drops")
    @classmethod
    def validate_drops(cls, value: list[int]) -> list[int]:
        if not value:
            raise InvalidRequestError("A movement needs at least one drop.")
        return value


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    player_id: UUID
    player_name: PlayerName
    played_games: list[UUID]


class GameResponse(BaseModel):
    game_id: UUID
    size: int
    board: list[list[list[PieceData]]]
    players: dict[PieceColor, PlayerName]
    owner: PlayerName
    is_public: bool
    color_to_move: Color
    game_over: bool
    result: Optional[str]
    road_win: bool
    flat_win: bool
    draw_game: bool
    winning_path: list[str]
    move_history: list[dict]
    start_time: datetime
    win_time: Optional[datetime]


class StackTopsResponse(BaseModel):
    game_id: UUID
    top_view: list[str]
