"""
Placement rules: putting a new piece from the reserve onto an empty square.

Whether the game is still running is checked by Game before any of this.
"""

from dataclasses import dataclass
from typing import Any, Self

from src.core.exceptions import (
    CapstoneLimitExceededError,
    CapstoneNotAllowedError,
    PieceLimitExceededError,
    SquareOccupiedError,
    WrongTurnColorError,
)
from src.core.shared_types import Color
from src.tak.board import Board
from src.tak.pieces import PIECE_LIMITS, Piece, capstone_limit
from src.tak.square import Square

# Capstones only exist from 5x5 boards upwards
MIN_CAPSTONE_BOARD_SIZE = 5


@dataclass(frozen=True)
class Placement:
    piece: Piece
    coords: str

    @classmethod
    def parse(cls, color: str, orientation: str, coords: str) -> Self:
        """Build from the raw strings of a request. Piece errors are raised here."""
        return cls(Piece.parse(color, orientation), coords)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(Piece.from_dict(data["piece"]), data["coords"])

    def to_dict(self) -> dict[str, Any]:
        return {"action": "place", "piece": self.piece.to_dict(), "coords": self.coords}


def validate_placement(board: Board, placement: Placement, active_color: Color) -> Square:
    """
    Raise on the first rule the placement breaks. Returns the target square.
    ----

    1. coordinates resolve on this board
    2. target square is empty
    3. no capstones on small boards
    4. capstone limit of the color not yet reached
    5. piece limit of the color not yet reached
    6. piece has the color that is to move
    """
    piece = placement.piece
    square = Square.from_algebraic(placement.coords, board.size)

    if board.stack(square):
        raise SquareOccupiedError(
            f"Cannot place piece on occupied square {placement.coords}"
        )

    if piece.is_capstone and board.size < MIN_CAPSTONE_BOARD_SIZE:
        raise CapstoneNotAllowedError(
            f"No capstones allowed in games smaller than {MIN_CAPSTONE_BOARD_SIZE}x{MIN_CAPSTONE_BOARD_SIZE}"
        )

    if piece.is_capstone:
        limit = capstone_limit(board.size)
        if board.count_capstones(piece.color) >= limit:
            raise CapstoneLimitExceededError(
                f"Board has already reached {piece.color} capstone limit: {limit}"
            )

    limit = PIECE_LIMITS[board.size]
    if board.count_placed_pieces()[piece.color] >= limit:
        raise PieceLimitExceededError(
            f"{piece.color.capitalize()} player is out of pieces (limit {limit})"
        )

    if piece.color != active_color:
        raise WrongTurnColorError(
            f"Cannot place {piece.color} piece on {active_color}'s turn"
        )

    return square


def apply_placement(board: Board, square: Square, piece: Piece) -> None:
    """New piece goes on top (index 0) of the target stack"""
    board.push(square, [piece])
