"""Defines the Tak pieces and the per-board-size limits on them"""

from dataclasses import dataclass, replace
from typing import Self

from src.core.exceptions import (
    InvalidPieceColorError,
    InvalidPieceOrientationError,
)
from src.core.shared_types import Color, Orientation

# Pieces each player gets, keyed by board size. 7x7 games are not supported.
PIECE_LIMITS: dict[int, int] = {
    3: 10,
    4: 15,
    5: 21,
    6: 30,
    8: 50,
}

# Single characters for the top-down view: lower case flats, upper case walls, C/K capstones
TOP_VIEW_CHARACTERS: dict[tuple[Color, Orientation], str] = {
    (Color.WHITE, Orientation.FLAT): "w",
    (Color.WHITE, Orientation.WALL): "W",
    (Color.WHITE, Orientation.CAPSTONE): "C",
    (Color.BLACK, Orientation.FLAT): "b",
    (Color.BLACK, Orientation.WALL): "B",
    (Color.BLACK, Orientation.CAPSTONE): "K",
}


def capstone_limit(size: int) -> int:
    if size == 8:
        return 2
    if size >= 5:
        return 1
    return 0


def parse_color(value: str | Color) -> Color:
    try:
        return Color(value.strip().lower())
    except ValueError:
        raise InvalidPieceColorError(f"Invalid piece color {value!r}") from None


def parse_orientation(value: str | Orientation) -> Orientation:
    try:
        return Orientation(value.strip().lower())
    except ValueError:
        raise InvalidPieceOrientationError(
            f"Invalid piece orientation {value!r}"
        ) from None


@dataclass(frozen=True)
class Piece:
    color: Color
    orientation: Orientation

    @classmethod
    def parse(cls, color: str, orientation: str) -> Self:
        """Case insensitive. The color is checked before the orientation."""
        return cls(parse_color(color), parse_orientation(orientation))

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> Self:
        return cls.parse(data["color"], data["orientation"])

    def to_dict(self) -> dict[str, str]:
        return {"color": str(self.color), "orientation": str(self.orientation)}

    def to_char(self) -> str:
        return TOP_VIEW_CHARACTERS[(self.color, self.orientation)]

    def flattened(self) -> Self:
        return replace(self, orientation=Orientation.FLAT)

    @property
    def is_capstone(self) -> bool:
        return self.orientation == Orientation.CAPSTONE

    @property
    def is_wall(self) -> bool:
        return self.orientation == Orientation.WALL
