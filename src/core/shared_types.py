"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class Orientation(StrEnum):
    FLAT = "flat"
    WALL = "wall"
    CAPSTONE = "capstone"


class Direction(StrEnum):
    """Wire symbols: '+' / '-' walk along the ranks, '>' / '<' along the files."""

    NORTH = "+"
    SOUTH = "-"
    EAST = ">"
    WEST = "<"


# --- Letters also accepted for the directions (N/S/E/W).
DIRECTION_ALIASES: dict[str, Direction] = {
    "n": Direction.NORTH,
    "s": Direction.SOUTH,
    "e": Direction.EAST,
    "w": Direction.WEST,
}
