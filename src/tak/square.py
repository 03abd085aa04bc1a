"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.core.exceptions import InvalidCoordinateError, OutOfBoundsError
from src.core.shared_types import Direction

# Tak boards go from 3x3 up to 8x8
MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = 8

FILES = "abcdefgh"
COORDS_PATTERN = re.compile(r"([a-h])([1-8])", re.IGNORECASE)

# unit step (dx, dy) for every direction
DIRECTION_STEPS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.SOUTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}


@dataclass(frozen=True)
class Square:
    x: int  # file index: 'a' -> 0
    y: int  # rank index: '1' -> 0

    @classmethod
    def from_algebraic(cls, coords: str, size: int) -> Square:
        """Human notation: 'a1' - 'h8' (any case) get converted to (0, 0) - (7, 7), bounded by the board size."""
        match = COORDS_PATTERN.fullmatch(coords.strip())
        if match is None:
            raise InvalidCoordinateError(f"Could not interpret coordinates {coords!r}")
        file, rank = match.groups()
        square = cls(FILES.index(file.lower()), int(rank) - 1)
        if not square.is_within_bounds(size):
            raise OutOfBoundsError(
                f"Coordinates {coords!r} larger than board size: {size}"
            )
        return square

    def to_algebraic(self, size: int) -> str:
        if not self.is_within_bounds(size):
            raise OutOfBoundsError(
                f"({self.x}, {self.y}) is out of bounds for board size {size}"
            )
        return f"{FILES[self.x]}{self.y + 1}"

    def is_within_bounds(self, size: int) -> bool:
        return (0 <= self.x < size) and (0 <= self.y < size)

    def step(self, direction: Direction, distance: int = 1) -> Square:
        """The square `distance` steps away (may fall off the board, check with is_within_bounds)"""
        dx, dy = DIRECTION_STEPS[direction]
        return Square(self.x + dx * distance, self.y + dy * distance)

    def neighbours(self, size: int) -> list[Square]:
        """Orthogonally adjacent squares that are still on the board."""
        return [
            neighbour
            for direction in Direction
            if (neighbour := self.step(direction)).is_within_bounds(size)
        ]

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> Square:
        return cls(data["x"], data["y"])
