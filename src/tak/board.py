"""The Game board holds the stacks of pieces and answers questions about what is where"""

from dataclasses import dataclass
from typing import Iterator, Self

from src.core.shared_types import Color, Orientation
from src.tak.pieces import Piece
from src.tak.square import Square

# Top of the stack at index 0
Stack = list[Piece]


@dataclass
class Board:
    size: int
    grid: list[list[Stack]]  # indexed grid[x][y]

    @classmethod
    def empty(cls, size: int) -> Self:
        return cls(size, [[[] for _ in range(size)] for _ in range(size)])

    @classmethod
    def from_lists(cls, data: list[list[list[dict[str, str]]]]) -> Self:
        """Inverse of to_lists()"""
        grid = [
            [[Piece.from_dict(piece) for piece in stack] for stack in column]
            for column in data
        ]
        return cls(len(grid), grid)

    def to_lists(self) -> list[list[list[dict[str, str]]]]:
        return [
            [[piece.to_dict() for piece in stack] for stack in column]
            for column in self.grid
        ]

    # --- QUERIES BY HUMAN COORDINATES ---
    def square_contents(self, coords: str) -> Stack:
        return self.stack(Square.from_algebraic(coords, self.size))

    def is_empty(self, coords: str) -> bool:
        return len(self.square_contents(coords)) == 0

    # --- QUERIES BY INDEX ---
    def stack(self, square: Square) -> Stack:
        return self.grid[square.x][square.y]

    def is_occupied_at(self, x: int, y: int) -> bool:
        return len(self.stack(Square(x, y))) > 0

    def top(self, square: Square) -> Piece | None:
        stack = self.stack(square)
        return stack[0] if stack else None

    def squares(self) -> Iterator[Square]:
        for x in range(self.size):
            for y in range(self.size):
                yield Square(x, y)

    def is_full(self) -> bool:
        return all(self.stack(square) for square in self.squares())

    # --- UPDATES ---
    def push(self, square: Square, pieces: Stack) -> None:
        """Put pieces (top first) on top of the stack at square."""
        self.grid[square.x][square.y] = pieces + self.stack(square)

    def take(self, square: Square, count: int) -> Stack:
        """Remove and return the top `count` pieces of the stack at square."""
        stack = self.stack(square)
        self.grid[square.x][square.y] = stack[count:]
        return stack[:count]

    def flatten_top(self, square: Square) -> None:
        stack = self.stack(square)
        stack[0] = stack[0].flattened()

    # --- COUNTING ---
    def count_stack_tops(self) -> dict[Color, int]:
        """Number of stacks each color controls"""
        counts = {color: 0 for color in Color}
        for square in self.squares():
            top = self.top(square)
            if top is not None:
                counts[top.color] += 1
        return counts

    def count_placed_pieces(self) -> dict[Color, int]:
        """Every piece on the board, not just the stack tops"""
        counts = {color: 0 for color in Color}
        for square in self.squares():
            for piece in self.stack(square):
                counts[piece.color] += 1
        return counts

    def count_capstones(self, color: Color) -> int:
        return sum(
            1
            for square in self.squares()
            for piece in self.stack(square)
            if piece.color == color and piece.orientation == Orientation.CAPSTONE
        )

    def total_pieces(self) -> int:
        return sum(self.count_placed_pieces().values())

    def top_view(self) -> list[str]:
        """One string per rank, highest rank first. '.' for an empty square"""
        return [
            "".join(
                top.to_char() if (top := self.top(Square(x, y))) else "."
                for x in range(self.size)
            )
            for y in range(self.size - 1, -1, -1)
        ]
