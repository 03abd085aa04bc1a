"""
Road detection
-----

A road is an orthogonally connected line of stacks topped by one color that joins two opposite edges of the board.
Walls do not count as part of a road.

---
Depth-first search from every usable square on the starting edge. The path walked so far is passed along explicitly,
and handed back only once the opposite edge is reached.
"""

from enum import Enum, auto
from typing import Callable, Optional

from src.core.shared_types import Color
from src.tak.board import Board
from src.tak.square import Square


class RoadDirection(Enum):
    NORTH_SOUTH = auto()  # from rank 1 to the highest rank
    WEST_EAST = auto()  # from file a to the last file


def is_road_square(board: Board, square: Square, color: Color) -> bool:
    top = board.top(square)
    return top is not None and top.color == color and not top.is_wall


def find_road(board: Board, color: Color) -> Optional[list[Square]]:
    """First road found for the color (north-south is tried first), or None"""
    for direction in RoadDirection:
        path = find_road_in_direction(board, color, direction)
        if path is not None:
            return path
    return None


def find_road_in_direction(
    board: Board, color: Color, direction: RoadDirection
) -> Optional[list[Square]]:
    starting_edge, is_finish = _edges(board.size, direction)
    # one visited grid per search, reset for every direction
    visited = [[False] * board.size for _ in range(board.size)]
    for seed in starting_edge:
        if visited[seed.x][seed.y] or not is_road_square(board, seed, color):
            continue
        path = _search(board, color, seed, [], visited, is_finish)
        if path is not None:
            return path
    return None


def _edges(
    size: int, direction: RoadDirection
) -> tuple[list[Square], Callable[[Square], bool]]:
    """Squares on the starting edge, and the test for having reached the opposite edge"""
    if direction == RoadDirection.NORTH_SOUTH:
        return [Square(x, 0) for x in range(size)], lambda sq: sq.y == size - 1
    return [Square(0, y) for y in range(size)], lambda sq: sq.x == size - 1


def _search(
    board: Board,
    color: Color,
    square: Square,
    path: list[Square],
    visited: list[list[bool]],
    is_finish: Callable[[Square], bool],
) -> Optional[list[Square]]:
    visited[square.x][square.y] = True
    path = path + [square]
    if is_finish(square):
        return path

    for neighbour in square.neighbours(board.size):
        if visited[neighbour.x][neighbour.y]:
            continue
        if not is_road_square(board, neighbour, color):
            continue
        found = _search(board, color, neighbour, path, visited, is_finish)
        if found is not None:
            return found
    return None
