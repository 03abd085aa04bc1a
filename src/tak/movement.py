"""
Movement rules: picking up (part of) a stack and spreading it out in a straight line.

Key idea: validate the whole path before touching the board, so a rejected movement never leaves a half-moved stack.
"""

from dataclasses import dataclass
from typing import Any, Self

from src.core.exceptions import (
    CantFlattenCapstoneError,
    CantFlattenWallNoCapstoneError,
    CantFlattenWallNotLastStepError,
    CantFlattenWallWrongCountError,
    CarryExceedsBoardLimitError,
    CarryExceedsStackHeightError,
    DropBelowOneError,
    DropsExceedCarryError,
    InvalidDirectionError,
    MoveExceedsBoardBoundaryError,
    SquareEmptyError,
    WrongTurnColorError,
)
from src.core.shared_types import DIRECTION_ALIASES, Color, Direction
from src.tak.board import Board, Stack
from src.tak.square import Square


def parse_direction(value: str | Direction) -> Direction:
    """Accepts the wire symbols (+ - > <) and the letters N S E W (any case)"""
    symbol = value.strip()
    if symbol.lower() in DIRECTION_ALIASES:
        return DIRECTION_ALIASES[symbol.lower()]
    try:
        return Direction(symbol)
    except ValueError:
        raise InvalidDirectionError(f"Invalid movement direction {value!r}") from None


@dataclass(frozen=True)
class Movement:
    coords: str
    direction: Direction
    carry: int
    drops: tuple[int, ...]

    @classmethod
    def parse(cls, coords: str, direction: str, carry: int, drops: list[int]) -> Self:
        """Build from the raw values of a request. Direction errors are raised here."""
        return cls(coords, parse_direction(direction), carry, tuple(drops))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls.parse(data["coords"], data["direction"], data["carry"], data["drops"])

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": "move",
            "coords": self.coords,
            "direction": str(self.direction),
            "carry": self.carry,
            "drops": list(self.drops),
        }


@dataclass(frozen=True)
class MovePlan:
    """A validated movement: where it starts, and the squares it drops on (in order)"""

    origin: Square
    path: list[Square]
    flattens_wall: bool


def validate_movement(board: Board, movement: Movement, active_color: Color) -> MovePlan:
    """
    Raise on the first rule the movement breaks.
    ----

    1. origin resolves and holds a stack
    2. carry fits the stack height and the board's carry limit
    3. drops add up to the carry, and each drop is at least one piece
    4. the path stays on the board
    5. the stack is topped by a piece of the color to move
    6. no capstone on the path, and walls only flattened by a lone capstone on the last step
    """
    origin = Square.from_algebraic(movement.coords, board.size)
    stack = board.stack(origin)
    if not stack:
        raise SquareEmptyError(
            f"Cannot move non-existent stack: unoccupied square {movement.coords}"
        )

    if movement.carry > len(stack):
        raise CarryExceedsStackHeightError(
            f"Stack at {movement.coords} is {len(stack)} high - cannot carry {movement.carry} pieces"
        )
    if movement.carry > board.size:
        raise CarryExceedsBoardLimitError(
            f"Requested carry of {movement.carry} pieces exceeds board carry limit: {board.size}"
        )

    if sum(movement.drops) != movement.carry:
        raise DropsExceedCarryError(
            f"Requested drops {list(movement.drops)} do not add up to the pieces carried ({movement.carry})"
        )
    if not movement.drops or min(movement.drops) < 1:
        raise DropBelowOneError(
            f"Stack movement {list(movement.drops)} needs drops of at least 1 piece"
        )

    path = [
        origin.step(movement.direction, distance)
        for distance in range(1, len(movement.drops) + 1)
    ]
    if not path[-1].is_within_bounds(board.size):
        raise MoveExceedsBoardBoundaryError(
            f"Stack movement {list(movement.drops)} from {movement.coords} would leave the board"
        )

    if stack[0].color != active_color:
        raise WrongTurnColorError(
            f"Cannot move {stack[0].color}-topped stack on {active_color}'s turn"
        )

    flattens_wall = _check_walls_in_path(board, movement, stack, path)
    return MovePlan(origin, path, flattens_wall)


def _check_walls_in_path(
    board: Board, movement: Movement, stack: Stack, path: list[Square]
) -> bool:
    """
    Walk the path before any piece is dropped.
    ---

    * A capstone can never be covered.
    * A wall may only be covered if it is the last square, exactly one piece lands on it, and that piece is a capstone.

    Returns True if the last square's wall gets flattened.
    """
    # the piece that lands last is the top of the carried group
    leading_piece = stack[0]
    for step, (square, drop) in enumerate(zip(path, movement.drops), start=1):
        top = board.top(square)
        if top is None:
            continue
        coords = square.to_algebraic(board.size)
        if top.is_capstone:
            raise CantFlattenCapstoneError(
                f"Movement can't flatten a capstone at {coords}"
            )
        if top.is_wall:
            if not leading_piece.is_capstone:
                raise CantFlattenWallNoCapstoneError(
                    f"Can't flatten standing stone at {coords}: no capstone on moving stack"
                )
            if drop != 1:
                raise CantFlattenWallWrongCountError(
                    f"Only allowed to flatten standing stone at {coords} with 1 capstone, not {drop} pieces"
                )
            if step != len(path):
                raise CantFlattenWallNotLastStepError(
                    f"Can't flatten standing stone at {coords}: not on last drop of move sequence"
                )
            return True
    return False


def apply_movement(board: Board, movement: Movement, plan: MovePlan) -> None:
    """
    Carry the top pieces along the path, leaving the bottom `drop` pieces of the carried group on every square.
    """
    carried = board.take(plan.origin, movement.carry)
    for square, drop in zip(plan.path, movement.drops):
        if plan.flattens_wall and square == plan.path[-1]:
            board.flatten_top(square)
        board.push(square, carried[len(carried) - drop :])
        carried = carried[: len(carried) - drop]
