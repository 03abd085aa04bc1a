"""
The TakGame class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Self
from uuid import UUID, uuid4

from src.core.exceptions import (
    GameAlreadyOverError,
    GameNotOverError,
    InvalidSizeError,
    SeatError,
)
from src.core.models import GameModel
from src.core.shared_types import Color
from src.tak.board import Board
from src.tak.movement import Movement, apply_movement, validate_movement
from src.tak.pieces import PIECE_LIMITS
from src.tak.placement import Placement, apply_placement, validate_placement
from src.tak.roads import find_road
from src.tak.square import MAX_BOARD_SIZE, MIN_BOARD_SIZE, Square

logger = logging.getLogger(__name__)

Action = Placement | Movement


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TakGame:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    game_id: UUID
    board: Board
    is_black_turn: bool
    start_time: datetime = field(default_factory=utc_now)
    black_player: str = ""
    white_player: str = ""
    owner: str = ""
    is_public: bool = False
    game_over: bool = False
    black_winner: bool = False
    white_winner: bool = False
    draw_game: bool = False
    road_win: bool = False
    flat_win: bool = False
    game_winner: str = ""
    winning_path: list[Square] = field(default_factory=list)
    turn_history: list[Action] = field(default_factory=list)
    win_time: Optional[datetime] = None

    @classmethod
    def make_game(cls, size: int, owner: str = "", is_public: bool = False) -> Self:
        """Empty board of the given size. Who starts is a coin flip."""
        if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            raise InvalidSizeError(
                f"Board size must be in the range {MIN_BOARD_SIZE} to {MAX_BOARD_SIZE} squares, got {size}"
            )
        if size not in PIECE_LIMITS:
            raise InvalidSizeError(f"{size}x{size} games are not supported")

        return cls(
            game_id=uuid4(),
            board=Board.empty(size),
            is_black_turn=random.random() < 0.5,
            owner=owner,
            is_public=is_public,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a TakGame from the information the Service layer actually has"""
        turn_history: list[Action] = [
            Placement.from_dict(entry)
            if entry["action"] == "place"
            else Movement.from_dict(entry)
            for entry in model.turn_history
        ]
        return cls(
            game_id=model.game_id,
            board=Board.from_lists(model.game_board),
            is_black_turn=model.is_black_turn,
            start_time=model.start_time,
            black_player=model.black_player,
            white_player=model.white_player,
            owner=model.game_owner,
            is_public=model.is_public,
            game_over=model.game_over,
            black_winner=model.black_winner,
            white_winner=model.white_winner,
            draw_game=model.draw_game,
            road_win=model.road_win,
            flat_win=model.flat_win,
            game_winner=model.game_winner,
            winning_path=[Square.from_dict(coords) for coords in model.winning_path],
            turn_history=turn_history,
            win_time=model.win_time,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            game_id=self.game_id,
            size=self.size,
            game_board=self.board.to_lists(),
            is_black_turn=self.is_black_turn,
            start_time=self.start_time,
            black_player=self.black_player,
            white_player=self.white_player,
            game_owner=self.owner,
            is_public=self.is_public,
            game_over=self.game_over,
            black_winner=self.black_winner,
            white_winner=self.white_winner,
            draw_game=self.draw_game,
            road_win=self.road_win,
            flat_win=self.flat_win,
            game_winner=self.game_winner,
            winning_path=[square.to_dict() for square in self.winning_path],
            turn_history=[action.to_dict() for action in self.turn_history],
            win_time=self.win_time,
        )

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def active_color(self) -> Color:
        return Color.BLACK if self.is_black_turn else Color.WHITE

    # --- ACTIONS ---
    def place(self, placement: Placement) -> None:
        """
        Attempt to place a new piece
        -----

        1. make sure the game is still running
        2. validate the placement (nothing changes if this fails)
        3. put the piece on the board
        4. record the placement, pass the turn, check for the end of the game
        """
        self._assert_not_over()
        square = validate_placement(self.board, placement, self.active_color)
        apply_placement(self.board, square, placement.piece)
        self._finish_turn(placement)

    def move(self, movement: Movement) -> None:
        """Attempt to move (part of) a stack. Same steps as place()."""
        self._assert_not_over()
        plan = validate_movement(self.board, movement, self.active_color)
        apply_movement(self.board, movement, plan)
        self._finish_turn(movement)

    # --- END OF GAME ---
    def is_flat_win(self) -> bool:
        """No empty square left on the board"""
        return self.board.is_full()

    def hit_piece_limit(self) -> bool:
        placed = self.board.count_placed_pieces()
        return any(count >= PIECE_LIMITS[self.size] for count in placed.values())

    def is_road_win(self, color: Color) -> bool:
        return find_road(self.board, color) is not None

    def is_game_over(self) -> bool:
        """Once over, always over."""
        if self.game_over:
            return True

        if (
            self.hit_piece_limit()
            or self.is_flat_win()
            or self.is_road_win(Color.BLACK)
            or self.is_road_win(Color.WHITE)
        ):
            self.game_over = True
            self.win_time = utc_now()
        return self.game_over

    def who_wins(self) -> str:
        """
        Decide the result of a finished game and describe it.
        ----

        ----
        **Precedence**

        1. a road of the color that just moved (beats a road of the opponent completed by the same move)
        2. any other road, black before white
        3. flat win: the color on top of the most stacks, draw if equal
        4. piece limit reached: same count as the flat win

        The result is decided once; after that the same message is returned.

        Flags set per outcome: a road win sets road_win together with the winner's flag,
        a full board sets flat_win together with the winner's flag or draw_game,
        a piece-limit ending sets only the winner's flag or draw_game.
        """
        if not self.is_game_over():
            raise GameNotOverError("Game is not over, yet")

        if self.game_winner:
            return self.game_winner

        for color in self._road_precedence():
            road = find_road(self.board, color)
            if road is not None:
                self.road_win = True
                self.winning_path = road
                self._declare_winner(color)
                return self._record_result(f"{color.capitalize()} makes a road win!")

        stack_tops = self.board.count_stack_tops()
        if self.is_flat_win():
            self.flat_win = True
            return self._record_result(
                self._flat_count_result(stack_tops, "Flat Win!", "Game ends in a draw!")
            )
        return self._record_result(
            self._flat_count_result(
                stack_tops,
                "Flat win: piece limit reached!",
                "Draw game: piece limit reached!",
            )
        )

    @property
    def winner(self) -> Optional[str]:
        """Name of the winning player, if there is one."""
        if self.black_winner:
            return self.black_player
        if self.white_winner:
            return self.white_player
        return None

    # --- SEATS & VISIBILITY ---
    def take_seat(self, player: str) -> Color:
        """Give the player an open seat. With both seats open, the seat is picked at random."""
        if player in (self.black_player, self.white_player):
            raise SeatError(f"{player} is already seated at this game")
        if self.black_player and self.white_player:
            raise SeatError("Both seats already taken")

        if not self.black_player and not self.white_player:
            color = random.choice([Color.BLACK, Color.WHITE])
        elif not self.black_player:
            color = Color.BLACK
        else:
            color = Color.WHITE

        if color == Color.BLACK:
            self.black_player = player
        else:
            self.white_player = player
        return color

    def players_turn(self, player: str) -> bool:
        """An open seat is stored as "", which never matches a player."""
        if not player:
            return False
        if self.is_black_turn:
            return player == self.black_player
        return player == self.white_player

    def can_show(self, player: str) -> bool:
        if self.is_public:
            return True
        return bool(player) and player in (
            self.black_player,
            self.white_player,
            self.owner,
        )

    # -- PRIVATE HELPERS ---
    def _assert_not_over(self) -> None:
        if self.is_game_over():
            raise GameAlreadyOverError(f"Game over: {self.who_wins()}")

    def _finish_turn(self, action: Action) -> None:
        """Runs only after an action has been applied to the board."""
        self.turn_history.append(action)
        logger.debug(
            "game %s: %s played %s", self.game_id, self.active_color, action.to_dict()
        )
        self.is_black_turn = not self.is_black_turn

        if self.is_game_over():
            result = self.who_wins()
            logger.info("game %s is over: %s", self.game_id, result)

    def _road_precedence(self) -> list[Color]:
        """The color that just moved first. Before any move, black goes first."""
        if not self.turn_history:
            return [Color.BLACK, Color.WHITE]
        # turn already passed, so the mover is the color NOT to move
        mover = self.active_color.opponent
        return [mover, mover.opponent]

    def _flat_count_result(
        self, stack_tops: dict[Color, int], win_text: str, draw_text: str
    ) -> str:
        black, white = stack_tops[Color.BLACK], stack_tops[Color.WHITE]
        if black == white:
            self.draw_game = True
            return draw_text
        color = Color.BLACK if black > white else Color.WHITE
        self._declare_winner(color)
        return f"{color.capitalize()} makes a {win_text}"

    def _declare_winner(self, color: Color) -> None:
        if color == Color.BLACK:
            self.black_winner = True
        else:
            self.white_winner = True

    def _record_result(self, result: str) -> str:
        self.game_winner = result
        return result
