"""Unit tests for /src/tak/game.py"""

from typing import Callable
from unittest.mock import patch
from uuid import UUID

import pytest

from src.core.exceptions import (
    CantFlattenWallWrongCountError,
    GameAlreadyOverError,
    GameNotOverError,
    InvalidSizeError,
    SeatError,
    SquareOccupiedError,
    WrongTurnColorError,
)
from src.tak.game import Color, GameModel, Movement, Placement, TakGame
from src.tak.square import Square
from tests.factories import (
    BLACK_FLAT,
    BLACK_WALL,
    WHITE_CAP,
    WHITE_FLAT,
    WHITE_WALL,
    board_with,
)

MakeGame = Callable[..., TakGame]


def checkerboard(size: int) -> dict[tuple[int, int], list]:
    """Full board without any road: no two orthogonal neighbours share a color"""
    return {
        (x, y): [WHITE_FLAT if (x + y) % 2 == 0 else BLACK_FLAT]
        for x in range(size)
        for y in range(size)
    }


def snapshot(game: TakGame) -> GameModel:
    return game.to_model()


# -- CREATION --
@pytest.mark.parametrize("size", [3, 4, 5, 6, 8])
def test_make_game(size: int) -> None:
    game = TakGame.make_game(size)
    assert isinstance(game.game_id, UUID)
    assert game.size == size
    assert game.board.total_pieces() == 0
    assert game.turn_history == []
    assert not game.game_over
    assert game.winning_path == []


@pytest.mark.parametrize("size", [-1, 0, 2, 7, 9])
def test_make_game_invalid_size(size: int) -> None:
    with pytest.raises(InvalidSizeError):
        TakGame.make_game(size)


def test_every_game_gets_its_own_id() -> None:
    assert TakGame.make_game(5).game_id != TakGame.make_game(5).game_id


def test_starting_turn_is_a_coin_flip() -> None:
    with patch("src.tak.game.random.random", return_value=0.2):
        assert TakGame.make_game(5).is_black_turn
    with patch("src.tak.game.random.random", return_value=0.7):
        assert not TakGame.make_game(5).is_black_turn


# -- PLACEMENTS --
def test_place_and_place_again(make_game: MakeGame) -> None:
    """White flat on b3, then again on b3"""
    game = make_game(5)
    game.place(Placement.parse("white", "flat", "b3"))
    assert game.board.square_contents("b3") == [WHITE_FLAT]
    assert game.is_black_turn
    assert game.turn_history == [Placement(WHITE_FLAT, "b3")]

    game.is_black_turn = False
    with pytest.raises(SquareOccupiedError):
        game.place(Placement.parse("white", "flat", "b3"))


def test_turns_alternate(make_game: MakeGame) -> None:
    game = make_game(5)
    moves = [
        Placement.parse("white", "flat", "a1"),
        Placement.parse("black", "flat", "e5"),
        Placement.parse("white", "flat", "a2"),
        Movement.parse("e5", "-", 1, [1]),
        Movement.parse("a2", "-", 1, [1]),
    ]
    for count, action in enumerate(moves, start=1):
        was_black = game.is_black_turn
        if isinstance(action, Placement):
            game.place(action)
        else:
            game.move(action)
        assert game.is_black_turn != was_black
        assert len(game.turn_history) == count

    assert game.board.square_contents("a1") == [WHITE_FLAT, WHITE_FLAT]
    assert game.board.square_contents("e4") == [BLACK_FLAT]
    # movements never create or destroy pieces
    assert game.board.total_pieces() == 3


def test_rejected_placement_changes_nothing(make_game: MakeGame) -> None:
    game = make_game(5)
    game.place(Placement.parse("white", "flat", "a1"))
    before = snapshot(game)

    with pytest.raises(WrongTurnColorError):
        game.place(Placement.parse("white", "flat", "a2"))
    with pytest.raises(SquareOccupiedError):
        game.place(Placement.parse("black", "flat", "a1"))

    assert snapshot(game) == before


def test_rejected_movement_changes_nothing(make_game: MakeGame) -> None:
    game = make_game(5)
    game.board = board_with(5, {(2, 0): [WHITE_CAP, WHITE_FLAT], (2, 1): [BLACK_WALL]})
    before = snapshot(game)

    with pytest.raises(CantFlattenWallWrongCountError):
        game.move(Movement.parse("c1", "+", 2, [2]))

    assert snapshot(game) == before


def test_capstone_flattens_wall(make_game: MakeGame) -> None:
    game = make_game(5)
    game.board = board_with(5, {(2, 0): [WHITE_CAP], (2, 1): [BLACK_WALL]})
    game.move(Movement.parse("c1", "N", 1, [1]))
    assert game.board.square_contents("c2") == [WHITE_CAP, BLACK_FLAT]
    assert game.is_black_turn


# -- ENDING THE GAME --
def test_who_wins_before_the_end(make_game: MakeGame) -> None:
    game = make_game(5)
    assert not game.is_game_over()
    with pytest.raises(GameNotOverError):
        game.who_wins()


def test_road_win_scenario(make_game: MakeGame) -> None:
    """Black flats at (0,0) (0,1) (1,1) (2,1) (1,2)"""
    game = make_game(3)
    game.board = board_with(
        3, {square: [BLACK_FLAT] for square in [(0, 0), (0, 1), (1, 1), (2, 1), (1, 2)]}
    )
    assert game.is_road_win(Color.BLACK)
    assert not game.is_road_win(Color.WHITE)
    assert game.is_game_over()
    assert game.who_wins() == "Black makes a road win!"
    assert game.black_winner and game.road_win
    assert not game.white_winner and not game.draw_game and not game.flat_win
    assert game.winning_path[0].y == 0
    assert game.winning_path[-1].y == 2


def test_placement_completes_road(make_game: MakeGame) -> None:
    game = make_game(3)
    game.board = board_with(3, {(0, 0): [WHITE_FLAT], (0, 1): [WHITE_FLAT], (2, 2): [BLACK_FLAT]})
    game.place(Placement.parse("white", "flat", "a3"))

    assert game.game_over
    assert game.white_winner and game.road_win
    assert game.game_winner == "White makes a road win!"
    assert game.winning_path == [Square(0, 0), Square(0, 1), Square(0, 2)]
    assert game.win_time is not None
    assert game.winner == game.white_player


def test_no_actions_after_game_over(make_game: MakeGame) -> None:
    """Every attempt after the end is rejected with the same error, and nothing changes"""
    game = make_game(3)
    game.board = board_with(3, {(0, 0): [WHITE_FLAT], (0, 1): [WHITE_FLAT]})
    game.place(Placement.parse("white", "flat", "a3"))
    before = snapshot(game)

    messages = []
    for _ in range(2):
        with pytest.raises(GameAlreadyOverError) as exc_info:
            game.place(Placement.parse("black", "flat", "c3"))
        messages.append(str(exc_info.value))
    with pytest.raises(GameAlreadyOverError):
        game.move(Movement.parse("a3", "-", 1, [1]))

    assert messages[0] == messages[1] == "Game over: White makes a road win!"
    assert snapshot(game) == before


def test_mover_wins_simultaneous_roads(make_game: MakeGame) -> None:
    """Both colors own a road: the color that just moved gets the win"""
    stacks = {(0, y): [WHITE_FLAT] for y in range(3)}
    stacks.update({(2, y): [BLACK_FLAT] for y in range(3)})

    game = make_game(3, black_to_move=True)  # white just moved
    game.board = board_with(3, stacks)
    game.turn_history = [Placement(WHITE_FLAT, "a3")]
    assert game.who_wins() == "White makes a road win!"

    game = make_game(3, black_to_move=False)  # black just moved
    game.board = board_with(3, stacks)
    game.turn_history = [Placement(BLACK_FLAT, "c3")]
    assert game.who_wins() == "Black makes a road win!"


def test_black_road_checked_first_without_history(make_game: MakeGame) -> None:
    stacks = {(0, y): [WHITE_FLAT] for y in range(3)}
    stacks.update({(2, y): [BLACK_FLAT] for y in range(3)})
    game = make_game(3, black_to_move=False)
    game.board = board_with(3, stacks)
    assert game.who_wins() == "Black makes a road win!"


def test_flat_win() -> None:
    """Full board, white on top of more stacks (walls count as stack tops)"""
    game = TakGame.make_game(4)
    stacks = checkerboard(4)
    stacks[(1, 0)] = [WHITE_WALL]
    game.board = board_with(4, stacks)

    assert game.is_flat_win()
    assert not game.is_road_win(Color.WHITE)
    assert not game.is_road_win(Color.BLACK)
    assert game.who_wins() == "White makes a Flat Win!"
    assert game.white_winner and game.flat_win
    assert not game.road_win


def test_flat_draw() -> None:
    game = TakGame.make_game(4)
    game.board = board_with(4, checkerboard(4))
    assert game.who_wins() == "Game ends in a draw!"
    assert game.draw_game
    assert not game.black_winner and not game.white_winner
    assert game.winner is None


def test_piece_limit_win() -> None:
    """White used up all 10 pieces of a 3x3 game, but black tops more stacks"""
    game = TakGame.make_game(3)
    game.board = board_with(
        3,
        {
            (0, 0): [WHITE_FLAT] * 10,
            (1, 0): [BLACK_FLAT],
            (2, 0): [BLACK_FLAT],
        },
    )
    assert game.hit_piece_limit()
    assert not game.is_flat_win()
    assert game.who_wins() == "Black makes a Flat win: piece limit reached!"
    assert game.black_winner
    assert not game.flat_win


def test_piece_limit_draw() -> None:
    game = TakGame.make_game(3)
    game.board = board_with(3, {(0, 0): [WHITE_FLAT] * 10, (2, 2): [BLACK_FLAT]})
    assert game.who_wins() == "Draw game: piece limit reached!"
    assert game.draw_game


def test_result_is_frozen() -> None:
    """Once decided, the result does not change when asked again"""
    game = TakGame.make_game(4)
    game.board = board_with(4, checkerboard(4))
    first = game.who_wins()
    win_time = game.win_time

    game.board = board_with(4, {})
    assert game.is_game_over()
    assert game.who_wins() == first
    assert game.win_time == win_time


# -- SEATS & VISIBILITY --
def test_take_seats() -> None:
    game = TakGame.make_game(5, owner="owner")
    with patch("src.tak.game.random.choice", return_value=Color.WHITE):
        assert game.take_seat("alice") == Color.WHITE
    assert game.take_seat("bob") == Color.BLACK
    assert game.white_player == "alice"
    assert game.black_player == "bob"


def test_take_seat_twice() -> None:
    game = TakGame.make_game(5)
    game.take_seat("alice")
    with pytest.raises(SeatError):
        game.take_seat("alice")


def test_no_third_player() -> None:
    game = TakGame.make_game(5)
    game.take_seat("alice")
    game.take_seat("bob")
    with pytest.raises(SeatError):
        game.take_seat("carol")


def test_players_turn() -> None:
    game = TakGame.make_game(5)
    game.black_player, game.white_player = "bob", "alice"
    game.is_black_turn = True
    assert game.players_turn("bob")
    assert not game.players_turn("alice")
    assert not game.players_turn("mallory")
    game.is_black_turn = False
    assert game.players_turn("alice")


def test_open_seat_belongs_to_nobody() -> None:
    """An empty name neither plays an open seat nor sees a private game"""
    game = TakGame.make_game(5)
    game.is_black_turn = True
    assert not game.players_turn("")
    assert not game.can_show("")

    game.take_seat("alice")
    assert not game.players_turn("")
    game.is_black_turn = False
    assert not game.players_turn("")
    assert not game.can_show("")


def test_can_show() -> None:
    game = TakGame.make_game(5, owner="owner")
    game.black_player, game.white_player = "bob", "alice"
    for player in ["owner", "bob", "alice"]:
        assert game.can_show(player)
    assert not game.can_show("mallory")

    game.is_public = True
    assert game.can_show("mallory")


# -- CONVERSION --
def test_model_round_trip(make_game: MakeGame) -> None:
    game = make_game(3)
    game.black_player, game.white_player, game.owner = "bob", "alice", "alice"
    game.board = board_with(3, {(0, 0): [WHITE_FLAT], (0, 1): [WHITE_FLAT]})
    game.place(Placement.parse("white", "flat", "b1"))
    game.place(Placement.parse("black", "wall", "c3"))
    game.move(Movement.parse("b1", "<", 1, [1]))  # white piles onto a1
    game.place(Placement.parse("black", "flat", "c2"))
    game.place(Placement.parse("white", "flat", "a3"))  # road a1-a2-a3
    assert game.game_over

    model = game.to_model()
    assert model.turn_history[0] == {
        "action": "place",
        "piece": {"color": "white", "orientation": "flat"},
        "coords": "b1",
    }
    assert model.winning_path == [{"x": 0, "y": 0}, {"x": 0, "y": 1}, {"x": 0, "y": 2}]
    assert TakGame.from_model(model) == game
