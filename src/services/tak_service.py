"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Callable
from uuid import UUID, uuid4

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    PieceData,
    PlaceRequest,
    PlayerResponse,
    RegisterPlayerRequest,
    StackTopsResponse,
    TakeSeatRequest,
)
from src.core.exceptions import (
    GameError,
    NotAllowedError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameModel, PlayerModel
from src.core.shared_types import Color
from src.db.repository import GameRepository, PlayerRepository
from src.tak.game import TakGame
from src.tak.movement import Movement
from src.tak.placement import Placement
from src.tak.square import Square

logger = logging.getLogger(__name__)


class TakService:
    """Orchestration of layers for a Tak game."""

    def __init__(self, repository: GameRepository, players: PlayerRepository) -> None:
        self.repo = repository
        self.players = players

    # -- API routes logic ---
    def register_player(self, request: RegisterPlayerRequest) -> PlayerResponse:
        if self.players.player_exists(request.player_name):
            raise RepositoryError(
                f"New player username {request.player_name!r} conflicts with existing username."
            )
        player = self.players.create_player(
            PlayerModel(player_id=uuid4(), username=request.player_name)
        )
        logger.info("registered player %s", player.username)
        return self._create_player_response(player)

    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """A registered player requested a new (empty) board."""
        owner = self._fetch_player(request.player_name)

        new_game = TakGame.make_game(
            request.size, owner=owner.username, is_public=request.is_public
        )
        stored_game = self.repo.create_game(new_game.to_model())
        self._record_played_game(owner, stored_game.game_id)

        logger.info(
            "%s created %sx%s game %s",
            owner.username,
            request.size,
            request.size,
            stored_game.game_id,
        )
        return self._create_game_response(stored_game)

    def take_seat(self, request: TakeSeatRequest) -> GameResponse:
        """Player asked for one of the two seats at a game."""
        player = self._fetch_player(request.player_name)
        game = TakGame.from_model(self._fetch_game(request.game_id))

        color = game.take_seat(player.username)

        seated = self._store(game)
        self._record_played_game(player, game.game_id)
        logger.info("%s took the %s seat in game %s", player.username, color, game.game_id)
        return self._create_game_response(seated)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_visible_game(request)
        return self._create_game_response(game_model)

    def get_stack_tops(self, request: GetGameRequest) -> StackTopsResponse:
        """Top-down view of the board: only the top piece of every stack."""
        game = TakGame.from_model(self._fetch_visible_game(request))
        return StackTopsResponse(game_id=game.game_id, top_view=game.board.top_view())

    def place(self, request: PlaceRequest) -> GameResponse:
        """Place a new piece."""
        game = self._fetch_game_for_turn(request.game_id, request.player_name)
        placement = Placement.parse(
            request.piece.color, request.piece.orientation, request.coords
        )
        self._attempt(game, lambda: game.place(placement))
        return self._create_game_response(self._store(game))

    def move(self, request: MoveRequest) -> GameResponse:
        """Move (part of) a stack."""
        game = self._fetch_game_for_turn(request.game_id, request.player_name)
        movement = Movement.parse(
            request.coords, request.direction, request.carry, request.drops
        )
        self._attempt(game, lambda: game.move(movement))
        return self._create_game_response(self._store(game))

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("deleted game %s", request.game_id)

    # -- Internal helpers --
    def _attempt(self, game: TakGame, action: Callable[[], None]) -> None:
        """Run the action, logging the rejection before passing it on."""
        try:
            action()
        except GameError as e:
            logger.warning("game %s: rejected action: %s", game.game_id, e)
            raise

    def _store(self, game: TakGame) -> GameModel:
        stored = self.repo.update_game(game.game_id, game.to_model())
        if stored is None:
            raise RepositoryError(f"Game with game_id={game.game_id} not found.")
        return stored

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _fetch_visible_game(self, request: GetGameRequest) -> GameModel:
        game_model = self._fetch_game(request.game_id)
        if not TakGame.from_model(game_model).can_show(request.player_name):
            raise NotAllowedError(
                f"{request.player_name} is not allowed to display game {request.game_id}."
            )
        return game_model

    def _fetch_game_for_turn(self, game_id: UUID, player_name: str) -> TakGame:
        game = TakGame.from_model(self._fetch_game(game_id))
        if not game.players_turn(player_name):
            raise NotYourTurnError(f"It is not {player_name}'s turn in game {game_id}.")
        return game

    def _fetch_player(self, username: str) -> PlayerModel:
        player = self.players.get_player(username)
        if player is None:
            raise RepositoryError(f"No player named {username!r} found.")
        return player

    def _record_played_game(self, player: PlayerModel, game_id: UUID) -> None:
        if game_id not in player.played_games:
            player.played_games.append(game_id)
            self.players.update_player(player)

    def _create_player_response(self, player: PlayerModel) -> PlayerResponse:
        return PlayerResponse(
            player_id=player.player_id,
            player_name=player.username,
            played_games=player.played_games,
        )

    def _create_game_response(self, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse."""
        players = {
            str(color): name
            for color, name in [
                (Color.BLACK, model.black_player),
                (Color.WHITE, model.white_player),
            ]
            if name
        }
        return GameResponse(
            game_id=model.game_id,
            size=model.size,
            board=[
                [[PieceData(**piece) for piece in stack] for stack in column]
                for column in model.game_board
            ],
            players=players,
            owner=model.game_owner,
            is_public=model.is_public,
            color_to_move=Color.BLACK if model.is_black_turn else Color.WHITE,
            game_over=model.game_over,
            result=model.game_winner or None,
            road_win=model.road_win,
            flat_win=model.flat_win,
            draw_game=model.draw_game,
            winning_path=[
                Square.from_dict(coords).to_algebraic(model.size)
                for coords in model.winning_path
            ],
            move_history=model.turn_history,
            start_time=model.start_time,
            win_time=model.win_time,
        )
