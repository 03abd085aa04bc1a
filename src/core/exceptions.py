"""
Custom exceptions.

Every exception raised on purpose derives from GameError, so the layers above the domain
(service, transport) can catch a single type and map it onto their own status codes.
"""


class GameError(Exception):
    """Top-level exception of this project."""


# --- REQUEST / SERVICE LAYER ---
class InvalidRequestError(GameError):
    """A request model could not be validated."""


class RepositoryError(GameError):
    """Record not found, or persistence failed."""


class NotYourTurnError(GameError):
    """Player attempted to act while the other seat is to move."""


class NotAllowedError(GameError):
    """Player is not allowed to see this game."""


# --- GAME STATE ---
class GameStateError(GameError):
    """The game is in the wrong state for the requested operation."""


class InvalidSizeError(GameStateError):
    pass


class GameAlreadyOverError(GameStateError):
    pass


class GameNotOverError(GameStateError):
    pass


class SeatError(GameStateError):
    """No seat could be given to the player."""


# --- COORDINATES ---
class CoordinateError(GameError):
    pass


class InvalidCoordinateError(CoordinateError):
    pass


class OutOfBoundsError(CoordinateError):
    pass


# --- PIECES ---
class InvalidPieceError(GameError):
    pass


class InvalidPieceColorError(InvalidPieceError):
    pass


class InvalidPieceOrientationError(InvalidPieceError):
    pass


class WrongTurnColorError(GameError):
    """Placing or moving a piece of the color that is not to move."""


# --- PLACEMENTS ---
class IllegalPlacementError(GameError):
    pass


class SquareOccupiedError(IllegalPlacementError):
    pass


class CapstoneNotAllowedError(IllegalPlacementError):
    """No capstones on boards smaller than 5x5."""


class CapstoneLimitExceededError(IllegalPlacementError):
    pass


class PieceLimitExceededError(IllegalPlacementError):
    pass


# --- MOVEMENTS ---
class IllegalMoveError(GameError):
    pass


class SquareEmptyError(IllegalMoveError):
    pass


class CarryExceedsStackHeightError(IllegalMoveError):
    pass


class CarryExceedsBoardLimitError(IllegalMoveError):
    pass


class DropsExceedCarryError(IllegalMoveError):
    pass


class DropBelowOneError(IllegalMoveError):
    pass


class InvalidDirectionError(IllegalMoveError):
    pass


class MoveExceedsBoardBoundaryError(IllegalMoveError):
    pass


class CantFlattenCapstoneError(IllegalMoveError):
    pass


class CantFlattenWallNoCapstoneError(IllegalMoveError):
    pass


class CantFlattenWallWrongCountError(IllegalMoveError):
    pass


class CantFlattenWallNotLastStepError(IllegalMoveError):
    pass
