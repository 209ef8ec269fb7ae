"""Custom errors raised across layers"""


class GameError(Exception):
    """Base class for all errors raised by the chess application"""


class GameStateError(GameError):
    """The requested board / game setup cannot exist"""


class IllegalMoveError(GameError):
    """A move was executed without passing the legality check first"""


class RepositoryError(GameError):
    """A game record could not be found"""


class InvalidRequestError(GameError):
    """Incoming request data cannot be interpreted"""
