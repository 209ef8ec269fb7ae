"""Orchestration of communication from API layer to business logic (and the reverse direction)."""

import logging
import threading
from typing import Optional
from uuid import UUID

from src.api.models import (
    ActivateSquareRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    NewGameRequest,
    PieceModel,
    SquareModel,
    UndoRequest,
)
from src.chess.game import Game, Outcome
from src.chess.pieces import Piece
from src.chess.pieces import Side as DomainSide
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import RepositoryError
from src.core.shared_types import Outcome as OutcomeName
from src.core.shared_types import PieceType, Side
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)

# square name reported for coordinates outside the board
OFF_BOARD = "-"


class ChessService:
    """
    Orchestration of layers for chess games.

    A Game is single-threaded: every call touching a game holds that game's lock, so concurrent requests are serialized per game.
    Different games never share a lock.
    """

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository
        self._locks: dict[UUID, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new game, either from the standard setup or from the requested position."""
        if request.starting_position is None:
            game = Game.initialize()
        else:
            game = Game.from_position(
                request.starting_position, DomainSide[request.side_to_move.name]
            )

        game_id = self.repo.create_game(game)
        with self._locks_guard:
            self._locks[game_id] = threading.Lock()
        logger.info(f"Created game {game_id}")
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state."""
        with self._lock(request.game_id):
            game = self._fetch_game(request.game_id)
            return self._create_game_response(request.game_id, game)

    def activate_square(self, request: ActivateSquareRequest) -> GameResponse:
        """A square got clicked."""
        with self._lock(request.game_id):
            game = self._fetch_game(request.game_id)
            outcome = game.activate_square(request.row, request.col)
            return self._create_game_response(request.game_id, game, outcome)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve the squares to highlight for the piece on the requested square."""
        with self._lock(request.game_id):
            game = self._fetch_game(request.game_id)
            square = Square(request.row, request.col)
            if not square.is_within_bounds():
                return LegalMovesResponse(
                    game_id=request.game_id,
                    square=SquareModel(row=square.row, col=square.col, name=OFF_BOARD),
                    legal_moves=[],
                )

            destinations = game.query_moves(request.row, request.col)
            return LegalMovesResponse(
                game_id=request.game_id,
                square=self._square_model(square),
                legal_moves=[
                    self._square_model(destination)
                    for destination in sorted(destinations, key=lambda sq: (sq.row, sq.col))
                ],
            )

    def undo(self, request: UndoRequest) -> GameResponse:
        with self._lock(request.game_id):
            game = self._fetch_game(request.game_id)
            outcome = game.undo()
            return self._create_game_response(request.game_id, game, outcome)

    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Reset an existing game to the starting position (keeps its ID)."""
        with self._lock(request.game_id):
            game = self._fetch_game(request.game_id)
            outcome = game.new_game()
            return self._create_game_response(request.game_id, game, outcome)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self._lock(request.game_id):
            self.repo.delete_game(request.game_id)
        with self._locks_guard:
            self._locks.pop(request.game_id, None)
        logger.info(f"Deleted game {request.game_id}")

    # -- Internal helpers --
    def _lock(self, game_id: UUID) -> threading.Lock:
        """Locks only exist for created games: unknown IDs are refused before anything gets stored."""
        with self._locks_guard:
            lock = self._locks.get(game_id)
        if lock is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return lock

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game

    def _create_game_response(
        self, game_id: UUID, game: Game, outcome: Optional[Outcome] = None
    ) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        snapshot = game.to_snapshot()
        board = [
            [
                self._piece_model(game.piece_at(Square(row, col)))
                for col in range(BOARD_DIMENSIONS[1])
            ]
            for row in range(BOARD_DIMENSIONS[0])
        ]
        captured = {
            side.name.lower(): [
                self._piece_model(piece) for piece in game.captured_pieces(side)
            ]
            for side in DomainSide
        }
        return GameResponse(
            game_id=game_id,
            board=board,
            position=snapshot.position,
            side_to_move=Side(snapshot.side_to_move),
            selected=snapshot.selected,
            captured=captured,
            winner=Side(snapshot.winner) if snapshot.winner else None,
            history_length=snapshot.history_length,
            material=snapshot.material,
            status=snapshot.status,
            outcome=OutcomeName[outcome.name] if outcome else None,
        )

    @staticmethod
    def _piece_model(piece: Optional[Piece]) -> Optional[PieceModel]:
        if piece is None:
            return None
        return PieceModel(
            type=PieceType[piece.type.name],
            side=Side[piece.side.name],
            symbol=piece.symbol,
        )

    @staticmethod
    def _square_model(square: Square) -> SquareModel:
        return SquareModel(row=square.row, col=square.col, name=square.to_algebraic())
