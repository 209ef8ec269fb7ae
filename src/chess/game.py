"""
The Game class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of chess:
selecting a piece, checking the move against the movement rules, executing it, passing the turn, and undoing it again.

Rejected actions are not errors here: every user action returns an Outcome, so callers can tell "nothing happened" apart from "state changed".
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import FIRST_TO_MOVE, Board
from src.chess.history import CapturedPieces, History, HistoryEntry
from src.chess.moves import generate_moves
from src.chess.pieces import Piece, Side
from src.chess.square import Square
from src.core.exceptions import IllegalMoveError
from src.core.models import GameSnapshot

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_SELECTION = auto()
    AWAITING_DESTINATION = auto()
    GAME_OVER = auto()


class Outcome(Enum):
    SELECTED = auto()
    DESELECTED = auto()
    RESELECTED = auto()
    MOVED = auto()
    GAME_ENDED = auto()
    REJECTED = auto()
    UNDONE = auto()
    RESET = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    history: History = field(default_factory=History)
    captured: CapturedPieces = field(default_factory=CapturedPieces)
    selected: Optional[Square] = None
    phase: Phase = Phase.AWAITING_SELECTION

    def __post_init__(self) -> None:
        # a hand-built position may already be decided
        self._update_phase()

    @classmethod
    def initialize(cls) -> Self:
        """A fresh game from the standard starting position."""
        return cls(Board.starting_position())

    @classmethod
    def from_position(cls, fen: str, side_to_move: Side = FIRST_TO_MOVE) -> Self:
        """Start playing from an arbitrary piece placement (no history, nothing captured yet)."""
        return cls(Board.from_fen(fen, side_to_move))

    # --- READ-ONLY OBSERVERS ---
    def current_side(self) -> Side:
        return self.board.side_to_move

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.board.piece_at(square)

    def captured_pieces(self, side: Side) -> list[Piece]:
        """The pieces of this side that were taken off the board, in the order they got captured."""
        return self.captured.lost_by(side)

    @property
    def winner(self) -> Optional[Side]:
        """
        Simplified end condition: the side to move has lost its king.
        Only the opponent could have captured it, so the opponent won.
        """
        side_to_move = self.board.side_to_move
        if self.board.has_king(side_to_move):
            return None
        return side_to_move.opponent

    def is_game_over(self) -> Optional[Side]:
        """Returns the winner, if there is one."""
        return self.winner

    @property
    def status_text(self) -> str:
        if self.winner is not None:
            return f"{self.winner.name.capitalize()} Wins!"
        return f"{self.current_side().name.capitalize()}'s Turn"

    def query_moves(self, row: int, col: int) -> set[Square]:
        """
        Destinations to highlight for the piece on (row, col).
        Empty if there is no piece there or it does not belong to the side to move.
        """
        square = Square(row, col)
        if not self._is_selectable(square):
            return set()
        return self._destinations(square)

    # --- USER ACTIONS ---
    def activate_square(self, row: int, col: int) -> Outcome:
        """
        Single entry point for clicking on the board
        -----

        * Nothing selected yet: select your own piece.
        * Click the selected square again: deselect.
        * Click a legal destination: move, pass the turn, and check whether the game ended.
        * Click anything else: select that square instead if it holds one of your pieces, otherwise drop the selection.
        """
        square = Square(row, col)
        if not square.is_within_bounds():
            logger.debug(f"Ignoring activation outside the board: {square}")
            return Outcome.REJECTED

        if self.phase == Phase.GAME_OVER:
            return Outcome.REJECTED

        if self.selected is None:
            if not self._is_selectable(square):
                return Outcome.REJECTED
            self._select(square)
            return Outcome.SELECTED

        if square == self.selected:
            self._clear_selection()
            return Outcome.DESELECTED

        if self.is_legal(self.selected, square):
            self.execute(self.selected, square)
            self._clear_selection()
            self._switch_side()
            self._update_phase()
            if self.phase == Phase.GAME_OVER:
                logger.info(f"Game over: {self.status_text}")
                return Outcome.GAME_ENDED
            return Outcome.MOVED

        self._clear_selection()
        if self._is_selectable(square):
            self._select(square)
            return Outcome.RESELECTED
        return Outcome.REJECTED

    def new_game(self) -> Outcome:
        """Throw away the board, the history, and the captured pieces."""
        self.board = Board.starting_position()
        self.history = History()
        self.captured = CapturedPieces()
        self._clear_selection()
        self._update_phase()
        logger.debug("New game started")
        return Outcome.RESET

    def undo(self) -> Outcome:
        """
        Take back the last move
        -----

        Exact inverse of `execute()` for the latest history entry. The entry is gone afterwards: there is no redo.
        Undo is also allowed once the game is over (it revives the game).
        """
        entry = self.history.pop()
        if entry is None:
            return Outcome.REJECTED

        self.board.place(entry.from_square, entry.moved_piece)
        self.board.place(entry.to_square, entry.captured_piece)
        if entry.captured_piece is not None:
            self.captured.restore(entry.captured_piece)

        self.board.side_to_move = entry.side_that_moved
        self._clear_selection()
        self._update_phase()
        logger.debug(
            f"Undid {entry.from_square.to_algebraic()}{entry.to_square.to_algebraic()}"
        )
        return Outcome.UNDONE

    # --- VALIDATOR / EXECUTOR ---
    def is_legal(self, from_square: Square, to_square: Square) -> bool:
        """The single legality gate. Fails closed."""
        if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
            return False
        if not self._is_selectable(from_square):
            return False
        return to_square in self._destinations(from_square)

    def execute(self, from_square: Square, to_square: Square) -> HistoryEntry:
        """
        Apply a move and record it
        -----

        1. snapshot the moving piece and whatever stands on the target square
        2. tally the captured piece (if any)
        3. relocate the piece
        4. push the history entry

        NOTE: The side to move is left untouched. Passing the turn is up to `activate_square()`.
        """
        if not self.is_legal(from_square, to_square):
            raise IllegalMoveError(
                f"Move not allowed: {from_square.to_algebraic()}{to_square.to_algebraic()}"
            )

        moved_piece = self.board.piece_at(from_square)
        # for the type checker: is_legal guarantees there is a piece to move
        assert moved_piece is not None
        captured_piece = self.board.piece_at(to_square)

        if captured_piece is not None:
            self.captured.add(captured_piece)

        self.board.place(from_square, None)
        self.board.place(to_square, moved_piece)

        entry = HistoryEntry(
            from_square=from_square,
            to_square=to_square,
            moved_piece=moved_piece,
            captured_piece=captured_piece,
            side_that_moved=self.board.side_to_move,
        )
        self.history.push(entry)
        logger.debug(
            f"{moved_piece.side.name} {moved_piece.type.name} {from_square.to_algebraic()}{to_square.to_algebraic()}, captured: {captured_piece}"
        )
        return entry

    # --- TRANSPORT ---
    def to_snapshot(self) -> GameSnapshot:
        """Encode into a format the Service layer uses"""
        return GameSnapshot(
            position=self.board.to_fen(),
            side_to_move=self.current_side().name.lower(),
            selected=self.selected.to_algebraic() if self.selected else None,
            captured={
                side.name.lower(): [piece.to_fen() for piece in self.captured_pieces(side)]
                for side in Side
            },
            winner=self.winner.name.lower() if self.winner else None,
            history_length=len(self.history),
            material={
                side.name.lower(): self.captured.material_captured_by(side)
                for side in Side
            },
            status=self.status_text,
        )

    # -- PRIVATE HELPERS ---
    def _is_selectable(self, square: Square) -> bool:
        piece = self.board.piece_at(square)
        return piece is not None and piece.side == self.board.side_to_move

    def _destinations(self, square: Square) -> set[Square]:
        piece = self.board.piece_at(square)
        assert piece is not None
        return generate_moves(piece.type, piece.side, square, self.board)

    def _select(self, square: Square) -> None:
        self.selected = square
        self.phase = Phase.AWAITING_DESTINATION

    def _clear_selection(self) -> None:
        self.selected = None
        if self.phase == Phase.AWAITING_DESTINATION:
            self.phase = Phase.AWAITING_SELECTION

    def _switch_side(self) -> None:
        self.board.side_to_move = self.board.side_to_move.opponent

    def _update_phase(self) -> None:
        """Re-evaluate the end condition after anything changed the board."""
        if self.winner is not None:
            self.phase = Phase.GAME_OVER
        elif self.selected is not None:
            self.phase = Phase.AWAITING_DESTINATION
        else:
            self.phase = Phase.AWAITING_SELECTION
