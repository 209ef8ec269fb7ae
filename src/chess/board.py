"""The Game board: a container mapping every square to an optional piece, plus whose turn it is. Performs no validation."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import FEN_TO_PIECE, Piece, PieceType, Side
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import GameStateError

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
FIRST_TO_MOVE = Side.LIGHT


@dataclass
class Board:
    position: dict[Square, Optional[Piece]]
    side_to_move: Side = FIRST_TO_MOVE

    @classmethod
    def empty(cls, side_to_move: Side = FIRST_TO_MOVE) -> Self:
        return cls({square: None for square in all_squares()}, side_to_move)

    @classmethod
    def starting_position(cls) -> Self:
        """Back ranks in the fixed order, second ranks full of pawns, everything else empty."""
        board = cls.empty()
        last_row = BOARD_DIMENSIONS[0] - 1
        for col, piece_type in enumerate(BACK_RANK):
            board.place(Square(0, col), Piece(piece_type, Side.DARK))
            board.place(Square(1, col), Piece(PieceType.PAWN, Side.DARK))
            board.place(Square(last_row - 1, col), Piece(PieceType.PAWN, Side.LIGHT))
            board.place(Square(last_row, col), Piece(piece_type, Side.LIGHT))
        return board

    @classmethod
    def from_fen(cls, fen_str: str, side_to_move: Side = FIRST_TO_MOVE) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first rank listed is row 0: the dark back rank (lower case letters)
        * dark pawns cover row 1 entirely
        * rows 2 through 5 have 8 consecutive empty squares
        * row 6 holds the light pawns (capital letters)
        * row 7 holds the light back rank.
        """
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[0]:
            raise GameStateError(
                f"Expected {BOARD_DIMENSIONS[0]} ranks in piece placement, got {len(fen_by_ranks)}: {fen_str!r}"
            )

        board = cls.empty(side_to_move)
        for row, fen_one_rank in enumerate(fen_by_ranks):
            col = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue
                if character.lower() not in FEN_TO_PIECE:
                    raise GameStateError(f"Unknown piece {character!r} in {fen_str!r}")
                board.place(Square(row, col), Piece.from_fen(character))
                col += 1
            if col != BOARD_DIMENSIONS[1]:
                raise GameStateError(
                    f"Rank {fen_one_rank!r} does not describe {BOARD_DIMENSIONS[1]} squares."
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece_at(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def place(self, square: Square, piece: Optional[Piece]) -> None:
        self.position[square] = piece

    def locate(self, piece_type: PieceType, side: Side) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece == Piece(piece_type, side)
        ]

    def has_king(self, side: Side) -> bool:
        return bool(self.locate(PieceType.KING, side))
