"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Side(Enum):
    LIGHT = auto()
    DARK = auto()

    @property
    def opponent(self) -> "Side":
        return Side.DARK if self == Side.LIGHT else Side.LIGHT


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
}

PIECE_SYMBOLS: dict[Side, dict[PieceType, str]] = {
    Side.LIGHT: {
        PieceType.KING: "♔",
        PieceType.QUEEN: "♕",
        PieceType.ROOK: "♖",
        PieceType.BISHOP: "♗",
        PieceType.KNIGHT: "♘",
        PieceType.PAWN: "♙",
    },
    Side.DARK: {
        PieceType.KING: "♚",
        PieceType.QUEEN: "♛",
        PieceType.ROOK: "♜",
        PieceType.BISHOP: "♝",
        PieceType.KNIGHT: "♞",
        PieceType.PAWN: "♟",
    },
}


@dataclass(frozen=True)
class Piece:
    """A piece is a value: moving it relocates it on the Board, the piece itself never changes."""

    type: PieceType
    side: Side

    @property
    def points(self) -> int:
        # NOTE: The King's worth is undefined (does not count towards total points)
        return PIECE_POINTS.get(self.type, 0)

    @property
    def symbol(self) -> str:
        return PIECE_SYMBOLS[self.side][self.type]

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: dark pieces, upper case: light pieces
        side = Side.LIGHT if character.isupper() else Side.DARK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, side)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.side == Side.LIGHT
            else PIECE_TO_FEN[self.type].lower()
        )
