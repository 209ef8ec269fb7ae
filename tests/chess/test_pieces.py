"""Unit tests for /src/chess/pieces.py"""

from dataclasses import FrozenInstanceError

import pytest

from src.chess.pieces import (
    FEN_TO_PIECE,
    PIECE_SYMBOLS,
    PIECE_TO_FEN,
    Piece,
    PieceType,
    Side,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_light_piece_from_fen(char: str) -> None:
    """Capital letters are used for light pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.side == Side.LIGHT


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_dark_piece_from_fen(char: str) -> None:
    """Lower case letters are used for dark pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.side == Side.DARK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece(piece_type, Side.LIGHT).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(piece_type, Side.DARK).to_fen() == PIECE_TO_FEN[piece_type].lower()


def test_piece_is_a_value() -> None:
    """Two pieces of the same kind and side are interchangeable, and a piece can not be altered."""
    piece = Piece(PieceType.PAWN, Side.LIGHT)
    assert piece == Piece(PieceType.PAWN, Side.LIGHT)
    with pytest.raises(FrozenInstanceError):
        piece.type = PieceType.QUEEN  # type: ignore[misc]


def test_opponent() -> None:
    assert Side.LIGHT.opponent == Side.DARK
    assert Side.DARK.opponent == Side.LIGHT


@pytest.mark.parametrize(
    "piece_type, points",
    [
        (PieceType.PAWN, 1),
        (PieceType.KNIGHT, 3),
        (PieceType.BISHOP, 3),
        (PieceType.ROOK, 5),
        (PieceType.QUEEN, 9),
        (PieceType.KING, 0),
    ],
)
def test_points(piece_type: PieceType, points: int) -> None:
    assert Piece(piece_type, Side.DARK).points == points


def test_every_piece_has_a_symbol() -> None:
    symbols = {Piece(t, s).symbol for t in PieceType for s in Side}
    assert len(symbols) == 12
    assert Piece(PieceType.KING, Side.LIGHT).symbol == PIECE_SYMBOLS[Side.LIGHT][PieceType.KING]
