"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.chess.board import Board
from src.chess.pieces import Piece, Side
from src.chess.square import Square
from src.db.memory_repository import InMemoryGameRepository


@pytest.fixture
def board_with_pieces() -> Callable[..., Board]:
    """Call the inner function with a mapping of algebraic square name -> FEN character (upper case: light, lower case: dark)"""

    def _create_board(pieces: dict[str, str], side_to_move: Side = Side.LIGHT) -> Board:
        board = Board.empty(side_to_move)
        for square_name, fen_char in pieces.items():
            board.place(Square.from_algebraic(square_name), Piece.from_fen(fen_char))
        return board

    return _create_board


@pytest.fixture
def repository() -> Generator[InMemoryGameRepository, None, None]:
    """Fresh repository for every test, so games never leak between tests."""
    repo = InMemoryGameRepository()
    yield repo
