"""
Type definitions used across layers
"""

from enum import StrEnum

# --- NOTE The domain layer has its own Enums with the same names (src/chess/pieces.py, src/chess/game.py).
# --- Convert between them by member name, and let the imports show which versions are used in what part of the code


class Side(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class Outcome(StrEnum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    RESELECTED = "reselected"
    MOVED = "moved"
    GAME_ENDED = "game ended"
    REJECTED = "rejected"
    UNDONE = "undone"
    RESET = "reset"
