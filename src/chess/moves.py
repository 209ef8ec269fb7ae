"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the move sets for each piece type.

Candidate moves do not care about leaving your own king exposed. Whether a move may be played is decided by Game.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.chess.pieces import Piece, PieceType, Side
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...


# (d_row, d_col)
Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    def __str__(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# light pawns walk up the board (towards row 0), dark pawns walk down.
PAWN_DIRECTION: dict[Side, int] = {Side.LIGHT: -1, Side.DARK: 1}
PAWN_START_ROW: dict[Side, int] = {Side.LIGHT: 6, Side.DARK: 1}

STRAIGHTS: list[Vector] = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONALS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
KNIGHT_JUMPS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
]
KING_STEPS: list[Vector] = STRAIGHTS + DIAGONALS


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, side: Side, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_col)
            if not target_square.is_within_bounds():
                break

            piece_found = board.piece_at(target_square)
            if piece_found is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if piece_found.side != side:
                    moves.append(Move(square, target_square))
                break

            moves.append(Move(square, target_square))
    return moves


def single_step_move(
    square: Square, side: Side, board: Board, deltas: list[Vector]
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just make a single jump along a direction"""
    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece_at(target_square)
        if piece_found is None or piece_found.side != side:
            moves.append(Move(square, target_square))

    return moves


def candidate_pawn_moves(square: Square, side: Side, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, only onto an empty square.
    - It can move by two from its starting row, if both squares are empty
    - takes diagonally (forward), only when an enemy piece stands there
    """
    moves: list[Move] = []
    direction = PAWN_DIRECTION[side]

    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.piece_at(one_step) is None:
        moves.append(Move(square, one_step))

        two_steps = square.offset(2 * direction, 0)
        if square.row == PAWN_START_ROW[side] and board.piece_at(two_steps) is None:
            moves.append(Move(square, two_steps))

    for d_col in [-1, 1]:
        target_square = square.offset(direction, d_col)
        if not target_square.is_within_bounds():
            continue
        piece_found = board.piece_at(target_square)
        if piece_found is not None and piece_found.side != side:
            moves.append(Move(square, target_square))
    return moves


def candidate_knight_moves(square: Square, side: Side, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3. Jumps cannot be blocked."""
    return single_step_move(square, side, board, KNIGHT_JUMPS)


def candidate_bishop_moves(square: Square, side: Side, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, side, board, DIAGONALS)


def candidate_rook_moves(square: Square, side: Side, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, side, board, STRAIGHTS)


def candidate_queen_moves(square: Square, side: Side, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(square, side, board)
    horizontal_and_vertical_moves = candidate_rook_moves(square, side, board)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(square: Square, side: Side, board: Board) -> list[Move]:
    """The king can move by a single square at the time."""
    return single_step_move(square, side, board, KING_STEPS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Side, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def generate_moves(
    piece_type: PieceType, side: Side, square: Square, board: Board
) -> set[Square]:
    """The destination squares a piece of the given type and side standing on `square` can reach."""
    movement_rule = MOVEMENT_RULES[piece_type]
    return {move.to_square for move in movement_rule(square, side, board)}
