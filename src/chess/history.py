"""
Bookkeeping of executed moves
----

The History is the only thing undo works from. Entries hold Piece values (immutable), never references into the live board.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from src.chess.pieces import Piece, Side
from src.chess.square import Square


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of one executed move: enough to put the board back exactly as it was."""

    from_square: Square
    to_square: Square
    moved_piece: Piece
    captured_piece: Optional[Piece]
    side_that_moved: Side

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None


@dataclass
class History:
    """Linear log of moves. Popping an entry destroys it: there is no redo."""

    entries: list[HistoryEntry] = field(default_factory=list)

    def push(self, entry: HistoryEntry) -> None:
        self.entries.append(entry)

    def pop(self) -> Optional[HistoryEntry]:
        if not self.entries:
            return None
        return self.entries.pop()

    @property
    def last(self) -> Optional[HistoryEntry]:
        return self.entries[-1] if self.entries else None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.entries)


def _empty_tally() -> dict[Side, list[Piece]]:
    return {side: [] for side in Side}


@dataclass
class CapturedPieces:
    """
    Pieces removed from the board, kept per side of the piece that got captured.

    Mirrors the capture events of the History: every capture appends, every undo of a capture removes that same entry again.
    """

    tally: dict[Side, list[Piece]] = field(default_factory=_empty_tally)

    def add(self, piece: Piece) -> None:
        self.tally[piece.side].append(piece)

    def restore(self, piece: Piece) -> None:
        """
        Take back the most recent capture of this piece's side.

        NOTE: Undo only ever reverses the latest move, so the capture it recorded is always the last entry of that side's list.
        """
        pieces_lost = self.tally[piece.side]
        if not pieces_lost or pieces_lost[-1] != piece:
            raise ValueError(
                f"Captured pieces out of sync with history: expected {piece} at the end of {pieces_lost}"
            )
        pieces_lost.pop()

    def lost_by(self, side: Side) -> list[Piece]:
        return list(self.tally[side])

    def captured_by(self, side: Side) -> list[Piece]:
        """The pieces this side took from its opponent"""
        return self.lost_by(side.opponent)

    def material_captured_by(self, side: Side) -> int:
        return sum(piece.points for piece in self.captured_by(side))
