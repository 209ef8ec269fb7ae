"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the API layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameSnapshot easier to read
SideName = str
FenCharacter = str


@dataclass
class GameSnapshot:
    """Transport-safe, read-only picture of a chess game: everything a rendering layer needs to draw it."""

    position: str  # piece placement part of a FEN string
    side_to_move: SideName
    selected: Optional[str]  # algebraic name of the selected square
    captured: dict[SideName, list[FenCharacter]]  # pieces lost, per side
    winner: Optional[SideName]
    history_length: int
    material: dict[SideName, int]  # points captured, per capturing side
    status: str
