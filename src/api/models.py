"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Outcome, PieceType, Side

SideName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_position: Optional[str] = None
    side_to_move: Side = Side.LIGHT

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        ranks = value.strip().split("/")
        if len(ranks) != 8:
            raise InvalidRequestError(
                "Piece placement must contain 8 slash-separated ranks."
            )
        return value.strip()


class ActivateSquareRequest(BaseModel):
    """Out-of-board coordinates are accepted here: the engine treats them as a no-op."""

    game_id: UUID
    row: int
    col: int


class LegalMovesRequest(BaseModel):
    game_id: UUID
    row: int
    col: int


class UndoRequest(BaseModel):
    game_id: UUID


class NewGameRequest(BaseModel):
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class SquareModel(BaseModel):
    row: int
    col: int
    name: str


class PieceModel(BaseModel):
    type: PieceType
    side: Side
    symbol: str


class GameResponse(BaseModel):
    game_id: UUID
    board: list[list[Optional[PieceModel]]]
    position: str
    side_to_move: Side
    selected: Optional[str]
    captured: dict[SideName, list[PieceModel]]
    winner: Optional[Side]
    history_length: int
    material: dict[SideName, int]
    status: str
    outcome: Optional[Outcome] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: SquareModel
    legal_moves: list[SquareModel]
