"""Protocol repository (live games are kept in memory: saving / loading games is not supported)"""

from typing import Protocol
from uuid import UUID

from src.chess.game import Game


class GameRepository(Protocol):
    """Game instance bookkeeping"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game's record."""
        ...
