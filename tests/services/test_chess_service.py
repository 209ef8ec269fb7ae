"""Unit tests for src/services/chess_service.py"""

import threading
from uuid import UUID, uuid4

import pytest

from src.core.exceptions import RepositoryError
from src.core.shared_types import Outcome, PieceType, Side
from src.db.memory_repository import InMemoryGameRepository
from src.services.chess_service import (
    ActivateSquareRequest,
    ChessService,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    NewGameRequest,
    OFF_BOARD,
    UndoRequest,
)

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
QUEEN_TAKES_KING = "4k3/8/8/8/4Q3/8/8/4K3"


@pytest.fixture
def service(repository: InMemoryGameRepository) -> ChessService:
    return ChessService(repository)


def click(service: ChessService, game_id: UUID, row: int, col: int) -> GameResponse:
    return service.activate_square(ActivateSquareRequest(game_id=game_id, row=row, col=col))


# --- SERVICE - CREATE GAME ----
def test_create_a_new_game(service: ChessService, repository: InMemoryGameRepository) -> None:
    response = service.create_game(CreateGameRequest())

    assert repository.get_game(response.game_id) is not None
    assert response.position == STARTING_POSITION
    assert response.side_to_move == Side.LIGHT
    assert response.winner is None
    assert response.history_length == 0
    assert response.outcome is None
    assert response.status == "Light's Turn"


def test_board_in_response(service: ChessService) -> None:
    """Row 0 is the dark back rank, row 7 the light back rank, rows 2-5 are empty"""
    response = service.create_game(CreateGameRequest())
    assert len(response.board) == 8
    assert all(len(row) == 8 for row in response.board)

    dark_king = response.board[0][4]
    assert dark_king is not None
    assert dark_king.type == PieceType.KING
    assert dark_king.side == Side.DARK
    assert dark_king.symbol == "♚"

    light_pawn = response.board[6][0]
    assert light_pawn is not None
    assert (light_pawn.type, light_pawn.side) == (PieceType.PAWN, Side.LIGHT)

    assert all(square is None for row in response.board[2:6] for square in row)


def test_create_game_from_position(service: ChessService) -> None:
    response = service.create_game(
        CreateGameRequest(starting_position=QUEEN_TAKES_KING, side_to_move=Side.DARK)
    )
    assert response.position == QUEEN_TAKES_KING
    assert response.side_to_move == Side.DARK


def test_create_game_already_decided(service: ChessService) -> None:
    response = service.create_game(
        CreateGameRequest(starting_position="8/8/8/8/8/8/8/4K3", side_to_move=Side.DARK)
    )
    assert response.winner == Side.LIGHT
    assert response.status == "Light Wins!"


# --- SERVICE - PLAYING ----
def test_select_and_move(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id

    selected = click(service, game_id, 6, 4)
    assert selected.outcome == Outcome.SELECTED
    assert selected.selected == "e2"

    moved = click(service, game_id, 4, 4)
    assert moved.outcome == Outcome.MOVED
    assert moved.side_to_move == Side.DARK
    assert moved.selected is None
    assert moved.history_length == 1
    assert moved.board[6][4] is None
    assert moved.board[4][4] is not None


def test_wrong_side_is_rejected(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    response = click(service, game_id, 1, 4)
    assert response.outcome == Outcome.REJECTED
    assert response.selected is None


def test_capture_king_and_undo(service: ChessService) -> None:
    game_id = service.create_game(
        CreateGameRequest(starting_position=QUEEN_TAKES_KING)
    ).game_id
    click(service, game_id, 4, 4)
    ended = click(service, game_id, 0, 4)
    assert ended.outcome == Outcome.GAME_ENDED
    assert ended.winner == Side.LIGHT
    assert [piece.type for piece in ended.captured["dark"]] == [PieceType.KING]
    assert ended.material == {"light": 0, "dark": 0}

    undone = service.undo(UndoRequest(game_id=game_id))
    assert undone.outcome == Outcome.UNDONE
    assert undone.winner is None
    assert undone.captured["dark"] == []
    assert undone.position == QUEEN_TAKES_KING


def test_material_of_captured_pieces(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    pawn_trade = [((6, 4), (4, 4)), ((1, 3), (3, 3)), ((4, 4), (3, 3))]
    for (from_row, from_col), (to_row, to_col) in pawn_trade:
        click(service, game_id, from_row, from_col)
        click(service, game_id, to_row, to_col)

    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.material == {"light": 1, "dark": 0}

    undone = service.undo(UndoRequest(game_id=game_id))
    assert undone.material == {"light": 0, "dark": 0}


def test_undo_without_history(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    response = service.undo(UndoRequest(game_id=game_id))
    assert response.outcome == Outcome.REJECTED
    assert response.position == STARTING_POSITION


def test_new_game_keeps_the_id(service: ChessService) -> None:
    game_id = service.create_game(
        CreateGameRequest(starting_position=QUEEN_TAKES_KING)
    ).game_id
    response = service.new_game(NewGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.outcome == Outcome.RESET
    assert response.position == STARTING_POSITION


def test_get_game_state(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    click(service, game_id, 7, 1)
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.selected == "b1"
    assert response.outcome is None


# --- SERVICE - LEGAL MOVES ----
def test_legal_moves(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    response = service.legal_moves(LegalMovesRequest(game_id=game_id, row=7, col=1))
    assert response.square.name == "b1"
    assert [square.name for square in response.legal_moves] == ["a3", "c3"]


def test_legal_moves_of_opponent_piece(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    response = service.legal_moves(LegalMovesRequest(game_id=game_id, row=1, col=1))
    assert response.legal_moves == []


@pytest.mark.parametrize("row, col", [(0, -200), (0, -1), (8, 0), (-200, 3), (3, 200)])
def test_legal_moves_off_the_board(service: ChessService, row: int, col: int) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    response = service.legal_moves(LegalMovesRequest(game_id=game_id, row=row, col=col))
    assert response.square.name == OFF_BOARD
    assert (response.square.row, response.square.col) == (row, col)
    assert response.legal_moves == []


def test_activate_far_off_the_board(service: ChessService) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    response = click(service, game_id, 0, -200)
    assert response.outcome == Outcome.REJECTED
    assert response.position == STARTING_POSITION


# --- SERVICE - BOOKKEEPING ----
def test_unknown_game(service: ChessService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))
    with pytest.raises(RepositoryError):
        service.undo(UndoRequest(game_id=uuid4()))


def test_unknown_game_leaves_no_lock_behind(service: ChessService) -> None:
    service.create_game(CreateGameRequest())
    n_locks = len(service._locks)

    for _ in range(10):
        unknown_id = uuid4()
        with pytest.raises(RepositoryError):
            service.get_game_state(GetGameRequest(game_id=unknown_id))
        with pytest.raises(RepositoryError):
            click(service, unknown_id, 6, 4)
        with pytest.raises(RepositoryError):
            service.legal_moves(LegalMovesRequest(game_id=unknown_id, row=6, col=4))
        with pytest.raises(RepositoryError):
            service.delete_game(DeleteGameRequest(game_id=unknown_id))

    assert len(service._locks) == n_locks


def test_delete_game(service: ChessService, repository: InMemoryGameRepository) -> None:
    game_id = service.create_game(CreateGameRequest()).game_id
    service.delete_game(DeleteGameRequest(game_id=game_id))
    assert repository.get_game(game_id) is None
    assert game_id not in service._locks
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=game_id))


def test_games_are_independent(service: ChessService) -> None:
    first_id = service.create_game(CreateGameRequest()).game_id
    second_id = service.create_game(CreateGameRequest()).game_id
    click(service, first_id, 6, 4)
    click(service, first_id, 4, 4)
    second = service.get_game_state(GetGameRequest(game_id=second_id))
    assert second.position == STARTING_POSITION
    assert second.history_length == 0


def test_one_lock_per_game(service: ChessService) -> None:
    first_id = service.create_game(CreateGameRequest()).game_id
    second_id = service.create_game(CreateGameRequest()).game_id
    assert service._lock(first_id) is service._lock(first_id)
    assert service._lock(first_id) is not service._lock(second_id)


def test_concurrent_clicks_are_serialized(service: ChessService) -> None:
    """Every click on the same square toggles the selection. An even number of clicks must end unselected."""
    game_id = service.create_game(CreateGameRequest()).game_id
    n_threads, clicks_per_thread = 8, 50

    def toggle() -> None:
        for _ in range(clicks_per_thread):
            click(service, game_id, 6, 4)

    threads = [threading.Thread(target=toggle) for _ in range(n_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.selected is None
    assert response.position == STARTING_POSITION
