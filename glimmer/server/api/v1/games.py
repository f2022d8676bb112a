"""
Game Endpoints.

Start games against friends, inspect them, and submit moves or forfeit when
no WebSocket connection is available.
"""

from typing import List

from fastapi import APIRouter, status

from glimmer.core.models.io import GameCreate, GameMoveRequest, GameRead
from glimmer.server.services.deps import CurrentUserDep, GameServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=GameRead,
    status_code=status.HTTP_201_CREATED,
    summary="Start Game",
    description="Invite an accepted friend to a game. The creator moves first.",
    responses={
        400: {"description": "Playing against yourself"},
        403: {"description": "The opponent is not an accepted friend"},
        404: {"description": "Opponent not found"},
        422: {"description": "Unknown game type"},
    },
)
async def create_game(data: GameCreate, user: CurrentUserDep, games: GameServiceDep) -> GameRead:
    """
    Start a game.

    - **player2_id**: The invited friend.
    - **game_type**: ``tic-tac-toe``, ``rock-paper-scissors`` or ``cosmic-cards``.
    """
    return await games.create_game(user, data.player2_id, data.game_type)


@router.get(
    "",
    response_model=List[GameRead],
    summary="Active Games",
    description="List the user's active games, most recently updated first.",
)
async def list_games(user: CurrentUserDep, games: GameServiceDep) -> List[GameRead]:
    return await games.list_active(user)


@router.get(
    "/{game_id}",
    response_model=GameRead,
    summary="Get Game",
    description="Return a game the user plays in, with the opponent's hidden information redacted.",
    responses={404: {"description": "Game not found"}},
)
async def get_game(game_id: str, user: CurrentUserDep, games: GameServiceDep) -> GameRead:
    return await games.get_game(user, game_id)


@router.post(
    "/{game_id}/moves",
    response_model=GameRead,
    summary="Make Move",
    description="Submit a move. Both players receive a game_update message.",
    responses={
        400: {"description": "Not your turn, game finished or illegal move"},
        403: {"description": "Not a participant"},
        404: {"description": "Game not found"},
    },
)
async def make_move(
    game_id: str, data: GameMoveRequest, user: CurrentUserDep, games: GameServiceDep
) -> GameRead:
    return await games.apply_move(user, game_id, data.move)


@router.post(
    "/{game_id}/forfeit",
    response_model=GameRead,
    summary="Forfeit Game",
    description="Abandon an active game; the opponent is recorded as the winner.",
    responses={
        400: {"description": "Game already finished"},
        403: {"description": "Not a participant"},
        404: {"description": "Game not found"},
    },
)
async def forfeit_game(game_id: str, user: CurrentUserDep, games: GameServiceDep) -> GameRead:
    return await games.forfeit(user, game_id)
