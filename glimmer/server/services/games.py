"""
Game service.

Owns turn order for the mini-games. The engine computes every new state on
the server; clients only send their move. Moves on one game are applied one
at a time under a per-game lock, and each game is re-read from the database
inside the lock so a waiting move sees the result of the one before it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from glimmer.core.database.base import utc_now
from glimmer.core.database.entities import ChatMessage, Game, User
from glimmer.core.database.repositories import RepoBundle
from glimmer.core.logging_config import get_logger
from glimmer.core.models.domain.enums import ActivityType, ChatMessageType, GameStatus, GameType
from glimmer.core.models.io import GameRead, UserSummary
from glimmer.errors import InvalidMoveError, NotFoundError, PermissionDeniedError, ValidationError
from glimmer.games import GameLocks, get_engine, other_slot
from glimmer.realtime.protocol import GameInvite, GameUpdate
from glimmer.realtime.registry import ConnectionRegistry

from .activities import ActivityService
from .friends import FriendService

logger = get_logger(__name__)


def game_view(game: Game, viewer_id: Optional[str]) -> GameRead:
    """The game as ``viewer_id`` may see it, with hidden information redacted."""
    engine = get_engine(game.game_type)
    slot = game.slot_of(viewer_id) if viewer_id else None
    return GameRead(
        id=game.id,
        player1_id=game.player1_id,
        player2_id=game.player2_id,
        game_type=GameType(game.game_type),
        game_state=engine.view(game.game_state, slot),
        status=GameStatus(game.status),
        winner_id=game.winner_id,
        current_turn=game.current_turn,
        move_count=game.move_count,
        created_at=game.created_at,
        updated_at=game.updated_at,
    )


class GameService:
    """Business rules for turn-based games between friends."""

    def __init__(
        self,
        repos: RepoBundle,
        registry: ConnectionRegistry,
        friends: FriendService,
        locks: GameLocks,
    ) -> None:
        self.repos = repos
        self.registry = registry
        self.friends = friends
        self.locks = locks
        self.activities = ActivityService(repos)

    async def create_game(self, user: User, player2_id: str, game_type: GameType) -> GameRead:
        """Start a game against an accepted friend; the creator moves first.

        Raises:
            ValidationError: Playing against yourself.
            NotFoundError: No such opponent.
            PermissionDeniedError: The opponent is not an accepted friend.
        """
        if player2_id == user.id:
            raise ValidationError("You cannot play against yourself")
        opponent = await self.repos.users.get_by_id(player2_id)
        if opponent is None:
            raise NotFoundError("User", player2_id)
        await self.friends.require_friends(user.id, opponent.id, "play")

        engine = get_engine(game_type.value)
        state = engine.initial_state()
        game = Game(
            player1_id=user.id,
            player2_id=opponent.id,
            game_type=game_type.value,
            game_state=state,
        )
        game.current_turn = game.player_for(engine.first_slot(state))
        game = await self.repos.games.create(game)

        await self.repos.chat.create(
            ChatMessage(
                sender_id=user.id,
                receiver_id=opponent.id,
                content=f"Let's play {game_type.value}! (game {game.id})",
                type=ChatMessageType.game_invite.value,
            )
        )
        await self.activities.log(
            user.id,
            ActivityType.game_started,
            f"Started {game_type.value} with {opponent.display_name}",
            {"game_id": game.id, "game_type": game_type.value, "opponent_id": opponent.id},
        )
        await self.repos.commit()
        logger.info(f"Game {game.id} ({game_type.value}) started: {user.id} vs {opponent.id}")

        await self.registry.send_to(
            opponent.id,
            GameInvite(
                game=game_view(game, opponent.id).model_dump(mode="json"),
                from_user=UserSummary.model_validate(user).model_dump(mode="json"),
            ).to_wire(),
        )
        return game_view(game, user.id)

    async def list_active(self, user: User) -> List[GameRead]:
        games = await self.repos.games.list_active_for_user(user.id)
        return [game_view(game, user.id) for game in games]

    async def get_game(self, user: User, game_id: str) -> GameRead:
        """A game the user plays in.

        Raises:
            NotFoundError: Missing, or the user is not a participant.
        """
        game = await self.repos.games.get_by_id(game_id)
        if game is None or game.slot_of(user.id) is None:
            raise NotFoundError("Game", game_id)
        return game_view(game, user.id)

    async def _load_for_player(self, user: User, game_id: str) -> tuple[Game, str]:
        game = await self.repos.games.get_by_id(game_id)
        if game is None:
            raise NotFoundError("Game", game_id)
        slot = game.slot_of(user.id)
        if slot is None:
            raise PermissionDeniedError("You are not playing in this game", code="not_a_participant")
        if game.status != GameStatus.active.value:
            raise InvalidMoveError("This game is already over", code="game_finished")
        return game, slot

    async def apply_move(self, user: User, game_id: str, move: Dict[str, Any]) -> GameRead:
        """Apply ``move`` by ``user`` and notify both players.

        Raises:
            NotFoundError: No such game.
            PermissionDeniedError: ``not_a_participant``.
            InvalidMoveError: ``game_finished``, ``not_your_turn`` or an illegal move.
        """
        lock = self.locks.lock_for(game_id)
        async with lock:
            game, slot = await self._load_for_player(user, game_id)
            if game.current_turn != user.id:
                raise InvalidMoveError("It is not your turn", code="not_your_turn")

            engine = get_engine(game.game_type)
            outcome = engine.apply(game.game_state, slot, move)

            game.game_state = outcome.state
            game.move_count += 1
            game.updated_at = utc_now()
            if outcome.finished:
                game.status = GameStatus.finished.value
                game.current_turn = None
                game.winner_id = game.player_for(outcome.winner_slot) if outcome.winner_slot else None
            else:
                game.current_turn = game.player_for(outcome.next_slot or other_slot(slot))
            game = await self.repos.games.update(game)

            await self.friends.record_interaction(game.player1_id, game.player2_id)
            if outcome.finished:
                await self._log_finished(game, reason="finished")
            await self.repos.commit()

        if outcome.finished:
            self.locks.discard(game_id)
            logger.info(f"Game {game.id} finished after {game.move_count} moves, winner={game.winner_id}")

        await self._notify_players(game)
        return game_view(game, user.id)

    async def forfeit(self, user: User, game_id: str) -> GameRead:
        """Abandon a game; the opponent is recorded as the winner.

        Raises:
            NotFoundError: No such game.
            PermissionDeniedError: ``not_a_participant``.
            InvalidMoveError: ``game_finished``.
        """
        lock = self.locks.lock_for(game_id)
        async with lock:
            game, slot = await self._load_for_player(user, game_id)
            game.status = GameStatus.abandoned.value
            game.winner_id = game.player_for(other_slot(slot))
            game.current_turn = None
            game.updated_at = utc_now()
            game = await self.repos.games.update(game)
            await self._log_finished(game, reason="forfeit")
            await self.repos.commit()

        self.locks.discard(game_id)
        logger.info(f"Game {game.id} forfeited by {user.id}")
        await self._notify_players(game)
        return game_view(game, user.id)

    async def _log_finished(self, game: Game, reason: str) -> None:
        for player_id in (game.player1_id, game.player2_id):
            if game.winner_id is None:
                result = "draw"
            else:
                result = "won" if game.winner_id == player_id else "lost"
            await self.activities.log(
                player_id,
                ActivityType.game_played,
                f"Played {game.game_type}: {result}",
                {"game_id": game.id, "game_type": game.game_type, "result": result, "reason": reason},
            )

    async def _notify_players(self, game: Game) -> None:
        for player_id in (game.player1_id, game.player2_id):
            await self.registry.send_to(
                player_id, GameUpdate(game=game_view(game, player_id).model_dump(mode="json")).to_wire()
            )
