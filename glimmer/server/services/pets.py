"""
Pet service.

Care actions change the pet's stats by fixed deltas, clamped to 0..100, and
grant experience; every 100 experience points is a level. The stat logic is
a pure function so it can be checked without a database.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from glimmer.ai.assistant import CosmicAssistant
from glimmer.core.database.base import utc_now
from glimmer.core.database.entities import Pet, User
from glimmer.core.database.repositories import RepoBundle
from glimmer.core.logging_config import get_logger
from glimmer.core.models.domain.enums import ActivityType, PetAction, PetMood
from glimmer.core.models.io import PetActionResult, PetRead
from glimmer.errors import NotFoundError, PermissionDeniedError, ValidationError
from glimmer.realtime.protocol import PetUpdate
from glimmer.realtime.registry import ConnectionRegistry

from .activities import ActivityService
from .friends import FriendService

logger = get_logger(__name__)

STAT_MIN = 0
STAT_MAX = 100
EXPERIENCE_PER_LEVEL = 100


@dataclass(frozen=True)
class ActionEffect:
    happiness: int = 0
    energy: int = 0
    bond: int = 0
    experience: int = 0
    mood: Optional[PetMood] = None
    sets_last_fed: bool = False
    sets_last_played: bool = False


ACTION_EFFECTS: Dict[PetAction, ActionEffect] = {
    PetAction.feed: ActionEffect(happiness=10, energy=15, experience=10, sets_last_fed=True),
    PetAction.play: ActionEffect(happiness=15, bond=5, energy=-10, experience=15, sets_last_played=True),
    PetAction.sleep: ActionEffect(energy=25, experience=5, mood=PetMood.rested),
    PetAction.exercise: ActionEffect(happiness=8, energy=-15, bond=3, experience=12),
}


def clamp(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, value))


def mood_for(happiness: int, energy: int) -> PetMood:
    """Mood implied by the pet's stats."""
    if energy < 20:
        return PetMood.sleepy
    if happiness >= 80:
        return PetMood.joyful
    if happiness < 30:
        return PetMood.lonely
    return PetMood.content


def level_for(experience: int) -> int:
    return 1 + experience // EXPERIENCE_PER_LEVEL


def apply_pet_action(pet: Pet, action: PetAction, now: Optional[datetime] = None) -> bool:
    """Apply ``action`` to ``pet`` in place.

    Returns:
        True if the pet reached a new level.
    """
    effect = ACTION_EFFECTS[action]
    now = now or utc_now()

    pet.happiness = clamp(pet.happiness + effect.happiness)
    pet.energy = clamp(pet.energy + effect.energy)
    pet.bond = clamp(pet.bond + effect.bond)
    pet.experience += effect.experience
    pet.mood = (effect.mood or mood_for(pet.happiness, pet.energy)).value
    if effect.sets_last_fed:
        pet.last_fed = now
    if effect.sets_last_played:
        pet.last_played = now

    new_level = level_for(pet.experience)
    leveled_up = new_level > pet.level
    pet.level = max(pet.level, new_level)
    return leveled_up


class PetService:
    """Business rules for the cosmic pet and its co-care."""

    def __init__(
        self,
        repos: RepoBundle,
        registry: ConnectionRegistry,
        assistant: CosmicAssistant,
        friends: FriendService,
    ) -> None:
        self.repos = repos
        self.registry = registry
        self.assistant = assistant
        self.friends = friends
        self.activities = ActivityService(repos)

    async def get_pet(self, user: User) -> Pet:
        """The user's own pet, or the pet they co-care.

        Raises:
            NotFoundError: The user has no pet.
        """
        pet = await self.repos.pets.get_accessible(user.id)
        if pet is None:
            raise NotFoundError("Pet")
        return pet

    async def _pet_for_care(self, user: User, pet_id: Optional[str]) -> Pet:
        if pet_id is None:
            return await self.get_pet(user)
        pet = await self.repos.pets.get_by_id(pet_id)
        if pet is None:
            raise NotFoundError("Pet", pet_id)
        if user.id not in (pet.user_id, pet.co_carer_id):
            raise PermissionDeniedError("Only the owner or the co-carer can care for this pet")
        return pet

    async def perform_action(self, user: User, action: PetAction, pet_id: Optional[str] = None) -> PetActionResult:
        """Perform a care action and let the pet react.

        ``pet_id`` selects a pet the user co-cares; by default the user's
        own pet (or the one they co-care) is used.

        The owner's ``pet_level`` follows the pet's level. The other carer
        (co-carer when the owner acts, owner when the co-carer acts) is
        notified with ``pet_update``.
        """
        pet = await self._pet_for_care(user, pet_id)
        leveled_up = apply_pet_action(pet, action)
        pet = await self.repos.pets.update(pet)
        if leveled_up:
            await self.repos.users.set_pet_level(pet.user_id, pet.level)
        await self.activities.log(
            user.id,
            ActivityType.pet_interaction,
            f"{action.value.capitalize()} {pet.name}",
            {"pet_id": pet.id, "action": action.value, "level": pet.level},
        )
        await self.repos.commit()
        logger.debug(f"User {user.id} performed {action.value} on pet {pet.id} (level {pet.level})")

        response = await self.assistant.pet_reaction(pet, action.value)
        pet_read = PetRead.model_validate(pet)

        partner_id = pet.co_carer_id if user.id == pet.user_id else pet.user_id
        if partner_id:
            await self.registry.send_to(
                partner_id,
                PetUpdate(pet=pet_read.model_dump(mode="json"), action=action.value, by_user_id=user.id).to_wire(),
            )
        return PetActionResult(pet=pet_read, response=response)

    async def add_co_carer(self, user: User, friend_id: str) -> Pet:
        """Grant an accepted friend co-care of the user's own pet.

        Raises:
            NotFoundError: The user owns no pet, or the friend does not exist.
            ValidationError: Naming yourself.
            PermissionDeniedError: The friend is not an accepted friend.
        """
        pet = await self.repos.pets.get_owned(user.id)
        if pet is None:
            raise NotFoundError("Pet")
        if friend_id == user.id:
            raise ValidationError("You already care for your own pet")
        friend = await self.repos.users.get_by_id(friend_id)
        if friend is None:
            raise NotFoundError("User", friend_id)
        await self.friends.require_friends(user.id, friend.id, "share your pet")

        pet.co_carer_id = friend.id
        pet = await self.repos.pets.update(pet)
        await self.activities.log(
            user.id,
            ActivityType.co_carer_added,
            f"{friend.display_name} now helps care for {pet.name}",
            {"pet_id": pet.id, "co_carer_id": friend.id},
        )
        await self.repos.commit()
        logger.info(f"User {friend.id} became co-carer of pet {pet.id}")

        await self.registry.send_to(
            friend.id,
            PetUpdate(
                pet=PetRead.model_validate(pet).model_dump(mode="json"),
                action="co_care_granted",
                by_user_id=user.id,
            ).to_wire(),
        )
        return pet

    async def remove_co_carer(self, user: User) -> Pet:
        """Revoke co-care of the user's own pet.

        Raises:
            NotFoundError: The user owns no pet.
        """
        pet = await self.repos.pets.get_owned(user.id)
        if pet is None:
            if await self.repos.pets.get_accessible(user.id) is not None:
                raise PermissionDeniedError("Only the owner can change co-care")
            raise NotFoundError("Pet")

        previous = pet.co_carer_id
        pet.co_carer_id = None
        pet = await self.repos.pets.update(pet)
        await self.repos.commit()

        if previous:
            await self.registry.send_to(
                previous,
                PetUpdate(
                    pet=PetRead.model_validate(pet).model_dump(mode="json"),
                    action="co_care_revoked",
                    by_user_id=user.id,
                ).to_wire(),
            )
        return pet
