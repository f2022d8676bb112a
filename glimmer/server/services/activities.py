"""
Activity feed and dashboard service.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from glimmer.core.database.entities import Activity, User
from glimmer.core.database.repositories import RepoBundle
from glimmer.core.models.domain.enums import ActivityType, FriendshipStatus
from glimmer.core.models.io import ActivityRead, DashboardRead, PetRead, UserRead

DASHBOARD_ACTIVITY_COUNT = 5


class ActivityService:
    """Appends to and reads the activity feed."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def log(
        self, user_id: str, type: ActivityType, description: str, data: Optional[Dict[str, Any]] = None
    ) -> Activity:
        """Stage an activity; the caller's commit persists it."""
        return await self.repos.activities.record(user_id, type.value, description, data)

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[ActivityRead]:
        activities = await self.repos.activities.list_for_user(user_id, limit)
        return [ActivityRead.model_validate(activity) for activity in activities]

    async def dashboard(self, user: User) -> DashboardRead:
        """Summary of the user's universe: counts, pet and latest activities."""
        fresh_user = await self.repos.users.get_by_id(user.id) or user
        memories = await self.repos.memories.list_for_user(user.id)
        friendships = await self.repos.friends.list_for_user(user.id, FriendshipStatus.accepted)
        pet = await self.repos.pets.get_accessible(user.id)
        activities = await self.list_for_user(user.id, DASHBOARD_ACTIVITY_COUNT)
        return DashboardRead(
            user=UserRead.model_validate(fresh_user),
            memories=len(memories),
            friends=len(friendships),
            pet=PetRead.model_validate(pet) if pet is not None else None,
            activities=activities,
        )
