"""
Activity and Dashboard Endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from glimmer.core.models.io import ActivityRead, DashboardRead
from glimmer.server.core.config import settings
from glimmer.server.services.deps import ActivityServiceDep, CurrentUserDep

router = APIRouter()


@router.get(
    "/activities",
    response_model=List[ActivityRead],
    summary="Activity Feed",
    description="The user's activities, newest first.",
)
async def list_activities(
    user: CurrentUserDep,
    activities: ActivityServiceDep,
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of activities"),
) -> List[ActivityRead]:
    return await activities.list_for_user(user.id, limit or settings.activity_feed_limit)


@router.get(
    "/dashboard",
    response_model=DashboardRead,
    summary="Dashboard",
    description="Counts, pet and the five newest activities for the home screen.",
)
async def dashboard(user: CurrentUserDep, activities: ActivityServiceDep) -> DashboardRead:
    """
    Get the dashboard.

    ``memories`` and ``friends`` are counts; ``friends`` only includes
    accepted friendships.
    """
    return await activities.dashboard(user)
