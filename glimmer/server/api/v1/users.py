"""
User Endpoints.

Registration and profiles. Every other endpoint identifies the acting user by
the ``X-User-Id`` header.
"""

from fastapi import APIRouter, status

from glimmer.core.models.io import UserCreate, UserRead, UserSummary
from glimmer.server.services.deps import CurrentUserDep, UserServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register User",
    description="Create a user together with their default cosmic pet.",
    responses={
        201: {"description": "User created"},
        409: {"description": "Username or email already taken"},
    },
)
async def create_user(data: UserCreate, users: UserServiceDep) -> UserRead:
    """
    Register a new user.

    - **username**: Unique handle (letters, digits, ``_ . -``).
    - **email**: Unique email address.
    - **display_name**: Name shown to friends.
    """
    user = await users.create_user(data)
    return UserRead.model_validate(user)


@router.get(
    "/me",
    response_model=UserRead,
    summary="Current User",
    description="Return the acting user's full record.",
    responses={401: {"description": "Missing or unknown X-User-Id"}},
)
async def read_me(user: CurrentUserDep) -> UserRead:
    return UserRead.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserSummary,
    summary="User Profile",
    description="Return another user's public profile.",
    responses={404: {"description": "User not found"}},
)
async def read_user(user_id: str, _: CurrentUserDep, users: UserServiceDep) -> UserSummary:
    return UserSummary.model_validate(await users.get_user(user_id))
