"""
Pet Endpoints.

Care for the cosmic pet and share it with a friend.
"""

from fastapi import APIRouter

from glimmer.core.models.io import CoCareRequest, PetActionRequest, PetActionResult, PetRead
from glimmer.server.services.deps import CurrentUserDep, PetServiceDep

router = APIRouter()


@router.get(
    "",
    response_model=PetRead,
    summary="Get Pet",
    description="Return the user's own pet, or the pet they co-care.",
    responses={404: {"description": "The user has no pet"}},
)
async def get_pet(user: CurrentUserDep, pets: PetServiceDep) -> PetRead:
    return PetRead.model_validate(await pets.get_pet(user))


@router.post(
    "/action",
    response_model=PetActionResult,
    summary="Pet Action",
    description="Feed, play with, put to sleep or exercise the pet.",
    response_description="The updated pet and its reaction.",
    responses={
        404: {"description": "The user has no pet"},
        422: {"description": "Unknown action"},
    },
)
async def pet_action(data: PetActionRequest, user: CurrentUserDep, pets: PetServiceDep) -> PetActionResult:
    """
    Perform a care action.

    Stats are clamped to 0..100. Every 100 experience points raises the pet's
    level. The co-care partner receives a ``pet_update`` message when online.
    """
    return await pets.perform_action(user, data.action, data.pet_id)


@router.post(
    "/co-care",
    response_model=PetRead,
    summary="Add Co-Carer",
    description="Let an accepted friend help care for the user's pet.",
    responses={
        403: {"description": "Not an accepted friend"},
        404: {"description": "No pet, or no such user"},
    },
)
async def add_co_carer(data: CoCareRequest, user: CurrentUserDep, pets: PetServiceDep) -> PetRead:
    return PetRead.model_validate(await pets.add_co_carer(user, data.friend_id))


@router.delete(
    "/co-care",
    response_model=PetRead,
    summary="Remove Co-Carer",
    description="Stop sharing the user's pet.",
    responses={
        403: {"description": "Only the owner can change co-care"},
        404: {"description": "The user has no pet"},
    },
)
async def remove_co_carer(user: CurrentUserDep, pets: PetServiceDep) -> PetRead:
    return PetRead.model_validate(await pets.remove_co_carer(user))
