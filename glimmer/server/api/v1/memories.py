"""
Memory Endpoints.

Create, list and delete memories, browse friends' public memories and ask the
cosmic assistant for an insight.
"""

from typing import List

from fastapi import APIRouter, Response, status

from glimmer.core.models.io import MemoryCreate, MemoryInsight, MemoryRead
from glimmer.server.services.deps import CurrentUserDep, MemoryServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=MemoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Memory",
    description="Add a memory (a new star). The star position is derived from the id when omitted.",
)
async def create_memory(data: MemoryCreate, user: CurrentUserDep, memories: MemoryServiceDep) -> MemoryRead:
    """
    Create a memory.

    Increments the user's memory count and logs a ``memory_shared`` activity.
    """
    memory = await memories.create_memory(user, data)
    return MemoryRead.model_validate(memory)


@router.get(
    "",
    response_model=List[MemoryRead],
    summary="List Memories",
    description="List the acting user's memories, newest first.",
)
async def list_memories(user: CurrentUserDep, memories: MemoryServiceDep) -> List[MemoryRead]:
    return [MemoryRead.model_validate(m) for m in await memories.list_own(user)]


@router.get(
    "/public",
    response_model=List[MemoryRead],
    summary="Friends' Public Memories",
    description="List public memories of accepted friends, newest first.",
)
async def list_public_memories(user: CurrentUserDep, memories: MemoryServiceDep) -> List[MemoryRead]:
    return [MemoryRead.model_validate(m) for m in await memories.list_friends_public(user)]


@router.get(
    "/insights",
    response_model=MemoryInsight,
    summary="Memory Insight",
    description="Ask the cosmic assistant to reflect on the user's recent memories.",
)
async def memory_insights(user: CurrentUserDep, memories: MemoryServiceDep) -> MemoryInsight:
    """
    Generate an insight.

    Always answers; when the AI provider is unavailable a fallback insight is returned.
    """
    return await memories.insights(user)


@router.get(
    "/{memory_id}",
    response_model=MemoryRead,
    summary="Get Memory",
    description="Return one of the user's memories or any public memory.",
    responses={404: {"description": "Memory not found or private"}},
)
async def get_memory(memory_id: str, user: CurrentUserDep, memories: MemoryServiceDep) -> MemoryRead:
    return MemoryRead.model_validate(await memories.get_memory(user, memory_id))


@router.delete(
    "/{memory_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Memory",
    description="Delete one of the user's memories.",
    responses={
        204: {"description": "Memory deleted"},
        403: {"description": "Memory belongs to another user"},
        404: {"description": "Memory not found"},
    },
)
async def delete_memory(memory_id: str, user: CurrentUserDep, memories: MemoryServiceDep) -> Response:
    """
    Delete a memory.

    Decrements the user's memory count and logs a ``memory_deleted`` activity.
    """
    await memories.delete_memory(user, memory_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
