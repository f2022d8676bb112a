"""
Pet I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from glimmer.core.models.domain.enums import PetAction


class PetRead(BaseModel):
    """Schema for reading a pet."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    species: str
    level: int
    happiness: int
    energy: int
    bond: int
    experience: int
    mood: str
    co_carer_id: Optional[str] = None
    last_fed: Optional[datetime] = None
    last_played: Optional[datetime] = None
    created_at: datetime


class PetActionRequest(BaseModel):
    """Schema for a care action on the pet."""

    action: PetAction
    pet_id: Optional[str] = Field(
        default=None, description="Pet to care for; defaults to the user's own pet. Co-carers pass the shared pet's id."
    )


class PetActionResult(BaseModel):
    """Updated pet plus the pet's reaction text."""

    pet: PetRead
    response: str


class CoCareRequest(BaseModel):
    """Schema for granting co-care to a friend."""

    friend_id: str
