# profile.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from waysbucks.schemas.user import UserBrief


class CreateProfileRequest(BaseModel):
    phone: str = Field(min_length=1, max_length=32)
    address: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    postal_code: int = Field(gt=0)
    image: Optional[str] = None
    user_id: int

    @field_validator("phone", "address", "city", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v


class UpdateProfileRequest(BaseModel):
    """Form fields of a profile update. Empty values leave the stored field alone."""

    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: int = 0
    image: str = ""


class ProfileResponse(BaseModel):
    id: int
    phone: str
    address: str
    city: str
    postal_code: int
    image: Optional[str] = None
    user_id: int
    user: Optional[UserBrief] = None

    model_config = ConfigDict(from_attributes=True)
