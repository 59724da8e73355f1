# product.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateProductRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    price: int = Field(gt=0)
    image: str


class UpdateProductRequest(BaseModel):
    title: str = ""
    price: int = 0
    image: str = ""


class ProductResponse(BaseModel):
    id: int
    title: str
    price: int
    image: Optional[str] = None
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
