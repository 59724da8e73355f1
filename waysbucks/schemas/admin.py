from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class AdminStatKV(BaseModel):
    key: str
    label: str
    count: int


class AdminStatsResponse(BaseModel):
    generated_at: datetime
    accounts_total: int
    accounts_with_profile: int
    products_total: int
    product_price_avg: float
    top_cities: list[AdminStatKV] = Field(default_factory=list)
