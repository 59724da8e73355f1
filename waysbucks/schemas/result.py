# result.py
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")

SUCCESS_CODE = "Success"


class SuccessResult(BaseModel, Generic[T]):
    code: str = Field(default=SUCCESS_CODE)
    data: T


class ErrorResult(BaseModel):
    code: int
    message: str


def success(data: T) -> SuccessResult[T]:
    return SuccessResult(code=SUCCESS_CODE, data=data)
