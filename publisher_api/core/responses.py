"""
Uniform JSON envelopes shared by every endpoint.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T | None = None


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: list[FieldError] | None = None


def error_body(message: str, errors: list[FieldError] | None = None) -> dict:
    return ErrorResponse(message=message, errors=errors).model_dump(exclude_none=True)
