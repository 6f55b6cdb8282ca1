"""
Publisher entity and API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

NAME_MIN_LENGTH = 6
NAME_MAX_LENGTH = 48
CITY_MIN_LENGTH = 2
CITY_MAX_LENGTH = 32


def _storable_text(value: str) -> str:
    # PostgreSQL text cannot hold NUL, and asyncpg sends UTF-8.
    if "\x00" in value:
        raise ValueError("Value must not contain NUL characters.")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError("Value must be valid Unicode text.") from exc
    return value


class Publisher(BaseModel):
    """
    In-memory form of one `publishers` row.

    `id` is None until the store assigns one on insert.
    """

    id: int | None = None
    name: str
    city: str


class PublisherCreateRequest(BaseModel):
    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    city: str = Field(..., min_length=CITY_MIN_LENGTH, max_length=CITY_MAX_LENGTH)

    @field_validator("name", "city")
    @classmethod
    def _check_text(cls, value: str) -> str:
        return _storable_text(value)

    def to_entity(self) -> Publisher:
        return Publisher(name=self.name, city=self.city)


class PublisherUpdateRequest(BaseModel):
    # Omitted fields keep their stored value; see `apply_to`.
    name: str | None = Field(default=None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    city: str | None = Field(default=None, min_length=CITY_MIN_LENGTH, max_length=CITY_MAX_LENGTH)

    @field_validator("name", "city", mode="before")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        # Runs only for keys present in the body, so an explicit null is an error
        # while a missing key stays unset.
        if value is None:
            raise ValueError("Field cannot be null; omit it to keep the current value.")
        return value

    @field_validator("name", "city")
    @classmethod
    def _check_text(cls, value: str) -> str:
        return _storable_text(value)

    def apply_to(self, item: Publisher) -> Publisher:
        changes = self.model_dump(exclude_unset=True)
        return item.model_copy(update=changes)


class PublisherDetailResponse(BaseModel):
    id: int
    name: str
    city: str

    @classmethod
    def from_entity(cls, item: Publisher) -> "PublisherDetailResponse":
        return cls(id=int(item.id), name=item.name, city=item.city)


class PublisherCreateResponse(PublisherDetailResponse):
    """
    Returned by POST; same fields as the detail view.
    """
