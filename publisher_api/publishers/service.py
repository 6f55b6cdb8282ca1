"""
Publisher business logic.

One repository round-trip (or one read followed by one write) per use case.
Errors from the repository pass through unchanged.
"""

from __future__ import annotations

import logging

from . import schemas
from .repository import PublisherRepository

logger = logging.getLogger(__name__)


class PublisherService:
    def __init__(self, repository: PublisherRepository) -> None:
        self._repo = repository

    async def create(self, payload: schemas.PublisherCreateRequest) -> schemas.PublisherCreateResponse:
        item = await self._repo.create(payload.to_entity())
        logger.info("publisher_created id=%s", item.id)
        return schemas.PublisherCreateResponse.from_entity(item)

    async def get_by_id(self, publisher_id: int) -> schemas.PublisherDetailResponse:
        item = await self._repo.get_by_id(publisher_id)
        return schemas.PublisherDetailResponse.from_entity(item)

    async def update(
        self,
        publisher_id: int,
        payload: schemas.PublisherUpdateRequest,
    ) -> schemas.PublisherDetailResponse:
        existing = await self._repo.get_by_id(publisher_id)
        updated = await self._repo.update(payload.apply_to(existing))
        logger.info(
            "publisher_updated id=%s fields=%s",
            publisher_id,
            ",".join(sorted(payload.model_fields_set)) or "-",
        )
        return schemas.PublisherDetailResponse.from_entity(updated)

    async def get_list(self) -> list[schemas.PublisherDetailResponse]:
        items = await self._repo.get_list()
        return [schemas.PublisherDetailResponse.from_entity(item) for item in items]

    async def delete(self, publisher_id: int) -> None:
        await self._repo.get_by_id(publisher_id)
        await self._repo.delete(publisher_id)
        logger.info("publisher_deleted id=%s", publisher_id)
