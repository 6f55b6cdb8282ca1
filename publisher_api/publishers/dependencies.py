"""
Request-scoped wiring for publisher routes.
"""

from __future__ import annotations

from publisher_api.core import config, db, errors

from .repository import PublisherRepository
from .service import PublisherService

# Largest value a BIGSERIAL id can take.
MAX_ID = 2**63 - 1


def get_publisher_service() -> PublisherService:
    repository = PublisherRepository(db.pool(), timeout_s=config.db_command_timeout_s())
    return PublisherService(repository)


def parse_publisher_id(publisher_id: str) -> int:
    raw = (publisher_id or "").strip()
    if not raw.isascii() or not raw.isdigit():
        raise errors.invalid("Invalid ID.")
    value = int(raw)
    if value > MAX_ID:
        raise errors.invalid("Invalid ID.")
    return value
