"""Shared pytest fixtures for publisher API tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from publisher_api.auth import security
from publisher_api.core import errors
from publisher_api.main import create_app
from publisher_api.publishers.dependencies import get_publisher_service
from publisher_api.publishers.repository import NOT_FOUND_MESSAGE
from publisher_api.publishers.schemas import Publisher
from publisher_api.publishers.service import PublisherService


class InMemoryPublisherRepository:
    """Dict-backed stand-in for PublisherRepository with the same contract."""

    def __init__(self) -> None:
        self.rows: dict[int, Publisher] = {}
        self.next_id = 1
        self.writes = 0
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def create(self, item: Publisher) -> Publisher:
        self._check()
        stored = item.model_copy(update={"id": self.next_id})
        self.rows[stored.id] = stored
        self.next_id += 1
        self.writes += 1
        return stored

    async def get_by_id(self, publisher_id: int) -> Publisher:
        self._check()
        if publisher_id not in self.rows:
            raise errors.not_found(NOT_FOUND_MESSAGE)
        return self.rows[publisher_id].model_copy()

    async def get_list(self) -> list[Publisher]:
        self._check()
        return [self.rows[key].model_copy() for key in sorted(self.rows)]

    async def update(self, item: Publisher) -> Publisher:
        self._check()
        if item.id not in self.rows:
            raise errors.not_found(NOT_FOUND_MESSAGE)
        self.rows[item.id] = item.model_copy()
        self.writes += 1
        return item.model_copy()

    async def delete(self, publisher_id: int) -> None:
        self._check()
        if self.rows.pop(publisher_id, None) is None:
            raise errors.not_found(NOT_FOUND_MESSAGE)
        self.writes += 1


class _FakeAcquire:
    def __init__(self, pool: "FakePool") -> None:
        self._pool = pool

    async def __aenter__(self) -> "FakePool":
        self._pool.acquire_count += 1
        if self._pool.acquire_blocks:
            # Every connection is checked out and none is ever released.
            await asyncio.Event().wait()
        return self._pool

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False


class FakePool:
    """Records asyncpg calls and replays queued results.

    `acquire()` hands back the pool itself as the connection.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple[Any, ...], Any]] = []
        self.results: list[Any] = []
        self.error: BaseException | None = None
        self.acquire_blocks = False
        self.acquire_count = 0

    def acquire(self, *, timeout: Any = None) -> _FakeAcquire:
        return _FakeAcquire(self)

    def _next(self, method: str, sql: str, args: tuple[Any, ...], timeout: Any) -> Any:
        self.calls.append((method, " ".join(sql.split()), args, timeout))
        if self.error is not None:
            raise self.error
        return self.results.pop(0) if self.results else None

    async def fetchrow(self, sql: str, *args: Any, timeout: Any = None) -> Any:
        return self._next("fetchrow", sql, args, timeout)

    async def fetch(self, sql: str, *args: Any, timeout: Any = None) -> Any:
        result = self._next("fetch", sql, args, timeout)
        return result if result is not None else []

    async def execute(self, sql: str, *args: Any, timeout: Any = None) -> Any:
        return self._next("execute", sql, args, timeout)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host settings from leaking into token signing and timeouts."""
    for name in ("JWT_SECRET", "JWT_ALG", "ACCESS_TOKEN_EXPIRE_MIN", "DB_COMMAND_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def memory_repo() -> InMemoryPublisherRepository:
    return InMemoryPublisherRepository()


@pytest.fixture
def service(memory_repo: InMemoryPublisherRepository) -> PublisherService:
    return PublisherService(memory_repo)


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def app(service: PublisherService) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_publisher_service] = lambda: service
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    # Not entered as a context manager, so the lifespan (and its DB pool) never runs.
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    token = security.build_access_token(user_id=1, email="editor@example.com")
    return {"Authorization": f"Bearer {token}"}
