"""Shared fixtures."""

import asyncio
from collections import Counter
from datetime import datetime, timezone

import pytest

from workforce_api.config import Settings
from workforce_api.models.domain.identity import Identity
from workforce_api.repositories.memory_store import InMemoryDirectoryStore

# Sunday 15 March 2026, 12:00 UTC
REFERENCE_TIME = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


class RecordingStore(InMemoryDirectoryStore):
    """In-memory store that counts collection fetches and can be slowed down or made to fail."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.list_calls: Counter = Counter()
        self.fail_with: Exception | None = None
        self.delay = 0.0

    async def _record(self, collection: str) -> None:
        self.list_calls[collection] += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with

    async def list_employees(self):
        await self._record("employees")
        return await super().list_employees()

    async def list_projects(self):
        await self._record("projects")
        return await super().list_projects()

    async def list_invoices(self):
        await self._record("invoices")
        return await super().list_invoices()


@pytest.fixture
def now() -> int:
    """Reference time in epoch milliseconds."""
    return int(REFERENCE_TIME.timestamp() * 1000)


@pytest.fixture
def clock(now: int) -> FakeClock:
    """Clock pinned to the reference time."""
    return FakeClock(now)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment's .env file."""
    return Settings(_env_file=None, store_backend="memory", display_timezone="UTC")


@pytest.fixture
def identity() -> Identity:
    """Identity of the employee Jane Doe."""
    return Identity(uid="u-jane", email="Jane@Example.com", display_name="Jane Doe")


@pytest.fixture
def recording_store_factory():
    """Factory for recording stores seeded with records."""
    return RecordingStore
