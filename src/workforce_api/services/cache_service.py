"""In-process cache for the workspace aggregate."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum

from workforce_api.config import get_settings
from workforce_api.exceptions import LoadSupersededError
from workforce_api.models.domain.workspace import WorkspaceAggregate
from workforce_api.utils.clock import Clock, now_millis

logger = logging.getLogger(__name__)

WorkspaceLoader = Callable[[], Awaitable[WorkspaceAggregate]]


class CacheState(StrEnum):
    """Lifecycle state of the cached aggregate."""

    EMPTY = "EMPTY"
    FRESH = "FRESH"
    STALE = "STALE"


@dataclass
class _Flight:
    """A load in progress and the callers waiting on it."""

    generation: int
    identity_uid: str | None
    task: asyncio.Task
    waiters: int = 0


def get_cache_ttl() -> int:
    """Get the workspace cache TTL from settings.

    Returns:
        TTL in milliseconds
    """
    return get_settings().workspace_cache_ttl_ms


class WorkspaceCache:
    """Single-slot cache for the current identity's workspace aggregate.

    Staleness is evaluated lazily on access; nothing expires in the
    background. Each load is issued a generation token and only the newest
    generation may commit, so a slow early load can never overwrite a later
    one. A failed load leaves the cached value untouched.

    Non-forced reads arriving while a load for the same identity is in
    flight join that load instead of starting their own.
    """

    def __init__(self, ttl_ms: int | None = None, clock: Clock = now_millis) -> None:
        """Initialize cache.

        Args:
            ttl_ms: Time-to-live in milliseconds (defaults to settings)
            clock: Source of the current time
        """
        self.ttl_ms = ttl_ms if ttl_ms is not None else get_cache_ttl()
        self.clock = clock
        self._value: WorkspaceAggregate | None = None
        self._generation = 0
        self._flight: _Flight | None = None

    @property
    def state(self) -> CacheState:
        """Get the cache state as of now."""
        if self._value is None:
            return CacheState.EMPTY
        if self.clock() - self._value.computed_at > self.ttl_ms:
            return CacheState.STALE
        return CacheState.FRESH

    @property
    def generation(self) -> int:
        """Get the newest issued generation token."""
        return self._generation

    def peek(self) -> WorkspaceAggregate | None:
        """Get the cached aggregate regardless of state."""
        return self._value

    def invalidate(self) -> None:
        """Drop the cached aggregate and supersede any load in flight."""
        self._value = None
        self._generation += 1
        logger.debug("Workspace cache invalidated (generation %d)", self._generation)

    async def _run(self, loader: WorkspaceLoader, generation: int) -> WorkspaceAggregate:
        value = await loader()
        if generation != self._generation:
            logger.debug(
                "Discarding workspace load %d, superseded by %d", generation, self._generation
            )
            raise LoadSupersededError(generation, self._generation)
        self._value = value
        return value

    def _start(self, loader: WorkspaceLoader, identity_uid: str | None) -> _Flight:
        self._generation += 1
        flight = _Flight(
            generation=self._generation,
            identity_uid=identity_uid,
            task=asyncio.create_task(self._run(loader, self._generation)),
        )
        flight.task.add_done_callback(lambda task: self._finish(flight))
        self._flight = flight
        return flight

    def _finish(self, flight: _Flight) -> None:
        if self._flight is flight:
            self._flight = None
        if not flight.task.cancelled():
            # Marks the outcome retrieved when every waiter has gone
            flight.task.exception()

    def _joinable(self, identity_uid: str | None) -> _Flight | None:
        flight = self._flight
        if (
            flight is not None
            and not flight.task.done()
            and flight.generation == self._generation
            and flight.identity_uid == identity_uid
        ):
            return flight
        return None

    async def _wait(self, flight: _Flight) -> WorkspaceAggregate:
        flight.waiters += 1
        try:
            return await asyncio.shield(flight.task)
        except asyncio.CancelledError:
            # The last waiter leaving cancels the load; nothing was committed yet
            if flight.waiters == 1 and not flight.task.done():
                flight.task.cancel()
            raise
        finally:
            flight.waiters -= 1

    async def fetch(
        self,
        loader: WorkspaceLoader,
        force_refresh: bool = False,
        identity_uid: str | None = None,
    ) -> tuple[WorkspaceAggregate, CacheState]:
        """Get the aggregate, loading it when needed.

        Args:
            loader: Coroutine factory running the full load pipeline
            force_refresh: Reload even when the cached value is fresh
            identity_uid: Identity the caller expects; a cached aggregate
                built for anyone else is never served

        Returns:
            Tuple of (aggregate, state observed before loading)

        Raises:
            LoadSupersededError: If a forced refresh or an invalidation
                replaced the load this caller was waiting on
            Exception: Whatever the loader raised, unchanged
        """
        state = self.state
        cached = self._value
        if (
            state == CacheState.FRESH
            and not force_refresh
            and (identity_uid is None or cached.identity_uid == identity_uid)
        ):
            logger.debug("Workspace cache hit")
            return cached, state

        flight = None if force_refresh else self._joinable(identity_uid)
        if flight is not None:
            logger.debug("Joining workspace load %d", flight.generation)
        else:
            flight = self._start(loader, identity_uid)
            logger.debug("Workspace cache %s, loading generation %d", state.lower(), flight.generation)

        value = await self._wait(flight)
        return value, state

    async def get(self, loader: WorkspaceLoader, force_refresh: bool = False) -> WorkspaceAggregate:
        """Get the aggregate, loading it when missing, stale or forced."""
        value, _ = await self.fetch(loader, force_refresh)
        return value
