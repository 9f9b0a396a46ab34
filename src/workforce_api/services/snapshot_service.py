"""Concurrent fetching of directory collections.

A snapshot load fans out one fetch per collection and fans back in before
anything is aggregated. Any failed fetch fails the whole snapshot and the
remaining fetches are cancelled; there is no partial snapshot.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any

from workforce_api.models.domain.employee import Employee
from workforce_api.models.domain.invoice import Invoice
from workforce_api.models.domain.project import Project
from workforce_api.repositories.base import DirectoryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectorySnapshot:
    """Collections fetched together for one load."""

    employees: list[Employee] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)
    invoices: list[Invoice] = field(default_factory=list)


async def gather_all(*awaitables: Awaitable[Any]) -> list[Any]:
    """Await all awaitables concurrently, failing fast.

    The first exception propagates unchanged and every sibling still running
    is cancelled.

    Returns:
        Results in argument order
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        # Let cancelled siblings unwind before the error leaves this frame
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def load_snapshot(store: DirectoryStore, include_invoices: bool = True) -> DirectorySnapshot:
    """Fetch employees, projects and (optionally) invoices concurrently.

    Args:
        store: Directory store to read from
        include_invoices: Whether the invoice collection is needed

    Returns:
        DirectorySnapshot with every requested collection
    """
    fetches: list[Awaitable[Any]] = [store.list_employees(), store.list_projects()]
    if include_invoices:
        fetches.append(store.list_invoices())

    results = await gather_all(*fetches)
    employees, projects = results[0], results[1]
    invoices = results[2] if include_invoices else []

    logger.debug(
        "Snapshot loaded: %d employees, %d projects, %d invoices",
        len(employees),
        len(projects),
        len(invoices),
    )
    return DirectorySnapshot(employees=employees, projects=projects, invoices=invoices)
