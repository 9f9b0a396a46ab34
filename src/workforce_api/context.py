"""Application context: the explicitly constructed object graph.

One ``AppContext`` is built per application and stored on ``app.state``;
request handlers reach services through ``workforce_api.dependencies``.
"""

import logging
from dataclasses import dataclass

from workforce_api.config import Settings
from workforce_api.repositories.base import DirectoryStore
from workforce_api.repositories.firestore_store import FirestoreDirectoryStore
from workforce_api.repositories.memory_store import InMemoryDirectoryStore
from workforce_api.security.identity import SessionIdentityProvider
from workforce_api.services.cache_service import WorkspaceCache
from workforce_api.services.dashboard_service import DashboardService
from workforce_api.services.employee_service import EmployeeService
from workforce_api.services.finance_service import FinanceService
from workforce_api.services.project_service import ProjectService
from workforce_api.services.workspace_service import WorkspaceService
from workforce_api.utils.clock import Clock, now_millis

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Long-lived collaborators shared by all requests."""

    settings: Settings
    store: DirectoryStore
    identity: SessionIdentityProvider
    cache: WorkspaceCache
    dashboard: DashboardService
    workspace: WorkspaceService
    employees: EmployeeService
    projects: ProjectService
    finance: FinanceService

    async def close(self) -> None:
        """Release the store's resources."""
        await self.store.close()


def create_store(settings: Settings) -> DirectoryStore:
    """Create the directory store selected by ``settings.store_backend``."""
    if settings.store_backend == "firestore":
        if not settings.firestore_project_id:
            logger.warning("FIRESTORE_PROJECT_ID not configured - directory store unavailable")
        return FirestoreDirectoryStore(settings)
    return InMemoryDirectoryStore()


def build_context(
    settings: Settings,
    store: DirectoryStore | None = None,
    clock: Clock = now_millis,
) -> AppContext:
    """Wire store, session, cache and services together.

    Args:
        settings: Application settings
        store: Directory store to use instead of the configured backend
        clock: Source of the current time

    Returns:
        AppContext
    """
    store = store if store is not None else create_store(settings)
    cache = WorkspaceCache(ttl_ms=settings.workspace_cache_ttl_ms, clock=clock)
    identity = SessionIdentityProvider()
    identity.add_listener(cache.invalidate)

    logger.info("Directory store backend: %s", type(store).__name__)
    return AppContext(
        settings=settings,
        store=store,
        identity=identity,
        cache=cache,
        dashboard=DashboardService(store, identity, settings, clock),
        workspace=WorkspaceService(store, identity, cache, settings, clock),
        employees=EmployeeService(store, cache, clock),
        projects=ProjectService(store, cache, clock),
        finance=FinanceService(store, clock),
    )
