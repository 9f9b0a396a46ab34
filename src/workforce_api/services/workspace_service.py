"""Employee workspace service."""

import asyncio
import logging

from workforce_api.config import Settings
from workforce_api.models.domain.identity import Identity
from workforce_api.models.domain.workspace import WorkspaceAggregate
from workforce_api.models.dto.dashboard import EmployeeDashboardResponse
from workforce_api.models.dto.workspace import WorkspaceResponse, WorkspaceSection
from workforce_api.repositories.base import DirectoryStore
from workforce_api.security.identity import IdentityProvider, require_current_user
from workforce_api.services.assignment_service import find_assigned_projects, resolve_current_employee
from workforce_api.services.cache_service import CacheState, WorkspaceCache
from workforce_api.services.dashboard_service import build_employee_dashboard
from workforce_api.services.snapshot_service import DirectorySnapshot, load_snapshot
from workforce_api.services.workspace_sections import RenderContext, build_section_view
from workforce_api.utils.clock import Clock, now_millis
from workforce_api.utils.secure_logging import log_failure

logger = logging.getLogger(__name__)


def build_workspace_aggregate(
    identity: Identity,
    snapshot: DirectorySnapshot,
    computed_at: int,
) -> WorkspaceAggregate:
    """Resolve the identity's employee record and assigned projects.

    Args:
        identity: Current identity
        snapshot: Employees and projects
        computed_at: Time stamped on the aggregate

    Returns:
        WorkspaceAggregate
    """
    return WorkspaceAggregate(
        identity_uid=identity.uid,
        current_employee=resolve_current_employee(identity, snapshot.employees),
        all_employees=[employee for employee in snapshot.employees if employee is not None],
        assigned_projects=find_assigned_projects(identity, snapshot.projects),
        computed_at=computed_at,
    )


class WorkspaceService:
    """Service for the current identity's workspace."""

    def __init__(
        self,
        store: DirectoryStore,
        identity_provider: IdentityProvider,
        cache: WorkspaceCache,
        settings: Settings,
        clock: Clock = now_millis,
    ) -> None:
        """Initialize service with its collaborators."""
        self.store = store
        self.identity_provider = identity_provider
        self.cache = cache
        self.settings = settings
        self.clock = clock

    async def _load(self, identity: Identity) -> WorkspaceAggregate:
        """Run fetch, resolve and aggregate for one identity."""
        try:
            snapshot = await load_snapshot(self.store, include_invoices=False)
        except Exception as e:
            log_failure(logger, "Failed to load workspace", e)
            raise
        # Resolution is CPU-only; keep it off the event loop
        aggregate = await asyncio.to_thread(
            build_workspace_aggregate, identity, snapshot, self.clock()
        )
        logger.debug(
            "Workspace built for %s: employee matched=%s, %d assigned projects",
            identity.uid,
            aggregate.current_employee is not None,
            len(aggregate.assigned_projects),
        )
        return aggregate

    async def _fetch(self, force_refresh: bool) -> tuple[WorkspaceAggregate, CacheState]:
        identity = require_current_user(self.identity_provider)
        return await self.cache.fetch(
            lambda: self._load(identity),
            force_refresh=force_refresh,
            identity_uid=identity.uid,
        )

    async def load_workspace(
        self,
        section: WorkspaceSection = WorkspaceSection.MY_TASKS,
        force_refresh: bool = False,
    ) -> WorkspaceAggregate:
        """Get the workspace aggregate, from cache when fresh.

        Args:
            section: Section the caller is about to render
            force_refresh: Bypass a fresh cached aggregate

        Returns:
            WorkspaceAggregate for the current identity

        Raises:
            UnauthenticatedError: If nobody is logged in
            LoadSupersededError: If a forced refresh or an invalidation replaced the load
        """
        logger.debug("Loading workspace for section %s", section)
        aggregate, _ = await self._fetch(force_refresh)
        return aggregate

    async def load_section(
        self,
        section: WorkspaceSection,
        force_refresh: bool = False,
    ) -> WorkspaceResponse:
        """Load the workspace and render one section of it."""
        aggregate, state = await self._fetch(force_refresh)
        ctx = RenderContext(
            aggregate=aggregate,
            now=self.clock(),
            tz=self.settings.tz,
            list_limit=self.settings.workspace_list_limit,
            team_limit=self.settings.team_list_limit,
        )
        return WorkspaceResponse(
            view=build_section_view(section, ctx),
            computed_at=aggregate.computed_at,
            cache_state=state,
        )

    async def load_employee_dashboard(self, force_refresh: bool = False) -> EmployeeDashboardResponse:
        """Load the employee dashboard from the workspace aggregate."""
        aggregate, _ = await self._fetch(force_refresh)
        return build_employee_dashboard(
            aggregate,
            self.clock(),
            self.settings.tz,
            self.settings.dashboard_top_projects,
        )

    def invalidate(self) -> None:
        """Drop the cached workspace."""
        self.cache.invalidate()
