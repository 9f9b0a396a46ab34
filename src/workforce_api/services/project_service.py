"""Project record service."""

import logging
import uuid

from workforce_api.exceptions import ProjectNotFoundError
from workforce_api.models.domain.project import Project
from workforce_api.repositories.base import DirectoryStore
from workforce_api.services.cache_service import WorkspaceCache
from workforce_api.utils.clock import Clock, now_millis

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project operations."""

    def __init__(
        self,
        store: DirectoryStore,
        cache: WorkspaceCache | None = None,
        clock: Clock = now_millis,
    ) -> None:
        """Initialize service with the directory store."""
        self.store = store
        self.cache = cache
        self.clock = clock

    async def list_projects(self) -> list[Project]:
        """List all projects in store order."""
        return await self.store.list_projects()

    async def get_project(self, project_id: str) -> Project:
        """Get a project by id.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        project = await self.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def create_project(self, project: Project) -> Project:
        """Create a project with a generated id when missing."""
        now = self.clock()
        record = project.model_copy(
            update={
                "id": project.id or str(uuid.uuid4()),
                "created_at": now,
                "updated_at": now,
            }
        )
        created = await self.store.create_project(record)
        logger.info("Created project %s", created.id)
        if self.cache is not None:
            self.cache.invalidate()
        return created

    async def update_project(self, project_id: str, project: Project) -> Project:
        """Replace a project, keeping its creation time.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        existing = await self.get_project(project_id)
        record = project.model_copy(
            update={
                "id": project_id,
                "created_at": existing.created_at,
                "updated_at": self.clock(),
            }
        )
        await self.store.update_project(record)
        logger.info("Updated project %s", project_id)
        if self.cache is not None:
            self.cache.invalidate()
        return record

    async def delete_project(self, project_id: str) -> None:
        """Delete a project.

        Raises:
            ProjectNotFoundError: If no project has this id
        """
        await self.store.delete_project(project_id)
        logger.info("Deleted project %s", project_id)
        if self.cache is not None:
            self.cache.invalidate()
