"""
Projects use-cases and read service.
"""
import logging
from datetime import date as date_type
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smm_planner.application.errors import (
    ProjectCreationError, ProjectNotFoundError, ProjectValidationError,
)
from smm_planner.domain.schedule import generate_tasks
from smm_planner.domain.tiers import validate_tier
from smm_planner.infrastructure.db.models import ProjectModel, TaskModel
from smm_planner.infrastructure.db.repository import SqlAlchemyTaskStore, TaskStoreRepository

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


# ── Use Cases ──

class CreateProjectUseCase:
    """
    Create a project and its generated month of tasks.

    Project row and task rows share one transaction: on any failure the
    whole batch is rolled back and ProjectCreationError is raised.
    """

    def __init__(self, db: Session, store: TaskStoreRepository | None = None):
        self.db = db
        self.store = store or SqlAlchemyTaskStore(db)

    def execute(
        self,
        user_id: str,
        name: str,
        tier: int,
        start_date: date_type,
    ) -> tuple[ProjectModel, int]:
        name = (name or "").strip()
        if not name:
            raise ProjectValidationError("Project name must not be empty")
        if len(name) > MAX_NAME_LENGTH:
            raise ProjectValidationError(f"Project name is longer than {MAX_NAME_LENGTH} characters")
        validate_tier(tier)

        try:
            project = self.store.create_project(
                user_id=user_id, name=name, tier=tier, start_date=start_date,
            )
            records = generate_tasks(tier, start_date, project_id=project.id)
            for record in records:
                self.store.create_task(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Project creation rolled back for user_id=%s", user_id)
            raise ProjectCreationError("Failed to create project with its tasks") from e

        logger.info(
            "Created project %s (tier %d, %s) with %d tasks",
            project.id, tier, start_date.strftime("%Y-%m"), len(records),
        )
        return project, len(records)


class DeleteProjectUseCase:
    """Hard delete: the project and all of its tasks."""

    def __init__(self, db: Session, store: TaskStoreRepository | None = None):
        self.db = db
        self.store = store or SqlAlchemyTaskStore(db)

    def execute(self, project_id: str, user_id: str | None = None) -> None:
        if user_id is not None:
            ProjectReadService(self.db, self.store).get_project(project_id, user_id=user_id)
        if not self.store.delete_project(project_id):
            raise ProjectNotFoundError(f"Project {project_id} not found")
        self.db.commit()
        logger.info("Deleted project %s", project_id)


# ── Read Service ──

class ProjectReadService:
    def __init__(self, db: Session, store: TaskStoreRepository | None = None):
        self.store = store or SqlAlchemyTaskStore(db)

    def get_project(self, project_id: str, user_id: str | None = None) -> ProjectModel:
        """Another user's project is reported as missing."""
        project = self.store.get_project(project_id)
        if not project or (user_id is not None and project.user_id != user_id):
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return project

    def get_project_with_tasks(
        self, project_id: str, user_id: str | None = None,
    ) -> tuple[ProjectModel, List[TaskModel]]:
        project = self.get_project(project_id, user_id=user_id)
        return project, self.store.get_tasks_by_project(project.id)

    def list_projects(self, user_id: str) -> List[ProjectModel]:
        return self.store.get_projects_by_user(user_id)

    @staticmethod
    def get_progress(tasks: List[TaskModel]) -> Dict[str, Any]:
        total = len(tasks)
        completed = sum(1 for t in tasks if t.is_completed)
        return {
            "total": total,
            "completed": completed,
            "remaining": total - completed,
            "percent": round(completed / total * 100) if total else 0,
        }
