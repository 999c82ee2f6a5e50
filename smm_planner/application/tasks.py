"""Task completion toggle"""
import logging

from sqlalchemy.orm import Session

from smm_planner.application.errors import TaskNotFoundError
from smm_planner.infrastructure.db.models import TaskModel
from smm_planner.infrastructure.db.repository import SqlAlchemyTaskStore, TaskStoreRepository

logger = logging.getLogger(__name__)


class ToggleTaskUseCase:
    """Sets is_completed and nothing else."""

    def __init__(self, db: Session, store: TaskStoreRepository | None = None):
        self.db = db
        self.store = store or SqlAlchemyTaskStore(db)

    def execute(self, task_id: str, is_completed: bool, user_id: str | None = None) -> TaskModel:
        if user_id is not None:
            # tasks of another user's project are reported as missing
            task = self.store.get_task(task_id)
            project = self.store.get_project(task.project_id) if task else None
            if not project or project.user_id != user_id:
                raise TaskNotFoundError(f"Task {task_id} not found")

        task = self.store.update_task(task_id, is_completed=is_completed)
        if not task:
            raise TaskNotFoundError(f"Task {task_id} not found")
        self.db.commit()
        logger.info("Task %s marked %s", task_id, "completed" if is_completed else "open")
        return task
