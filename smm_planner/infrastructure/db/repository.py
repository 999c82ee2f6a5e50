"""
Task store repository - persistence boundary for projects and tasks.

The use cases talk to TaskStoreRepository only. Writes flush but never
commit: the caller owns the transaction, so a project and its generated
tasks land together or not at all.
"""
from abc import ABC, abstractmethod
from datetime import date

from sqlalchemy.orm import Session

from smm_planner.domain.schedule import TaskRecord
from smm_planner.infrastructure.db.models import User, ProjectModel, TaskModel


class TaskStoreRepository(ABC):

    @abstractmethod
    def create_user(self, username: str, password_hash: str) -> User: ...

    @abstractmethod
    def get_user(self, user_id: str) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_project(self, user_id: str, name: str, tier: int, start_date: date) -> ProjectModel: ...

    @abstractmethod
    def get_project(self, project_id: str) -> ProjectModel | None: ...

    @abstractmethod
    def get_projects_by_user(self, user_id: str) -> list[ProjectModel]: ...

    @abstractmethod
    def delete_project(self, project_id: str) -> bool: ...

    @abstractmethod
    def create_task(self, record: TaskRecord) -> TaskModel: ...

    @abstractmethod
    def get_task(self, task_id: str) -> TaskModel | None: ...

    @abstractmethod
    def get_tasks_by_project(self, project_id: str) -> list[TaskModel]:
        """Tasks ordered by scheduled_date, then recurring_day, then id."""

    @abstractmethod
    def update_task(self, task_id: str, is_completed: bool) -> TaskModel | None: ...


class SqlAlchemyTaskStore(TaskStoreRepository):
    def __init__(self, db: Session):
        self.db = db

    # ── users ──

    def create_user(self, username: str, password_hash: str) -> User:
        user = User(username=username, password_hash=password_hash)
        self.db.add(user)
        self.db.flush()
        return user

    def get_user(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    # ── projects ──

    def create_project(self, user_id: str, name: str, tier: int, start_date: date) -> ProjectModel:
        project = ProjectModel(
            user_id=user_id,
            name=name,
            tier=tier,
            start_date=start_date,
            is_active=True,
        )
        self.db.add(project)
        self.db.flush()
        # pick up server-side created_at
        self.db.refresh(project)
        return project

    def get_project(self, project_id: str) -> ProjectModel | None:
        return self.db.get(ProjectModel, project_id)

    def get_projects_by_user(self, user_id: str) -> list[ProjectModel]:
        return self.db.query(ProjectModel).filter(
            ProjectModel.user_id == user_id,
        ).order_by(ProjectModel.created_at.desc(), ProjectModel.name).all()

    def delete_project(self, project_id: str) -> bool:
        project = self.get_project(project_id)
        if not project:
            return False
        self.db.delete(project)
        self.db.flush()
        return True

    # ── tasks ──

    def create_task(self, record: TaskRecord) -> TaskModel:
        task = TaskModel(
            project_id=record.project_id,
            title=record.title,
            description=record.description,
            scheduled_date=record.scheduled_date,
            is_completed=record.is_completed,
            priority=record.priority,
            estimated_time=record.estimated_time,
            task_type=record.task_type,
            tier=record.tier,
            recurring_day=record.recurring_day,
        )
        self.db.add(task)
        self.db.flush()
        return task

    def get_task(self, task_id: str) -> TaskModel | None:
        return self.db.get(TaskModel, task_id)

    def get_tasks_by_project(self, project_id: str) -> list[TaskModel]:
        return self.db.query(TaskModel).filter(
            TaskModel.project_id == project_id,
        ).order_by(
            TaskModel.scheduled_date.asc(), TaskModel.recurring_day.asc(), TaskModel.id.asc(),
        ).all()

    def update_task(self, task_id: str, is_completed: bool) -> TaskModel | None:
        task = self.get_task(task_id)
        if not task:
            return None
        task.is_completed = is_completed
        self.db.flush()
        return task
