"""
Tests for project use-cases, task toggle and read service.
"""
import pytest
from datetime import date, datetime

from sqlalchemy.exc import OperationalError

from smm_planner.infrastructure.db.models import ProjectModel, TaskModel
from smm_planner.infrastructure.db.repository import SqlAlchemyTaskStore
from smm_planner.application.projects import (
    CreateProjectUseCase, DeleteProjectUseCase, ProjectReadService,
)
from smm_planner.application.tasks import ToggleTaskUseCase
from smm_planner.application.errors import (
    ProjectValidationError, ProjectCreationError, ProjectNotFoundError,
    TaskNotFoundError, ValidationError, NotFoundError,
)
from smm_planner.domain.tiers import InvalidTierError


def _create(db, user, tier=1, start=date(2024, 3, 15), name="Acme Coffee"):
    return CreateProjectUseCase(db).execute(
        user_id=user.id, name=name, tier=tier, start_date=start,
    )


class _FailingStore(SqlAlchemyTaskStore):
    """Breaks after a number of task inserts"""

    def __init__(self, db, fail_after):
        super().__init__(db)
        self.fail_after = fail_after
        self.created = 0

    def create_task(self, record):
        if self.created >= self.fail_after:
            raise OperationalError("INSERT INTO tasks", {}, Exception("disk full"))
        self.created += 1
        return super().create_task(record)


# ── CreateProject ──

class TestCreateProject:
    def test_create_tier1(self, db_session, sample_user):
        project, count = _create(db_session, sample_user)

        assert count == 8
        assert project.id
        assert project.user_id == sample_user.id
        assert project.name == "Acme Coffee"
        assert project.tier == 1
        assert project.start_date == date(2024, 3, 15)
        assert project.is_active is True
        assert project.created_at is not None
        assert db_session.query(TaskModel).filter(TaskModel.project_id == project.id).count() == 8

    def test_tasks_persisted_with_template_fields(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        report = db_session.query(TaskModel).filter(
            TaskModel.project_id == project.id,
            TaskModel.task_type == "reporting",
        ).one()
        assert report.scheduled_date == datetime(2024, 3, 30)
        assert report.recurring_day == 30
        assert report.priority == "high"
        assert report.estimated_time == "60 min"
        assert report.tier == 1
        assert report.is_completed is False

    def test_task_ids_unique(self, db_session, sample_user):
        project, count = _create(db_session, sample_user, tier=3)
        ids = {t.id for t in db_session.query(TaskModel).filter(TaskModel.project_id == project.id)}
        assert len(ids) == count == 51

    def test_name_stripped(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user, name="  Acme  ")
        assert project.name == "Acme"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, db_session, sample_user, name):
        with pytest.raises(ProjectValidationError, match="name"):
            _create(db_session, sample_user, name=name)
        assert db_session.query(ProjectModel).count() == 0

    def test_long_name_rejected(self, db_session, sample_user):
        with pytest.raises(ProjectValidationError):
            _create(db_session, sample_user, name="x" * 256)

    def test_invalid_tier_rejected_before_any_write(self, db_session, sample_user):
        with pytest.raises(InvalidTierError):
            _create(db_session, sample_user, tier=4)
        assert db_session.query(ProjectModel).count() == 0
        assert db_session.query(TaskModel).count() == 0

    def test_failure_midway_rolls_back_everything(self, db_session, sample_user):
        use_case = CreateProjectUseCase(db_session, store=_FailingStore(db_session, fail_after=3))
        with pytest.raises(ProjectCreationError):
            use_case.execute(user_id=sample_user.id, name="Acme", tier=1, start_date=date(2024, 3, 1))

        assert db_session.query(ProjectModel).count() == 0
        assert db_session.query(TaskModel).count() == 0

    def test_error_hierarchy(self):
        assert issubclass(ProjectValidationError, ValidationError)
        assert issubclass(ProjectNotFoundError, NotFoundError)
        assert issubclass(TaskNotFoundError, NotFoundError)


# ── Read service ──

class TestProjectReadService:
    def test_tasks_ordered_by_date(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user, tier=2)
        _, tasks = ProjectReadService(db_session).get_project_with_tasks(project.id)
        dates = [t.scheduled_date for t in tasks]
        assert dates == sorted(dates)
        assert len(tasks) == 16

    def test_not_found(self, db_session):
        with pytest.raises(ProjectNotFoundError):
            ProjectReadService(db_session).get_project_with_tasks("missing")

    def test_ties_broken_by_id(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user, tier=3, start=date(2024, 3, 1))
        service = ProjectReadService(db_session)
        _, tasks = service.get_project_with_tasks(project.id)

        keys = [(t.scheduled_date, t.recurring_day, t.id) for t in tasks]
        assert keys == sorted(keys)
        # day 7 holds influencers, engagement, analytics and the daily post
        assert sum(1 for t in tasks if t.recurring_day == 7) == 4

        db_session.expire_all()
        _, again = service.get_project_with_tasks(project.id)
        assert [t.id for t in again] == [t.id for t in tasks]

    def test_other_users_project_hidden(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        other = SqlAlchemyTaskStore(db_session).create_user("mallory", "x")
        db_session.commit()

        service = ProjectReadService(db_session)
        with pytest.raises(ProjectNotFoundError):
            service.get_project(project.id, user_id=other.id)
        with pytest.raises(ProjectNotFoundError):
            service.get_project_with_tasks(project.id, user_id=other.id)
        assert service.get_project(project.id, user_id=sample_user.id).id == project.id

    def test_list_projects_per_user(self, db_session, sample_user):
        _create(db_session, sample_user, name="One")
        _create(db_session, sample_user, name="Two", tier=2)
        other = SqlAlchemyTaskStore(db_session).create_user("bob", "x")
        db_session.commit()
        _create(db_session, other, name="Bob's")

        names = {p.name for p in ProjectReadService(db_session).list_projects(sample_user.id)}
        assert names == {"One", "Two"}

    def test_progress(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        service = ProjectReadService(db_session)
        _, tasks = service.get_project_with_tasks(project.id)
        ToggleTaskUseCase(db_session).execute(tasks[0].id, True)
        ToggleTaskUseCase(db_session).execute(tasks[1].id, True)
        ToggleTaskUseCase(db_session).execute(tasks[2].id, True)

        _, tasks = service.get_project_with_tasks(project.id)
        assert service.get_progress(tasks) == {
            "total": 8, "completed": 3, "remaining": 5, "percent": 38,
        }

    def test_progress_empty(self):
        assert ProjectReadService.get_progress([]) == {
            "total": 0, "completed": 0, "remaining": 0, "percent": 0,
        }


# ── ToggleTask ──

class TestToggleTask:
    _COLUMNS = (
        "id", "project_id", "title", "description", "scheduled_date", "priority",
        "estimated_time", "task_type", "tier", "recurring_day",
    )

    def _snapshot(self, task):
        return {c: getattr(task, c) for c in self._COLUMNS}

    def test_toggle_on_and_off(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        task = db_session.query(TaskModel).filter(TaskModel.project_id == project.id).first()
        before = self._snapshot(task)

        updated = ToggleTaskUseCase(db_session).execute(task.id, True)
        assert updated.is_completed is True

        updated = ToggleTaskUseCase(db_session).execute(task.id, False)
        assert updated.is_completed is False

        db_session.expire_all()
        reloaded = db_session.get(TaskModel, task.id)
        assert self._snapshot(reloaded) == before
        assert reloaded.is_completed is False

    def test_other_tasks_untouched(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        first, second = db_session.query(TaskModel).filter(TaskModel.project_id == project.id).limit(2).all()
        ToggleTaskUseCase(db_session).execute(first.id, True)
        db_session.expire_all()
        assert db_session.get(TaskModel, second.id).is_completed is False

    def test_not_found(self, db_session):
        with pytest.raises(TaskNotFoundError):
            ToggleTaskUseCase(db_session).execute("missing", True)

    def test_other_users_task_untouched(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        task = db_session.query(TaskModel).filter(TaskModel.project_id == project.id).first()
        other = SqlAlchemyTaskStore(db_session).create_user("mallory", "x")
        db_session.commit()

        with pytest.raises(TaskNotFoundError):
            ToggleTaskUseCase(db_session).execute(task.id, True, user_id=other.id)
        db_session.expire_all()
        assert db_session.get(TaskModel, task.id).is_completed is False

        updated = ToggleTaskUseCase(db_session).execute(task.id, True, user_id=sample_user.id)
        assert updated.is_completed is True

    def test_missing_task_for_user(self, db_session, sample_user):
        with pytest.raises(TaskNotFoundError):
            ToggleTaskUseCase(db_session).execute("missing", True, user_id=sample_user.id)


# ── DeleteProject ──

class TestDeleteProject:
    def test_cascades_to_tasks(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        keep, _ = _create(db_session, sample_user, name="Keep")

        DeleteProjectUseCase(db_session).execute(project.id)

        assert db_session.get(ProjectModel, project.id) is None
        assert db_session.query(TaskModel).filter(TaskModel.project_id == project.id).count() == 0
        assert db_session.query(TaskModel).filter(TaskModel.project_id == keep.id).count() == 8

    def test_not_found(self, db_session):
        with pytest.raises(ProjectNotFoundError):
            DeleteProjectUseCase(db_session).execute("missing")

    def test_other_users_project_kept(self, db_session, sample_user):
        project, _ = _create(db_session, sample_user)
        other = SqlAlchemyTaskStore(db_session).create_user("mallory", "x")
        db_session.commit()

        with pytest.raises(ProjectNotFoundError):
            DeleteProjectUseCase(db_session).execute(project.id, user_id=other.id)

        assert db_session.get(ProjectModel, project.id) is not None
        assert db_session.query(TaskModel).filter(TaskModel.project_id == project.id).count() == 8

        DeleteProjectUseCase(db_session).execute(project.id, user_id=sample_user.id)
        assert db_session.get(ProjectModel, project.id) is None
