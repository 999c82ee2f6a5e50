"""Project calendar (.ics) export"""
from datetime import datetime

from sqlalchemy.orm import Session

from smm_planner.config import get_settings
from smm_planner.domain.ics import build_project_calendar, export_filename
from smm_planner.application.projects import ProjectReadService
from smm_planner.infrastructure.db.repository import TaskStoreRepository


class ExportProjectCalendarUseCase:
    def __init__(self, db: Session, store: TaskStoreRepository | None = None):
        self.read_service = ProjectReadService(db, store)

    def execute(
        self,
        project_id: str,
        now: datetime | None = None,
        user_id: str | None = None,
    ) -> tuple[str, str]:
        """
        Returns:
            (filename, ics_text)

        Raises:
            ProjectNotFoundError
        """
        settings = get_settings()
        project, tasks = self.read_service.get_project_with_tasks(project_id, user_id=user_id)
        ics_text = build_project_calendar(
            project_name=project.name,
            project_id=project.id,
            start_date=project.start_date,
            tasks=tasks,
            now=now,
            prodid=settings.ICS_PRODID,
            uid_domain=settings.ICS_UID_DOMAIN,
        )
        return export_filename(project.name), ics_text
