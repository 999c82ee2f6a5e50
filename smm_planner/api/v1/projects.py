"""
Project API endpoints
"""
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, StrictInt, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from smm_planner.api.deps import get_db, get_current_user
from smm_planner.infrastructure.db.models import User
from smm_planner.application.projects import (
    CreateProjectUseCase, DeleteProjectUseCase, ProjectReadService,
)
from smm_planner.application.calendar_export import ExportProjectCalendarUseCase
from smm_planner.application.errors import NotFoundError, ProjectCreationError, ValidationError
from smm_planner.domain.tiers import InvalidTierError, validate_tier


router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


# === Request/Response models ===

class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CreateProjectRequest(CamelModel):
    name: str
    tier: StrictInt  # JSON true or "1" is rejected, not coerced
    start_date: date  # "2024-03-15" or a full ISO timestamp

    @field_validator("start_date", mode="before")
    @classmethod
    def take_date_part(cls, v):
        """Accept ISO timestamps, only the calendar date is kept"""
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        if isinstance(v, datetime):
            return v.date()
        return v

    @field_validator("tier")
    @classmethod
    def check_tier(cls, v: int) -> int:
        try:
            return validate_tier(v)
        except InvalidTierError as e:
            raise ValueError(str(e)) from e


class ProjectResponse(CamelModel):
    id: str
    user_id: str
    name: str
    tier: int
    start_date: date
    is_active: bool
    created_at: datetime | None


class TaskResponse(CamelModel):
    id: str
    project_id: str
    title: str
    description: str | None
    scheduled_date: datetime
    is_completed: bool
    priority: str
    estimated_time: str | None
    task_type: str
    tier: int
    recurring_day: int | None


class ProgressResponse(CamelModel):
    total: int
    completed: int
    remaining: int
    percent: int


class CreateProjectResponse(CamelModel):
    project: ProjectResponse
    tasks_count: int


class ProjectDetailResponse(CamelModel):
    project: ProjectResponse
    tasks: list[TaskResponse]
    progress: ProgressResponse


# === Endpoints ===

@router.post("", response_model=CreateProjectResponse)
def create_project(
    req: CreateProjectRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a project and generate its month of tasks"""
    try:
        project, tasks_count = CreateProjectUseCase(db).execute(
            user_id=user.id,
            name=req.name,
            tier=req.tier,
            start_date=req.start_date,
        )
    except (ValidationError, InvalidTierError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProjectCreationError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return CreateProjectResponse(
        project=ProjectResponse.model_validate(project),
        tasks_count=tasks_count,
    )


@router.get("", response_model=list[ProjectResponse])
def list_projects(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Projects of the current user, newest first"""
    projects = ProjectReadService(db).list_projects(user.id)
    return [ProjectResponse.model_validate(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectDetailResponse)
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Project with its tasks ordered by date"""
    service = ProjectReadService(db)
    try:
        project, tasks = service.get_project_with_tasks(project_id, user_id=user.id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")

    return ProjectDetailResponse(
        project=ProjectResponse.model_validate(project),
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        progress=ProgressResponse(**service.get_progress(tasks)),
    )


@router.delete("/{project_id}")
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a project together with its tasks"""
    try:
        DeleteProjectUseCase(db).execute(project_id, user_id=user.id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"status": "deleted"}


@router.get("/{project_id}/export")
def export_project(
    project_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Download the project month as an .ics file"""
    try:
        filename, ics_text = ExportProjectCalendarUseCase(db).execute(project_id, user_id=user.id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")

    return Response(
        content=ics_text,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
