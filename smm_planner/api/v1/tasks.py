"""
Task API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import StrictBool
from sqlalchemy.orm import Session

from smm_planner.api.deps import get_db, get_current_user
from smm_planner.api.v1.projects import CamelModel, TaskResponse
from smm_planner.application.tasks import ToggleTaskUseCase
from smm_planner.application.errors import NotFoundError
from smm_planner.infrastructure.db.models import User


router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


class UpdateTaskRequest(CamelModel):
    is_completed: StrictBool


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    req: UpdateTaskRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Toggle task completion"""
    try:
        task = ToggleTaskUseCase(db).execute(
            task_id, is_completed=req.is_completed, user_id=user.id,
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskResponse.model_validate(task)
