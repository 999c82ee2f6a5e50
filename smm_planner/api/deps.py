"""
FastAPI dependencies (DB session, current user)
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from smm_planner.config import get_settings
from smm_planner.infrastructure.db.session import get_db as _get_db
from smm_planner.infrastructure.db.models import User
from smm_planner.infrastructure.db.repository import SqlAlchemyTaskStore
from smm_planner.application.users import EnsureDemoUserUseCase


# Re-export get_db for convenience
get_db = _get_db


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Logged-in user from the session, otherwise the shared demo account.

    A stale session (user deleted) falls back to the demo account as well.
    """
    user_id = request.session.get("user_id")
    if user_id:
        user = SqlAlchemyTaskStore(db).get_user(user_id)
        if user:
            return user
        request.session.pop("user_id", None)

    return EnsureDemoUserUseCase(db).execute(get_settings().DEMO_USERNAME)
