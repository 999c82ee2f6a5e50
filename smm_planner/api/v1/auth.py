"""
Authentication routes (JSON, session cookie)
"""
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from smm_planner.api.deps import get_db, get_current_user
from smm_planner.application.users import AuthenticateUserUseCase, RegisterUserUseCase
from smm_planner.application.errors import ValidationError
from smm_planner.infrastructure.db.models import User


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


class CredentialsRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    id: str
    username: str


@router.post("/register", response_model=UserResponse)
def register(request: Request, req: CredentialsRequest, db: Session = Depends(get_db)):
    """Create an account and log it in"""
    try:
        user = RegisterUserUseCase(db).execute(req.username, req.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    request.session["user_id"] = user.id
    return UserResponse(id=user.id, username=user.username)


@router.post("/login", response_model=UserResponse)
def login(request: Request, req: CredentialsRequest, db: Session = Depends(get_db)):
    user = AuthenticateUserUseCase(db).execute(req.username, req.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    request.session["user_id"] = user.id
    return UserResponse(id=user.id, username=user.username)


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"status": "logged_out"}


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    """Current account (the demo account when not logged in)"""
    return UserResponse(id=user.id, username=user.username)
