"""User accounts: registration, login check, demo fallback account"""
import logging
import secrets

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smm_planner.auth import hash_password, verify_password
from smm_planner.application.errors import ValidationError
from smm_planner.infrastructure.db.models import User
from smm_planner.infrastructure.db.repository import SqlAlchemyTaskStore, TaskStoreRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserValidationError(ValidationError):
    pass


class RegisterUserUseCase:
    def __init__(self, db: Session, store: TaskStoreRepository | None = None):
        self.db = db
        self.store = store or SqlAlchemyTaskStore(db)

    def execute(self, username: str, password: str) -> User:
        username = username.strip()
        if not username:
            raise UserValidationError("Username must not be empty")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise UserValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self.store.get_user_by_username(username):
            raise UserValidationError(f"Username {username!r} is already taken")

        try:
            user = self.store.create_user(username, hash_password(password))
            self.db.commit()
        except IntegrityError as e:
            # concurrent registration won the unique index
            self.db.rollback()
            raise UserValidationError(f"Username {username!r} is already taken") from e
        logger.info("Registered user %s", user.id)
        return user


class AuthenticateUserUseCase:
    def __init__(self, db: Session):
        self.store = SqlAlchemyTaskStore(db)

    def execute(self, username: str, password: str) -> User | None:
        user = self.store.get_user_by_username(username.strip())
        if not user or not verify_password(password, user.password_hash):
            return None
        return user


class EnsureDemoUserUseCase:
    """Account used for requests without a logged-in session."""

    def __init__(self, db: Session, store: TaskStoreRepository | None = None):
        self.db = db
        self.store = store or SqlAlchemyTaskStore(db)

    def execute(self, username: str) -> User:
        user = self.store.get_user_by_username(username)
        if user:
            return user
        # unusable password: the demo account cannot log in
        try:
            user = self.store.create_user(username, hash_password(secrets.token_urlsafe(32)))
            self.db.commit()
        except IntegrityError:
            # created by a concurrent request in the meantime
            self.db.rollback()
            logger.info("Demo user %s already exists, reusing it", username)
            return self.store.get_user_by_username(username)
        logger.info("Created demo user %s", user.id)
        return user
