"""
Create tables (without Alembic) and the demo account.
Run:  python init_db.py
Production databases should use `alembic upgrade head` instead.
"""
from smm_planner.config import get_settings
from smm_planner.infrastructure.db.session import Base, get_engine, get_session_factory
from smm_planner.infrastructure.db import models  # noqa: F401
from smm_planner.application.users import EnsureDemoUserUseCase

Base.metadata.create_all(get_engine())
print("Tables created")

db = get_session_factory()()
try:
    user = EnsureDemoUserUseCase(db).execute(get_settings().DEMO_USERNAME)
    print(f"Demo user: {user.username} (ID: {user.id})")
finally:
    db.close()
