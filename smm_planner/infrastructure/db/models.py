"""
SQLAlchemy ORM models
"""
import uuid
from datetime import date as date_type, datetime
from sqlalchemy import String, Integer, SmallInteger, Text, TIMESTAMP, Date, DateTime, Boolean, ForeignKey, Index, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from smm_planner.infrastructure.db.session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Account that owns projects"""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )


class ProjectModel(Base):
    """
    One client month: tier + start month.

    tier and start_date are fixed after creation; a different tier means a
    new project.
    """
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    tier: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 1, 2 or 3
    start_date: Mapped[date_type] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    tasks: Mapped[list["TaskModel"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="[TaskModel.scheduled_date, TaskModel.recurring_day, TaskModel.id]",
    )

    __table_args__ = (
        CheckConstraint("tier IN (1, 2, 3)", name="ck_projects_tier"),
    )


class TaskModel(Base):
    """Dated task expanded from a tier template"""
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    scheduled_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")

    priority: Mapped[str] = mapped_column(String(16), nullable=False)  # high/medium/low
    estimated_time: Mapped[str | None] = mapped_column(String(32), nullable=True)
    task_type: Mapped[str] = mapped_column(String(16), nullable=False)  # setup/content/engagement/reporting/ads
    tier: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    recurring_day: Mapped[int | None] = mapped_column(Integer, nullable=True)

    project: Mapped[ProjectModel] = relationship(back_populates="tasks")

    __table_args__ = (
        Index("ix_tasks_project_scheduled", "project_id", "scheduled_date"),
    )
