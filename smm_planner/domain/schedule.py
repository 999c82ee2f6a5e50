"""
Deterministic monthly schedule generator.

Maps (tier, start date) to the dated tasks of one calendar month. Only the
year and month of the start date matter: every project is anchored to day 1
of the month that contains it. Template days past the end of a short month
are clamped to its last day, never rolled into the next month.

Output order follows the catalog; sorting by date is left to the store.
"""
import calendar
from dataclasses import dataclass
from datetime import date, datetime

from smm_planner.domain.tiers import templates_for_month, validate_tier


@dataclass(frozen=True)
class TaskRecord:
    project_id: str | None
    title: str
    description: str | None
    scheduled_date: datetime
    is_completed: bool
    priority: str
    estimated_time: str | None
    task_type: str
    tier: int
    recurring_day: int | None


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_end(d: date) -> date:
    """Last calendar day of the month containing d."""
    return date(d.year, d.month, days_in_month(d.year, d.month))


def generate_tasks(tier: int, start_date: date, project_id: str | None = None) -> list[TaskRecord]:
    """
    Expand the tier catalog against the month of start_date.

    Raises:
        InvalidTierError: tier is not a catalog key
    """
    validate_tier(tier)
    year, month = start_date.year, start_date.month
    last = days_in_month(year, month)

    return [
        TaskRecord(
            project_id=project_id,
            title=tmpl.title,
            description=tmpl.description,
            scheduled_date=datetime(year, month, min(tmpl.recurring_day, last)),
            is_completed=False,
            priority=tmpl.priority,
            estimated_time=tmpl.estimated_time,
            task_type=tmpl.task_type,
            tier=tier,
            recurring_day=tmpl.recurring_day,
        )
        for tmpl in templates_for_month(tier, year, month)
    ]


def count_tasks_for_month(tier: int, year: int, month: int) -> int:
    return len(templates_for_month(tier, year, month))
