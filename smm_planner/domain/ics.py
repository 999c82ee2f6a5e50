"""
iCalendar (RFC 5545) export - one-way, write-only.

Produces a single VCALENDAR with one VEVENT per item. Every event is one
hour long. A project export appends a "send client completion report"
reminder on the last day of the project month.

Naive datetimes are treated as UTC.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Sequence

from smm_planner.domain.schedule import month_end


DEFAULT_PRODID = "-//Social Media Task Manager//EN"
DEFAULT_UID_DOMAIN = "socialmedia-taskmanager.com"
CALENDAR_DESCRIPTION = "Social Media Marketing Tasks"

EVENT_DURATION = timedelta(hours=1)

ICS_PRIORITY = {"high": "1", "medium": "5", "low": "9"}
ICS_PRIORITY_DEFAULT = "5"

REMINDER_TITLE = "Send client completion report"
REMINDER_DESCRIPTION = "Send client a copy of completed tasks and analytics reports"

CRLF = "\r\n"
MAX_LINE_OCTETS = 75

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 _.-]")


@dataclass(frozen=True)
class CalendarItem:
    id: str
    title: str
    start: datetime
    end: datetime
    description: str | None = None
    priority: str | None = None


def format_utc(dt: datetime) -> str:
    """Compact UTC form YYYYMMDDTHHMMSSZ, second precision."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def format_priority(priority: str | None) -> str:
    return ICS_PRIORITY.get(priority, ICS_PRIORITY_DEFAULT)


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\n")
    )


def fold_line(line: str) -> str:
    """Split a content line into chunks of at most 75 octets."""
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    chunks = []
    current = ""
    size = 0
    limit = MAX_LINE_OCTETS
    for ch in line:
        width = len(ch.encode("utf-8"))
        if size + width > limit:
            chunks.append(current)
            current, size = "", 0
            # continuation lines start with a space
            limit = MAX_LINE_OCTETS - 1
        current += ch
        size += width
    chunks.append(current)
    return (CRLF + " ").join(chunks)


def serialize_calendar(
    items: Iterable[CalendarItem],
    calendar_name: str,
    now: datetime | None = None,
    prodid: str = DEFAULT_PRODID,
    uid_domain: str = DEFAULT_UID_DOMAIN,
) -> str:
    """Render items as a VCALENDAR text blob (CRLF line endings)."""
    stamp = format_utc(now or datetime.now(timezone.utc))

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{prodid}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:{escape_text(calendar_name)}",
        f"X-WR-CALDESC:{CALENDAR_DESCRIPTION}",
    ]

    for item in items:
        lines.extend([
            "BEGIN:VEVENT",
            f"UID:{item.id}@{uid_domain}",
            f"DTSTAMP:{stamp}",
            f"DTSTART:{format_utc(item.start)}",
            f"DTEND:{format_utc(item.end)}",
            f"SUMMARY:{escape_text(item.title)}",
            f"DESCRIPTION:{escape_text(item.description or '')}",
            f"PRIORITY:{format_priority(item.priority)}",
            "STATUS:TENTATIVE",
            "TRANSP:OPAQUE",
            "END:VEVENT",
        ])

    lines.append("END:VCALENDAR")
    return CRLF.join(fold_line(line) for line in lines) + CRLF


def task_to_item(task) -> CalendarItem:
    """Any object with id/title/description/scheduled_date/priority."""
    start = task.scheduled_date
    return CalendarItem(
        id=f"task-{task.id}",
        title=task.title,
        description=task.description,
        start=start,
        end=start + EVENT_DURATION,
        priority=task.priority,
    )


def completion_reminder(project_id: str, start_date: date) -> CalendarItem:
    start = datetime.combine(month_end(start_date), time.min)
    return CalendarItem(
        id=f"reminder-{project_id}",
        title=REMINDER_TITLE,
        description=REMINDER_DESCRIPTION,
        start=start,
        end=start + EVENT_DURATION,
        priority="high",
    )


def build_project_calendar(
    project_name: str,
    project_id: str,
    start_date: date,
    tasks: Sequence,
    now: datetime | None = None,
    prodid: str = DEFAULT_PRODID,
    uid_domain: str = DEFAULT_UID_DOMAIN,
) -> str:
    """Tasks in the given order followed by the month-end reminder."""
    items = [task_to_item(t) for t in tasks]
    items.append(completion_reminder(project_id, start_date))
    return serialize_calendar(
        items, f"{project_name} Tasks", now=now, prodid=prodid, uid_domain=uid_domain,
    )


def export_filename(project_name: str) -> str:
    safe = _UNSAFE_FILENAME_CHARS.sub("_", project_name).strip()
    return f"{safe or 'project'}_tasks.ics"
