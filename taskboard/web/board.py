# taskboard/web/board.py
"""
View logic of the task board: splitting tasks into overdue and upcoming,
and choosing the highlight for each row.

All comparisons work on calendar dates, so a task due today is never overdue.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote


def parse_due_date(value: str) -> date:
    """Accepts "2025-01-10" as well as "2025-01-10T09:00:00Z" style values"""
    value = value.strip()
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def days_until_due(task: dict, today: Optional[date] = None) -> int:
    today = today or date.today()
    return (parse_due_date(task["dueDate"]) - today).days


def partition_tasks(tasks: Iterable[dict], today: Optional[date] = None) -> Tuple[List[dict], List[dict]]:
    """Return ``(overdue, upcoming)`` for the active tasks.

    Overdue keeps the incoming order; upcoming is sorted by due date,
    earliest first.
    """
    today = today or date.today()
    overdue, upcoming = [], []
    for task in tasks:
        if task.get("isDeleted"):
            continue
        if parse_due_date(task["dueDate"]) < today:
            overdue.append(task)
        else:
            upcoming.append(task)

    upcoming.sort(key=lambda task: parse_due_date(task["dueDate"]))
    return overdue, upcoming


def row_class(days: int) -> str:
    if days < 0:
        return "overdue"
    if days <= 1:
        return "due-soon-red"
    if days <= 3:
        return "due-soon-yellow"
    return ""


def is_due_today(days: int) -> bool:
    return days == 0


def quote_path(value: str) -> str:
    """Percent-encode one path segment, "/" included"""
    return quote(value, safe="")


def join_assignees(selected: Iterable[str], extra: str = "") -> str:
    """Merge checked names and a free text "A, B" field into the API's comma separated form"""
    names = []
    for name in list(selected) + extra.split(","):
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return ",".join(names)


def format_completed_at(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone().strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return value
