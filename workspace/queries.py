# devflow-backend/workspace/queries.py
"""
Query/Pagination Engine.

Pure functions over an already-loaded Workspace: filter, sort and window
the embedded collections. Nothing here touches the database.
"""
from collections import namedtuple
import math
import re

from .domain import VALID_PRIORITIES

DEFAULT_TASK_LIMIT = 10
DEFAULT_MESSAGE_LIMIT = 30
DEFAULT_ACTIVITY_LIMIT = 20

STATUS_DONE = "done"
STATUS_UNDONE = "undone"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Page = namedtuple("Page", ["items", "total", "page", "limit", "total_pages"])


def parse_positive_int(value, fallback: int) -> int:
    """
    Query-string integer. Only the leading digits count, so "2.5" reads as
    2 and "10abc" as 10. Anything without leading digits, or not positive,
    falls back.
    """
    if value is None or isinstance(value, bool):
        return fallback
    match = _LEADING_INT.match(str(value))
    if match is None:
        return fallback
    parsed = int(match.group(1))
    return parsed if parsed > 0 else fallback


def _window(total: int, page, limit, default_limit: int):
    """Resolve (page, limit, total_pages) with the page clamped to the last one."""
    page = parse_positive_int(page, 1)
    limit = parse_positive_int(limit, default_limit)
    total_pages = max(1, math.ceil(total / limit))
    return min(page, total_pages), limit, total_pages


def paginate(items: list, page=None, limit=None, default_limit: int = DEFAULT_TASK_LIMIT) -> Page:
    """Front-to-back paging: page 1 is the head of `items`."""
    total = len(items)
    page, limit, total_pages = _window(total, page, limit, default_limit)
    start = (page - 1) * limit
    return Page(items[start:start + limit], total, page, limit, total_pages)


def _text(value) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def query_tasks(workspace, q=None, priority=None, status=None, assigned_to=None,
                page=None, limit=None) -> Page:
    """
    Filters (all optional, combined with AND):
    - q: case-insensitive substring of title, description or assignee
    - priority: exact match; unknown values are ignored
    - status: "done" / "undone"
    - assigned_to: case-insensitive exact assignee name
    Newest task first.
    """
    tasks = workspace.task_list

    needle = _text(q)
    if needle:
        tasks = [
            t for t in tasks
            if needle in t.title.lower()
            or needle in t.description.lower()
            or needle in t.assigned_to.lower()
        ]

    if priority in VALID_PRIORITIES:
        tasks = [t for t in tasks if t.priority == priority]

    if status == STATUS_DONE:
        tasks = [t for t in tasks if t.done]
    elif status == STATUS_UNDONE:
        tasks = [t for t in tasks if not t.done]

    assignee = _text(assigned_to)
    if assignee:
        tasks = [t for t in tasks if t.assigned_to.lower() == assignee]

    tasks = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    return paginate(tasks, page, limit, DEFAULT_TASK_LIMIT)


def query_messages(workspace, page=None, limit=None) -> Page:
    """
    Back-to-front paging: page 1 holds the newest `limit` messages, each
    page in chronological order.
    """
    messages = workspace.messages
    total = len(messages)
    page, limit, total_pages = _window(total, page, limit, DEFAULT_MESSAGE_LIMIT)
    start = max(0, total - page * limit)
    end = total - (page - 1) * limit
    return Page(messages[start:end], total, page, limit, total_pages)


def query_activity(workspace, action=None, q=None, page=None, limit=None) -> Page:
    """
    Filters: exact action code and/or substring of actor, details or target
    type, all case-insensitive. The log is stored newest first.
    """
    entries = workspace.activity_log

    code = _text(action)
    if code:
        entries = [e for e in entries if e.action.lower() == code]

    needle = _text(q)
    if needle:
        entries = [
            e for e in entries
            if needle in e.actor.lower()
            or needle in e.details.lower()
            or needle in e.target_type.lower()
        ]

    return paginate(entries, page, limit, DEFAULT_ACTIVITY_LIMIT)
