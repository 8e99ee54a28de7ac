# devflow-backend/workspace/domain.py
"""
Workspace aggregate.

One mutable root owning four embedded collections: members, tasks,
messages and the activity log. Members and tasks are keyed by id
(insertion ordered); messages are kept oldest first, the activity log
newest first.

Tasks reference their assignee by name (`assigned_to` is a plain string,
not a member id). Removing a member deletes the tasks carrying that exact
name; renaming members is not supported.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
import logging

from core.datetime_utils import format_for_api, now, parse_iso
from core.exceptions import ConflictError, NotFoundError, ValidationError
from . import activity_verbs as verbs
from .activity import ActivityLogEntry, record
from .ids import new_id

logger = logging.getLogger("devflow.workspace")

PRIORITY_URGENT = "Urgent"
PRIORITY_HIGH = "High"
PRIORITY_MEDIUM = "Medium"
PRIORITY_LOW = "Low"

VALID_PRIORITIES = (PRIORITY_URGENT, PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)
DEFAULT_PRIORITY = PRIORITY_MEDIUM

UNASSIGNED = "Unassigned"

MESSAGE_PREVIEW_LENGTH = 30


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass
class Member:
    id: str
    name: str

    def to_document(self) -> dict:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_document(cls, doc: dict) -> "Member":
        return cls(id=doc["id"], name=doc.get("name", ""))


@dataclass
class Comment:
    id: str
    author: str
    text: str
    created_at: datetime = field(default_factory=now)

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "user": self.author,
            "text": self.text,
            "createdAt": format_for_api(self.created_at),
        }

    @classmethod
    def from_document(cls, doc: dict, fallback_time=None) -> "Comment":
        return cls(
            id=doc["id"],
            author=doc.get("user", ""),
            text=doc.get("text", ""),
            created_at=parse_iso(doc.get("createdAt")) or fallback_time or now(),
        )


@dataclass
class Task:
    id: str
    title: str
    description: str = ""
    priority: str = DEFAULT_PRIORITY
    done: bool = False
    assigned_to: str = UNASSIGNED
    due_date: Optional[datetime] = None
    comments: List[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=now)

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "done": self.done,
            "assignedTo": self.assigned_to,
            "dueDate": format_for_api(self.due_date),
            "comments": [c.to_document() for c in self.comments],
            "createdAt": format_for_api(self.created_at),
        }

    @classmethod
    def from_document(cls, doc: dict, fallback_time=None) -> "Task":
        return cls(
            id=doc["id"],
            title=doc.get("title", ""),
            description=doc.get("description") or "",
            priority=doc.get("priority") or DEFAULT_PRIORITY,
            done=bool(doc.get("done", False)),
            assigned_to=doc.get("assignedTo") or UNASSIGNED,
            due_date=parse_iso(doc.get("dueDate")),
            comments=[Comment.from_document(c, fallback_time) for c in doc.get("comments") or []],
            created_at=parse_iso(doc.get("createdAt")) or fallback_time or now(),
        )


@dataclass
class Message:
    id: str
    author: str
    text: str
    created_at: datetime = field(default_factory=now)

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "user": self.author,
            "text": self.text,
            "createdAt": format_for_api(self.created_at),
        }

    @classmethod
    def from_document(cls, doc: dict, fallback_time=None) -> "Message":
        return cls(
            id=doc["id"],
            author=doc.get("user", ""),
            text=doc.get("text", ""),
            created_at=parse_iso(doc.get("createdAt")) or fallback_time or now(),
        )


class Workspace:
    """
    The singleton aggregate root.

    Mutators validate input, change the embedded collections and record
    one activity entry. Persisting is the repository's job.
    """

    def __init__(self, id=None, team_name="", team_head="", leader_contact="",
                 members=None, tasks=None, messages=None, activity_log=None,
                 version=0, created_at=None, updated_at=None):
        self.id = id
        self.team_name = team_name
        self.team_head = team_head
        self.leader_contact = leader_contact
        self.members: Dict[str, Member] = {m.id: m for m in members or []}
        self.tasks: Dict[str, Task] = {t.id: t for t in tasks or []}
        self.messages: List[Message] = list(messages or [])
        self.activity_log: List[ActivityLogEntry] = list(activity_log or [])
        self.version = version
        self.created_at = created_at
        self.updated_at = updated_at

    # ---- Views used by serializers ---------------------------------------

    @property
    def member_list(self) -> List[Member]:
        return list(self.members.values())

    @property
    def task_list(self) -> List[Task]:
        return list(self.tasks.values())

    # ---- Lookups ---------------------------------------------------------

    def get_task(self, task_id) -> Task:
        task = self.tasks.get(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def has_member_named(self, name: str) -> bool:
        folded = name.lower()
        return any(m.name.lower() == folded for m in self.members.values())

    # ---- Members ---------------------------------------------------------

    def add_member(self, name, actor: str) -> Member:
        name = _clean(name)
        if not name:
            raise ValidationError("Member name is required")

        if self.has_member_named(name):
            raise ConflictError("Member already exists")

        member = Member(id=new_id(self.members), name=name)
        self.members[member.id] = member
        record(self, actor, verbs.MEMBER_ADDED, verbs.TARGET_MEMBER, "", f"Added member {name}")
        return member

    def remove_member(self, member_id, actor: str) -> Member:
        member = self.members.get(member_id)
        if member is None:
            raise NotFoundError("Member not found")

        del self.members[member_id]

        # Cascade by value: tasks carrying the removed name go too
        orphaned = [t.id for t in self.tasks.values() if t.assigned_to == member.name]
        for task_id in orphaned:
            del self.tasks[task_id]

        record(self, actor, verbs.MEMBER_REMOVED, verbs.TARGET_MEMBER, member_id, member.name)
        logger.info(
            f"Member removed: member={member_id}, cascaded_tasks={len(orphaned)}, actor={actor}"
        )
        return member

    # ---- Tasks -----------------------------------------------------------

    def add_task(self, title, actor: str, description=None, priority=None,
                 assigned_to=None, due_date=None) -> Task:
        title = _clean(title)
        if not title:
            raise ValidationError("Task title is required")

        priority = priority or DEFAULT_PRIORITY
        if priority not in VALID_PRIORITIES:
            raise ValidationError("Invalid priority")

        task = Task(
            id=new_id(self.tasks),
            title=title,
            description=_clean(description),
            priority=priority,
            done=False,
            assigned_to=_clean(assigned_to) or UNASSIGNED,
            # Unparseable due dates are stored as absent
            due_date=parse_iso(due_date) if due_date else None,
        )
        self.tasks[task.id] = task
        record(
            self, actor, verbs.TASK_CREATED, verbs.TARGET_TASK, task.id,
            f"{task.title} -> {task.assigned_to}",
        )
        return task

    def update_task(self, task_id, patch: dict, actor: str) -> Task:
        """
        Apply a partial update. Every key is optional; values that are
        present but invalid are skipped and leave the task as it was.
        Keys: title, description, assigned_to, priority, done, due_date.
        """
        task = self.get_task(task_id)

        title = patch.get("title")
        if isinstance(title, str) and title.strip():
            task.title = title.strip()

        description = patch.get("description")
        if isinstance(description, str):
            task.description = description.strip()

        assigned_to = patch.get("assigned_to")
        if isinstance(assigned_to, str) and assigned_to.strip():
            task.assigned_to = assigned_to.strip()

        priority = patch.get("priority")
        if isinstance(priority, str) and priority in VALID_PRIORITIES:
            task.priority = priority

        done = patch.get("done")
        if isinstance(done, bool):
            task.done = done

        if "due_date" in patch:
            due_date = patch["due_date"]
            if due_date is None or due_date == "":
                task.due_date = None
            else:
                parsed = parse_iso(due_date)
                if parsed is not None:
                    task.due_date = parsed

        record(self, actor, verbs.TASK_UPDATED, verbs.TARGET_TASK, task.id, task.title)
        return task

    def toggle_task(self, task_id, actor: str) -> Task:
        task = self.get_task(task_id)
        task.done = not task.done
        record(
            self, actor, verbs.TASK_TOGGLED, verbs.TARGET_TASK, task.id,
            f"{task.title} -> {'done' if task.done else 'undone'}",
        )
        return task

    def delete_task(self, task_id, actor: str) -> Task:
        task = self.get_task(task_id)
        del self.tasks[task_id]
        record(self, actor, verbs.TASK_DELETED, verbs.TARGET_TASK, task_id, task.title)
        return task

    def add_comment(self, task_id, text, actor: str, author=None) -> Comment:
        text = _clean(text)
        if not text:
            raise ValidationError("Comment text is required")

        task = self.get_task(task_id)
        comment = Comment(
            id=new_id({c.id for c in task.comments}),
            author=_clean(author) or actor,
            text=text,
        )
        task.comments.append(comment)
        record(self, actor, verbs.TASK_COMMENTED, verbs.TARGET_TASK, task.id, task.title)
        return comment

    # ---- Chat ------------------------------------------------------------

    def add_message(self, author, text, actor: str) -> Message:
        author = _clean(author)
        text = _clean(text)
        if not author or not text:
            raise ValidationError("User and text are required")

        message = Message(id=new_id({m.id for m in self.messages}), author=author, text=text)
        self.messages.append(message)
        record(
            self, actor, verbs.MESSAGE_SENT, verbs.TARGET_MESSAGE, "",
            f"{author}: {text[:MESSAGE_PREVIEW_LENGTH]}",
        )
        return message

    # ---- Persistence shape -----------------------------------------------

    def collections_to_document(self) -> dict:
        return {
            "members": [m.to_document() for m in self.members.values()],
            "tasks": [t.to_document() for t in self.tasks.values()],
            "messages": [m.to_document() for m in self.messages],
            "activity_log": [e.to_document() for e in self.activity_log],
        }

    @classmethod
    def from_collections(cls, members, tasks, messages, activity_log, **attrs) -> "Workspace":
        # Entries stored without createdAt take the workspace's creation
        # time, so their sort position is the same on every load
        fallback = attrs.get("created_at")
        return cls(
            members=[Member.from_document(d) for d in members or []],
            tasks=[Task.from_document(d, fallback) for d in tasks or []],
            messages=[Message.from_document(d, fallback) for d in messages or []],
            activity_log=[ActivityLogEntry.from_document(d, fallback) for d in activity_log or []],
            **attrs,
        )
