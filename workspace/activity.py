# devflow-backend/workspace/activity.py
"""
Activity Recorder.

The workspace keeps a bounded audit trail, newest entry first. Every
aggregate mutator records exactly one entry through `record`.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.datetime_utils import format_for_api, now, parse_iso
from .ids import new_id

ACTIVITY_LOG_LIMIT = 500


@dataclass
class ActivityLogEntry:
    id: str
    actor: str
    action: str
    target_type: str
    target_id: str = ""
    details: str = ""
    created_at: datetime = field(default_factory=now)

    def to_document(self) -> dict:
        return {
            "id": self.id,
            "actor": self.actor,
            "action": self.action,
            "targetType": self.target_type,
            "targetId": self.target_id,
            "details": self.details,
            "createdAt": format_for_api(self.created_at),
        }

    @classmethod
    def from_document(cls, doc: dict, fallback_time=None) -> "ActivityLogEntry":
        return cls(
            id=doc["id"],
            actor=doc.get("actor", ""),
            action=doc.get("action", ""),
            target_type=doc.get("targetType", ""),
            target_id=doc.get("targetId") or "",
            details=doc.get("details") or "",
            created_at=parse_iso(doc.get("createdAt")) or fallback_time or now(),
        )


def record(workspace, actor: str, action: str, target_type: str,
           target_id: Optional[str] = "", details: str = "") -> ActivityLogEntry:
    """
    Insert an entry at the front of the workspace's activity log and drop
    the oldest entries beyond ACTIVITY_LOG_LIMIT.
    """
    entry = ActivityLogEntry(
        id=new_id({e.id for e in workspace.activity_log}),
        actor=actor,
        action=action,
        target_type=target_type,
        target_id=target_id or "",
        details=details or "",
    )
    workspace.activity_log.insert(0, entry)

    if len(workspace.activity_log) > ACTIVITY_LOG_LIMIT:
        del workspace.activity_log[ACTIVITY_LOG_LIMIT:]

    return entry
