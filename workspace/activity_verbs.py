# devflow-backend/workspace/activity_verbs.py
"""
Workspace activity action codes.

Every activity log entry written by the workspace uses one of these
constants so the log can be filtered by action.
"""

# Members
MEMBER_ADDED = "member_added"
MEMBER_REMOVED = "member_removed"

# Tasks
TASK_CREATED = "task_created"
TASK_UPDATED = "task_updated"
TASK_TOGGLED = "task_toggled"
TASK_DELETED = "task_deleted"
TASK_COMMENTED = "task_commented"

# Chat
MESSAGE_SENT = "message_sent"

# Target type tags
TARGET_MEMBER = "member"
TARGET_TASK = "task"
TARGET_MESSAGE = "message"

# Grouped by category for filtering
VERB_CATEGORIES = {
    "member": [
        MEMBER_ADDED, MEMBER_REMOVED,
    ],
    "task": [
        TASK_CREATED, TASK_UPDATED, TASK_TOGGLED,
        TASK_DELETED, TASK_COMMENTED,
    ],
    "message": [
        MESSAGE_SENT,
    ],
}


def get_all_verbs() -> list:
    """Get all workspace activity verbs."""
    return [verb for verbs in VERB_CATEGORIES.values() for verb in verbs]


def is_valid_verb(verb: str) -> bool:
    """Check if a verb is a known workspace activity verb."""
    return verb in get_all_verbs()
