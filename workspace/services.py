from core.constants import UNKNOWN_ACTOR
from .repository import WorkspaceRepository
from . import queries


def actor_name(user) -> str:
    """Name recorded in the activity log for the acting identity."""
    return getattr(user, "name", "") or getattr(user, "email", "") or UNKNOWN_ACTOR


# Request keys -> aggregate patch keys for task updates
TASK_PATCH_FIELDS = {
    "title": "title",
    "description": "description",
    "assignedTo": "assigned_to",
    "priority": "priority",
    "done": "done",
    "dueDate": "due_date",
}


def task_patch(data) -> dict:
    return {
        attr: data[key]
        for key, attr in TASK_PATCH_FIELDS.items()
        if key in data
    }


class WorkspaceService:
    """
    Workspace operations. Every mutator loads the aggregate, applies one
    change (which records its own activity entry) and saves the whole
    document back.
    """

    @staticmethod
    def _mutate(change):
        repository = WorkspaceRepository()
        workspace = repository.load_or_create()
        change(workspace)
        repository.save(workspace)
        return workspace

    @staticmethod
    def get_workspace():
        return WorkspaceRepository().load_or_create()

    # ---- Members ---------------------------------------------------------

    @staticmethod
    def add_member(user, name):
        return WorkspaceService._mutate(
            lambda ws: ws.add_member(name, actor_name(user))
        )

    @staticmethod
    def remove_member(user, member_id):
        return WorkspaceService._mutate(
            lambda ws: ws.remove_member(member_id, actor_name(user))
        )

    # ---- Tasks -----------------------------------------------------------

    @staticmethod
    def add_task(user, title, description=None, priority=None, assigned_to=None, due_date=None):
        return WorkspaceService._mutate(
            lambda ws: ws.add_task(
                title,
                actor_name(user),
                description=description,
                priority=priority,
                assigned_to=assigned_to,
                due_date=due_date,
            )
        )

    @staticmethod
    def update_task(user, task_id, data):
        patch = task_patch(data)
        return WorkspaceService._mutate(
            lambda ws: ws.update_task(task_id, patch, actor_name(user))
        )

    @staticmethod
    def toggle_task(user, task_id):
        return WorkspaceService._mutate(
            lambda ws: ws.toggle_task(task_id, actor_name(user))
        )

    @staticmethod
    def delete_task(user, task_id):
        return WorkspaceService._mutate(
            lambda ws: ws.delete_task(task_id, actor_name(user))
        )

    @staticmethod
    def add_comment(user, task_id, text, author=None):
        return WorkspaceService._mutate(
            lambda ws: ws.add_comment(task_id, text, actor_name(user), author=author)
        )

    # ---- Chat ------------------------------------------------------------

    @staticmethod
    def add_message(user, author, text):
        """Returns only the message collection, not the whole workspace."""
        workspace = WorkspaceService._mutate(
            lambda ws: ws.add_message(author, text, actor_name(user))
        )
        return workspace.messages

    # ---- Queries ---------------------------------------------------------

    @staticmethod
    def query_tasks(params):
        return queries.query_tasks(
            WorkspaceService.get_workspace(),
            q=params.get("q"),
            priority=params.get("priority"),
            status=params.get("status"),
            assigned_to=params.get("assignedTo"),
            page=params.get("page"),
            limit=params.get("limit"),
        )

    @staticmethod
    def query_messages(params):
        return queries.query_messages(
            WorkspaceService.get_workspace(),
            page=params.get("page"),
            limit=params.get("limit"),
        )

    @staticmethod
    def query_activity(params):
        return queries.query_activity(
            WorkspaceService.get_workspace(),
            action=params.get("action"),
            q=params.get("q"),
            page=params.get("page"),
            limit=params.get("limit"),
        )
