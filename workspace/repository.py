# devflow-backend/workspace/repository.py
"""
Persistence for the Workspace aggregate.

Each request gets its own aggregate instance from `load_or_create` and
writes it back whole with `save`. Saves are compare-and-swap on the
document version: if another request saved in between, the write is
rejected with ConflictError instead of silently overwriting it.
"""
from django.conf import settings
from django.db import transaction
from django.db.models import F
import logging

from core.datetime_utils import now
from core.exceptions import ConflictError, storage_errors
from .domain import Workspace
from .migration import purge_legacy_placeholders
from .models import SINGLETON_KEY, WorkspaceDocument

logger = logging.getLogger("devflow.workspace")


def _defaults() -> dict:
    return {
        "team_name": settings.WORKSPACE_TEAM_NAME,
        "team_head": settings.WORKSPACE_TEAM_HEAD,
        "leader_contact": settings.WORKSPACE_LEADER_CONTACT,
        "members": [],
        "tasks": [],
        "messages": [],
        "activity_log": [],
    }


class WorkspaceRepository:

    def load_or_create(self) -> Workspace:
        with storage_errors("workspace load"):
            document, created = WorkspaceDocument.objects.get_or_create(
                key=SINGLETON_KEY,
                defaults=_defaults(),
            )
        if created:
            logger.info("Created empty workspace")
        return self.to_aggregate(document)

    def save(self, workspace: Workspace) -> Workspace:
        fields = workspace.collections_to_document()
        updated_at = now()

        with storage_errors("workspace save"):
            updated = WorkspaceDocument.objects.filter(
                pk=workspace.id,
                version=workspace.version,
            ).update(
                version=F("version") + 1,
                updated_at=updated_at,
                **fields,
            )

        if not updated:
            logger.warning(f"Stale workspace write rejected: loaded_version={workspace.version}")
            raise ConflictError("Workspace was modified by another request, please retry")

        workspace.version += 1
        workspace.updated_at = updated_at
        return workspace

    def purge_legacy_placeholders(self) -> bool:
        """
        Run the legacy placeholder cleanup against the stored document.
        Returns True if anything was removed.
        """
        with storage_errors("legacy placeholder purge"), transaction.atomic():
            document = (
                WorkspaceDocument.objects
                .select_for_update()
                .filter(key=SINGLETON_KEY)
                .first()
            )
            if document is None:
                return False

            members, tasks, changed = purge_legacy_placeholders(document.members, document.tasks)
            if not changed:
                return False

            removed_tasks = len(document.tasks) - len(tasks)
            document.members = members
            document.tasks = tasks
            document.version += 1
            document.save(update_fields=["members", "tasks", "version", "updated_at"])

        logger.info(f"Purged legacy placeholder members and {removed_tasks} of their tasks")
        return True

    @staticmethod
    def to_aggregate(document: WorkspaceDocument) -> Workspace:
        return Workspace.from_collections(
            document.members,
            document.tasks,
            document.messages,
            document.activity_log,
            id=document.pk,
            team_name=document.team_name,
            team_head=document.team_head,
            leader_contact=document.leader_contact,
            version=document.version,
            created_at=document.created_at,
            updated_at=document.updated_at,
        )
