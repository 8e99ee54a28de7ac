from django.db import models

SINGLETON_KEY = "default"


class WorkspaceDocument(models.Model):
    """
    Storage row of the Workspace aggregate.

    Exactly one row exists (unique `key`). The embedded collections are
    JSON and always written together; `version` is bumped on every save so
    a stale read-modify-write can be detected.
    """
    key = models.CharField(max_length=32, unique=True, default=SINGLETON_KEY, editable=False)

    team_name = models.CharField(max_length=255)
    team_head = models.CharField(max_length=255)
    leader_contact = models.CharField(max_length=255)

    members = models.JSONField(default=list, blank=True)
    tasks = models.JSONField(default=list, blank=True)
    messages = models.JSONField(default=list, blank=True)
    activity_log = models.JSONField(default=list, blank=True)

    version = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Workspace"

    def __str__(self):
        return f"{self.team_name} (v{self.version})"
