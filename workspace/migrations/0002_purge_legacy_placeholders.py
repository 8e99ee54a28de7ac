from django.db import migrations

from workspace.migration import purge_legacy_placeholders


def forwards(apps, schema_editor):
    WorkspaceDocument = apps.get_model("workspace", "WorkspaceDocument")
    for document in WorkspaceDocument.objects.all():
        members, tasks, changed = purge_legacy_placeholders(document.members, document.tasks)
        if changed:
            document.members = members
            document.tasks = tasks
            document.version += 1
            document.save(update_fields=["members", "tasks", "version"])


class Migration(migrations.Migration):

    dependencies = [
        ("workspace", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(forwards, migrations.RunPython.noop),
    ]
