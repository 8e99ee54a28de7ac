from django.core.management.base import BaseCommand

from workspace.repository import WorkspaceRepository


class Command(BaseCommand):
    help = "Removes legacy placeholder members (and their tasks) from the workspace"

    def handle(self, *args, **options):
        if WorkspaceRepository().purge_legacy_placeholders():
            self.stdout.write(self.style.SUCCESS("Legacy placeholder members removed."))
        else:
            self.stdout.write("Nothing to purge.")
