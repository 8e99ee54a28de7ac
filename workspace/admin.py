from django.contrib import admin
from .models import WorkspaceDocument


@admin.register(WorkspaceDocument)
class WorkspaceDocumentAdmin(admin.ModelAdmin):
    list_display = ('team_name', 'team_head', 'version', 'updated_at')
    readonly_fields = ('version', 'created_at', 'updated_at')
