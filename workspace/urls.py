from django.urls import path
from .views import (
    WorkspaceDetailView,
    TaskListCreateView,
    TaskDetailView,
    TaskToggleView,
    TaskCommentCreateView,
    MemberCreateView,
    MemberDetailView,
    MessageListCreateView,
    ActivityLogView,
)

urlpatterns = [
    path("", WorkspaceDetailView.as_view(), name="workspace-detail"),
    path("tasks/", TaskListCreateView.as_view(), name="workspace-tasks"),
    path("tasks/<str:task_id>/", TaskDetailView.as_view(), name="workspace-task-detail"),
    path("tasks/<str:task_id>/toggle/", TaskToggleView.as_view(), name="workspace-task-toggle"),
    path("tasks/<str:task_id>/comments/", TaskCommentCreateView.as_view(), name="workspace-task-comments"),
    path("members/", MemberCreateView.as_view(), name="workspace-members"),
    path("members/<str:member_id>/", MemberDetailView.as_view(), name="workspace-member-detail"),
    path("messages/", MessageListCreateView.as_view(), name="workspace-messages"),
    path("activity/", ActivityLogView.as_view(), name="workspace-activity"),
]
