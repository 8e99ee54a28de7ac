from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from core.permissions import IsManagement, IsManagementForMethods
from core.responses import api_success, page_meta
from .serializers import (
    ActivityLogEntrySerializer,
    MessageSerializer,
    TaskSerializer,
    WorkspaceSerializer,
)
from .services import WorkspaceService


def workspace_response(workspace, status_code=status.HTTP_200_OK):
    return api_success(WorkspaceSerializer(workspace).data, status_code=status_code)


class WorkspaceDetailView(APIView):
    """
    GET /api/workspace/ → the whole workspace
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return workspace_response(WorkspaceService.get_workspace())


class TaskListCreateView(APIView):
    """
    GET  /api/workspace/tasks/?q=&priority=&status=done|undone&assignedTo=&page=&limit=
    POST /api/workspace/tasks/
    Body: {title, description?, priority?, assignedTo?, dueDate?}
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        page = WorkspaceService.query_tasks(request.query_params)
        return api_success(
            TaskSerializer(page.items, many=True).data,
            meta=page_meta(page),
        )

    def post(self, request):
        data = request.data
        workspace = WorkspaceService.add_task(
            request.user,
            title=data.get("title"),
            description=data.get("description"),
            priority=data.get("priority"),
            assigned_to=data.get("assignedTo"),
            due_date=data.get("dueDate"),
        )
        return workspace_response(workspace, status.HTTP_201_CREATED)


class TaskDetailView(APIView):
    """
    PATCH  /api/workspace/tasks/{id}/ → partial update
    DELETE /api/workspace/tasks/{id}/ → management only
    """
    permission_classes = [IsAuthenticated, IsManagementForMethods]
    management_methods = ("DELETE",)

    def patch(self, request, task_id):
        workspace = WorkspaceService.update_task(request.user, task_id, request.data)
        return workspace_response(workspace)

    def delete(self, request, task_id):
        workspace = WorkspaceService.delete_task(request.user, task_id)
        return workspace_response(workspace)


class TaskToggleView(APIView):
    """
    PATCH /api/workspace/tasks/{id}/toggle/
    """
    permission_classes = [IsAuthenticated]

    def patch(self, request, task_id):
        workspace = WorkspaceService.toggle_task(request.user, task_id)
        return workspace_response(workspace)


class TaskCommentCreateView(APIView):
    """
    POST /api/workspace/tasks/{id}/comments/
    Body: {text, user?}  (user defaults to the caller)
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, task_id):
        workspace = WorkspaceService.add_comment(
            request.user,
            task_id,
            request.data.get("text"),
            author=request.data.get("user"),
        )
        return workspace_response(workspace, status.HTTP_201_CREATED)


class MemberCreateView(APIView):
    """
    POST /api/workspace/members/  Body: {name}
    """
    permission_classes = [IsAuthenticated, IsManagement]

    def post(self, request):
        workspace = WorkspaceService.add_member(request.user, request.data.get("name"))
        return workspace_response(workspace, status.HTTP_201_CREATED)


class MemberDetailView(APIView):
    """
    DELETE /api/workspace/members/{id}/ → also deletes tasks assigned to that name
    """
    permission_classes = [IsAuthenticated, IsManagement]

    def delete(self, request, member_id):
        workspace = WorkspaceService.remove_member(request.user, member_id)
        return workspace_response(workspace)


class MessageListCreateView(APIView):
    """
    GET  /api/workspace/messages/?page=&limit= → page 1 is the newest messages
    POST /api/workspace/messages/  Body: {user, text}
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        page = WorkspaceService.query_messages(request.query_params)
        return api_success(
            MessageSerializer(page.items, many=True).data,
            meta=page_meta(page),
        )

    def post(self, request):
        messages = WorkspaceService.add_message(
            request.user,
            request.data.get("user"),
            request.data.get("text"),
        )
        return api_success(
            MessageSerializer(messages, many=True).data,
            status_code=status.HTTP_201_CREATED,
        )


class ActivityLogView(APIView):
    """
    GET /api/workspace/activity/?action=&q=&page=&limit= (management only)
    """
    permission_classes = [IsAuthenticated, IsManagement]

    def get(self, request):
        page = WorkspaceService.query_activity(request.query_params)
        return api_success(
            ActivityLogEntrySerializer(page.items, many=True).data,
            meta=page_meta(page),
        )
