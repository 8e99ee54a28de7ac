# users/views.py - Identity API

from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework import status

from authx.views import signup_response
from core.permissions import IsManagement
from core.responses import api_success
from .services import IdentityService


class UserListCreateView(APIView):
    """
    GET  /api/users/ → list every account (management only)
    POST /api/users/ → register, same as /api/users/signup/
    """

    def get_authenticators(self):
        # Django's View.setup() has already attached the raw request
        if self.request.method == "POST":
            return []
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated(), IsManagement()]

    def get(self, request):
        return api_success(IdentityService.list_users())

    def post(self, request):
        return signup_response(request)


class UserDetailView(APIView):
    """
    DELETE /api/users/{id}/ (management only)
    """
    permission_classes = [IsAuthenticated, IsManagement]

    def delete(self, request, user_id):
        IdentityService.delete_user(user_id)
        return api_success(message="User deleted successfully")


class MeView(APIView):
    """
    GET   /api/users/me/ → current profile
    PATCH /api/users/me/ → {name?, phone?, role? (management only)}
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return api_success(IdentityService.get_self(request.user.id))

    def patch(self, request):
        profile = IdentityService.update_self(request.user.id, request.data)
        return api_success(profile, message="Profile updated")


class ChangePasswordView(APIView):
    """
    PATCH /api/users/me/password/
    Body: {"currentPassword": "...", "newPassword": "..."}
    """
    permission_classes = [IsAuthenticated]

    def patch(self, request):
        IdentityService.change_password(
            request.user.id,
            request.data.get("currentPassword"),
            request.data.get("newPassword"),
        )
        return api_success(message="Password changed successfully", status_code=status.HTTP_200_OK)
