from rest_framework.views import APIView
from rest_framework import status

from core.responses import api_success
from users.services import IdentityService


def signup_response(request):
    """
    Shared by /api/users/signup/ and POST /api/users/.
    Body: {name, email, password, role, phone?}
    """
    data = request.data
    profile = IdentityService.register(
        name=data.get("name"),
        email=data.get("email"),
        password=data.get("password"),
        role=data.get("role"),
        phone=data.get("phone"),
    )
    # NO TOKEN RETURNED ON SIGNUP (KEEP IT SIMPLE)
    return api_success(
        profile,
        message="User created successfully",
        status_code=status.HTTP_201_CREATED,
    )


class SignupView(APIView):
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        return signup_response(request)


class LoginView(APIView):
    """
    POST /api/users/login/
    Body: {email, password, role}
    """
    # allow unauthenticated
    permission_classes = []
    authentication_classes = []

    def post(self, request):
        data = request.data
        profile, token = IdentityService.authenticate(
            email=data.get("email"),
            password=data.get("password"),
            role=data.get("role"),
        )
        return api_success(
            profile,
            message=f"Welcome {profile['name']}",
            token=token,
        )
