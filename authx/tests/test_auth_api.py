from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken


class AuthFlowTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def signup(self, **overrides):
        payload = {
            "name": "Asha",
            "email": "asha@devflow.com",
            "password": "asha123",
            "role": "team_member",
        }
        payload.update(overrides)
        return self.client.post("/api/users/signup/", payload, format="json")

    def login(self, email="asha@devflow.com", password="asha123", role="team_member"):
        return self.client.post(
            "/api/users/login/",
            {"email": email, "password": password, "role": role},
            format="json",
        )

    def test_signup_does_not_return_token(self):
        resp = self.signup()
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["data"]["name"], "Asha")
        self.assertNotIn("token", body)

        resp = self.signup(name="Again")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.json(), {"success": False, "message": "Email already registered"})

    def test_signup_missing_fields(self):
        resp = self.signup(password="")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.json()["success"])

    def test_login_returns_token_with_identity_claims(self):
        self.signup()
        resp = self.login()
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        body = resp.json()
        self.assertEqual(body["message"], "Welcome Asha")
        self.assertEqual(body["data"]["role"], "team_member")

        token = AccessToken(body["token"])
        self.assertEqual(token["email"], "asha@devflow.com")
        self.assertEqual(token["role"], "team_member")
        self.assertEqual(token["name"], "Asha")

    def test_login_failures_are_401(self):
        self.signup()
        resp = self.login(password="nope")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(resp.json()["message"], "Invalid email or password")

        resp = self.login(role="management")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_bearer_token_grants_access(self):
        self.signup()
        token = self.login().json()["token"]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        resp = self.client.get("/api/users/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["data"]["email"], "asha@devflow.com")

        resp = self.client.post("/api/workspace/tasks/", {"title": "From token"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        entry = resp.json()["data"]["activityLog"][0]
        self.assertEqual(entry["actor"], "Asha")

        # Token carries the team_member role
        resp = self.client.get("/api/workspace/activity/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_invalid_token_is_401(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        resp = self.client.get("/api/workspace/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(resp.json()["success"])

    def test_health_is_public(self):
        resp = self.client.get("/api/health/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["data"]["status"], "ok")
