from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework import status

from users.models import User
from workspace import activity_verbs as verbs


class WorkspaceApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(
            email="prashant@devflow.com",
            password="12345678",
            name="Prashant",
            role="management",
        )
        self.member = User.objects.create_user(
            email="asha@devflow.com",
            password="asha123",
            name="Asha",
            role="team_member",
        )

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def test_requires_authentication(self):
        resp = self.client.get("/api/workspace/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(resp.json()["success"])

    def test_get_creates_empty_workspace(self):
        self.auth(self.member)
        resp = self.client.get("/api/workspace/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        body = resp.json()
        self.assertTrue(body["success"])
        data = body["data"]
        self.assertEqual(data["teamName"], "DevFlow Team")
        self.assertEqual(data["members"], [])
        self.assertEqual(data["tasks"], [])
        self.assertEqual(data["activityLog"], [])

    def test_member_lifecycle_cascades_tasks(self):
        self.auth(self.manager)
        resp = self.client.post("/api/workspace/members/", {"name": "Asha"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        member_id = resp.json()["data"]["members"][0]["id"]

        resp = self.client.post("/api/workspace/members/", {"name": "ASHA"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.json()["message"], "Member already exists")

        resp = self.client.post(
            "/api/workspace/tasks/",
            {"title": "Fix login", "assignedTo": "Asha", "priority": "High"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        task = resp.json()["data"]["tasks"][0]
        self.assertEqual(task["assignedTo"], "Asha")
        self.assertEqual(task["priority"], "High")
        self.assertFalse(task["done"])

        resp = self.client.delete(f"/api/workspace/members/{member_id}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()["data"]
        self.assertEqual(data["members"], [])
        self.assertEqual(data["tasks"], [])

        actions = [e["action"] for e in data["activityLog"]]
        self.assertEqual(actions, [verbs.MEMBER_REMOVED, verbs.TASK_CREATED, verbs.MEMBER_ADDED])
        self.assertTrue(all(e["actor"] == "Prashant" for e in data["activityLog"]))

    def test_assign_toggle_and_remove_member(self):
        self.auth(self.manager)
        data = self.client.post(
            "/api/workspace/members/", {"name": "Asha"}, format="json"
        ).json()["data"]
        member_id = data["members"][0]["id"]

        data = self.client.post(
            "/api/workspace/tasks/",
            {"title": "Write proposal", "priority": "High", "assignedTo": "Asha"},
            format="json",
        ).json()["data"]
        self.assertEqual(len(data["tasks"]), 1)
        self.assertEqual(data["tasks"][0]["assignedTo"], "Asha")
        self.assertEqual(data["activityLog"][0]["action"], "task_created")
        task_id = data["tasks"][0]["id"]

        data = self.client.patch(f"/api/workspace/tasks/{task_id}/toggle/").json()["data"]
        self.assertTrue(data["tasks"][0]["done"])
        self.assertEqual(data["activityLog"][0]["action"], "task_toggled")

        data = self.client.delete(f"/api/workspace/members/{member_id}/").json()["data"]
        self.assertEqual(data["tasks"], [])
        self.assertEqual(data["activityLog"][0]["action"], "member_removed")

        resp = self.client.get("/api/workspace/tasks/", {"priority": "High"})
        self.assertEqual(resp.json()["meta"]["total"], 0)

    def test_team_member_cannot_manage_members_or_delete_tasks(self):
        self.auth(self.member)
        resp = self.client.post("/api/workspace/members/", {"name": "Ravi"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(resp.json()["success"])

        resp = self.client.post("/api/workspace/tasks/", {"title": "Mine"}, format="json")
        task_id = resp.json()["data"]["tasks"][0]["id"]

        resp = self.client.delete(f"/api/workspace/tasks/{task_id}/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        resp = self.client.get("/api/workspace/activity/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_task_update_toggle_comment_delete(self):
        self.auth(self.member)
        resp = self.client.post("/api/workspace/tasks/", {"title": "Fix login"}, format="json")
        task_id = resp.json()["data"]["tasks"][0]["id"]

        resp = self.client.patch(
            f"/api/workspace/tasks/{task_id}/",
            {"title": "Fix login page", "priority": "Nope", "dueDate": "2025-03-01"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        task = resp.json()["data"]["tasks"][0]
        self.assertEqual(task["title"], "Fix login page")
        self.assertEqual(task["priority"], "Medium")
        self.assertTrue(task["dueDate"].startswith("2025-03-01"))

        resp = self.client.patch(f"/api/workspace/tasks/{task_id}/toggle/")
        self.assertTrue(resp.json()["data"]["tasks"][0]["done"])

        resp = self.client.post(
            f"/api/workspace/tasks/{task_id}/comments/", {"text": "On it"}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        comment = resp.json()["data"]["tasks"][0]["comments"][0]
        self.assertEqual(comment["user"], "Asha")
        self.assertEqual(comment["text"], "On it")

        self.auth(self.manager)
        resp = self.client.delete(f"/api/workspace/tasks/{task_id}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["data"]["tasks"], [])

        resp = self.client.patch(f"/api/workspace/tasks/{task_id}/toggle/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json(), {"success": False, "message": "Task not found"})

    def test_validation_errors_use_envelope(self):
        self.auth(self.member)
        resp = self.client.post("/api/workspace/tasks/", {"title": "  "}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json(), {"success": False, "message": "Task title is required"})

    def test_task_listing_is_paginated(self):
        self.auth(self.member)
        for i in range(12):
            self.client.post("/api/workspace/tasks/", {"title": f"Task {i}"}, format="json")

        resp = self.client.get("/api/workspace/tasks/", {"page": 2, "limit": 5})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        body = resp.json()
        self.assertEqual(len(body["data"]), 5)
        self.assertEqual(body["meta"], {"total": 12, "page": 2, "limit": 5, "totalPages": 3})

        resp = self.client.get("/api/workspace/tasks/", {"q": "task 11"})
        self.assertEqual([t["title"] for t in resp.json()["data"]], ["Task 11"])

    def test_add_message_returns_message_list(self):
        self.auth(self.member)
        resp = self.client.post(
            "/api/workspace/messages/", {"user": "Asha", "text": "Hello team"}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        data = resp.json()["data"]
        self.assertIsInstance(data, list)
        self.assertEqual(data[0]["user"], "Asha")
        self.assertEqual(data[0]["text"], "Hello team")

        resp = self.client.post("/api/workspace/messages/", {"text": "anon"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.get("/api/workspace/messages/")
        self.assertEqual(resp.json()["meta"]["total"], 1)

    def test_activity_log_filter_for_management(self):
        self.auth(self.member)
        self.client.post("/api/workspace/tasks/", {"title": "Fix login"}, format="json")
        self.client.post(
            "/api/workspace/messages/", {"user": "Asha", "text": "done"}, format="json"
        )

        self.auth(self.manager)
        resp = self.client.get("/api/workspace/activity/", {"action": verbs.MESSAGE_SENT})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        body = resp.json()
        self.assertEqual(body["meta"]["total"], 1)
        self.assertEqual(body["data"][0]["details"], "Asha: done")
        self.assertEqual(body["data"][0]["actor"], "Asha")
