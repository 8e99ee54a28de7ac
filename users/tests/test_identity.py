from io import StringIO

import bcrypt
from django.contrib.auth.hashers import identify_hasher
from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework import status

from core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from users.models import User
from users.services import IdentityService


class IdentityServiceTest(TestCase):
    def register(self, **overrides):
        data = {
            "name": "Asha",
            "email": "asha@devflow.com",
            "password": "asha123",
            "role": "team_member",
        }
        data.update(overrides)
        return IdentityService.register(**data)

    def test_register_returns_profile_without_password(self):
        profile = self.register(phone=" 98765 ")
        self.assertEqual(profile["email"], "asha@devflow.com")
        self.assertEqual(profile["role"], "team_member")
        self.assertEqual(profile["phone"], "98765")
        self.assertNotIn("password", profile)

        user = User.objects.get(email="asha@devflow.com")
        self.assertTrue(user.check_password("asha123"))

    def test_register_validation(self):
        with self.assertRaises(ValidationError):
            self.register(name="")
        with self.assertRaises(ValidationError):
            self.register(role="admin")
        with self.assertRaises(ValidationError):
            self.register(email="not-an-email")
        with self.assertRaises(ValidationError):
            self.register(phone="1" * 21)
        self.assertFalse(User.objects.exists())

    def test_register_duplicate_email(self):
        self.register()
        with self.assertRaises(ConflictError):
            self.register(name="Other")

    def test_authenticate_issues_token(self):
        self.register()
        profile, token = IdentityService.authenticate("asha@devflow.com", "asha123", "team_member")
        self.assertEqual(profile["name"], "Asha")
        self.assertTrue(token)

    def test_authenticate_failures(self):
        self.register()
        with self.assertRaises(AuthError):
            IdentityService.authenticate("nobody@devflow.com", "asha123", "team_member")
        with self.assertRaises(AuthError):
            IdentityService.authenticate("asha@devflow.com", "wrong", "team_member")
        with self.assertRaises(AuthError):
            IdentityService.authenticate("asha@devflow.com", "asha123", "management")
        with self.assertRaises(ValidationError):
            IdentityService.authenticate("asha@devflow.com", "asha123", "boss")

    def test_legacy_plain_text_password_is_migrated(self):
        user = User.objects.create_user(email="old@devflow.com", password=None, name="Old")
        User.objects.filter(pk=user.pk).update(password="legacy-secret", role="")

        profile, _ = IdentityService.authenticate("old@devflow.com", "legacy-secret", "team_member")
        self.assertEqual(profile["role"], "team_member")

        user.refresh_from_db()
        self.assertEqual(user.role, "team_member")
        self.assertNotEqual(user.password, "legacy-secret")
        identify_hasher(user.password)
        self.assertTrue(user.check_password("legacy-secret"))

    def test_legacy_bcrypt_hash_verifies_real_password(self):
        stored = bcrypt.hashpw(b"old-password", bcrypt.gensalt(rounds=4)).decode()
        user = User.objects.create_user(email="old@devflow.com", password=None, name="Old")
        User.objects.filter(pk=user.pk).update(password=stored, role="")

        # The stored hash itself is not a valid password
        with self.assertRaises(AuthError):
            IdentityService.authenticate("old@devflow.com", stored, "team_member")
        user.refresh_from_db()
        self.assertEqual(user.password, stored)

        profile, token = IdentityService.authenticate("old@devflow.com", "old-password", "team_member")
        self.assertEqual(profile["role"], "team_member")
        self.assertTrue(token)

        user.refresh_from_db()
        self.assertNotEqual(user.password, stored)
        self.assertEqual(identify_hasher(user.password).algorithm, "pbkdf2_sha256")
        self.assertTrue(user.check_password("old-password"))

    def test_legacy_2a_prefix_is_treated_as_bcrypt(self):
        stored = bcrypt.hashpw(b"old-password", bcrypt.gensalt(rounds=4, prefix=b"2a")).decode()
        self.assertTrue(stored.startswith("$2a$"))
        user = User.objects.create_user(email="old2a@devflow.com", password=None, name="Old")
        User.objects.filter(pk=user.pk).update(password=stored)

        with self.assertRaises(AuthError):
            IdentityService.authenticate("old2a@devflow.com", stored, "team_member")
        IdentityService.authenticate("old2a@devflow.com", "old-password", "team_member")

    def test_update_self_ignores_role_for_team_members(self):
        self.register()
        user = User.objects.get(email="asha@devflow.com")

        profile = IdentityService.update_self(user.pk, {
            "name": "  Asha K ",
            "phone": "1" * 25,
            "role": "management",
            "email": "hijack@devflow.com",
        })
        self.assertEqual(profile["name"], "Asha K")
        self.assertEqual(profile["phone"], "")
        self.assertEqual(profile["role"], "team_member")
        self.assertEqual(profile["email"], "asha@devflow.com")

    def test_management_may_change_role(self):
        self.register(role="management")
        user = User.objects.get(email="asha@devflow.com")
        profile = IdentityService.update_self(user.pk, {"role": "team_member"})
        self.assertEqual(profile["role"], "team_member")

    def test_change_password(self):
        self.register()
        user = User.objects.get(email="asha@devflow.com")

        with self.assertRaises(ValidationError):
            IdentityService.change_password(user.pk, "asha123", "short")
        with self.assertRaises(AuthError):
            IdentityService.change_password(user.pk, "wrong", "longenough")

        IdentityService.change_password(user.pk, "asha123", "longenough")
        user.refresh_from_db()
        self.assertTrue(user.check_password("longenough"))

    def test_delete_missing_user(self):
        with self.assertRaises(NotFoundError):
            IdentityService.delete_user(999)


class UsersApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(
            email="prashant@devflow.com", password="12345678",
            name="Prashant", role="management",
        )
        self.member = User.objects.create_user(
            email="aman@devflow.com", password="87654321",
            name="Aman", role="team_member",
        )

    def test_me(self):
        self.client.force_authenticate(user=self.member)
        resp = self.client.get("/api/users/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["data"]["email"], "aman@devflow.com")

        resp = self.client.patch("/api/users/me/", {"phone": "12345"}, format="json")
        self.assertEqual(resp.json()["data"]["phone"], "12345")

    def test_list_and_delete_require_management(self):
        self.client.force_authenticate(user=self.member)
        self.assertEqual(self.client.get("/api/users/").status_code, status.HTTP_403_FORBIDDEN)
        resp = self.client.delete(f"/api/users/{self.manager.pk}/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.manager)
        resp = self.client.get("/api/users/")
        self.assertEqual(len(resp.json()["data"]), 2)

        resp = self.client.delete(f"/api/users/{self.member.pk}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(pk=self.member.pk).exists())

    def test_post_to_users_registers_without_auth(self):
        resp = self.client.post("/api/users/", {
            "name": "Ravi",
            "email": "ravi@devflow.com",
            "password": "ravi123",
            "role": "team_member",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["message"], "User created successfully")

    def test_change_password_endpoint(self):
        self.client.force_authenticate(user=self.member)
        resp = self.client.patch(
            "/api/users/me/password/",
            {"currentPassword": "87654321", "newPassword": "newsecret"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.member.refresh_from_db()
        self.assertTrue(self.member.check_password("newsecret"))


class SeedUsersCommandTest(TestCase):
    def test_seed_users_is_repeatable(self):
        call_command("seed_users", stdout=StringIO())
        call_command("seed_users", stdout=StringIO())

        self.assertEqual(User.objects.count(), 2)
        manager = User.objects.get(role="management")
        self.assertTrue(manager.check_password("12345678"))
