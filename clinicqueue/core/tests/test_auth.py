"""Tests for Authentication and health endpoints.

Tests cover:
- Login (POST /api/auth/login/)
- Refresh (POST /api/auth/refresh/)
- Me (GET /api/auth/me/)
- Health (GET /api/health/)
- RBAC: tokens contain role info
"""

from __future__ import annotations

from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import TestCase

from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from clinicqueue.core.models import AuditLog, Role, User
from clinicqueue.core.permissions import role_name
from clinicqueue.waitlist.permissions import queue_capabilities


class AuthenticationTest(TestCase):
    """Tests for /api/auth/ endpoints."""

    databases = {"default"}

    def setUp(self):
        self.role_assistant, _ = Role.objects.using("default").get_or_create(
            name="assistant",
            defaults={"label": "Assistenz"},
        )

        self.assistant = User.objects.db_manager("default").create_user(
            username="assistant_auth_test",
            email="assistant_auth@example.com",
            password="SecurePass123!",
            role=self.role_assistant,
        )
        self.inactive_user = User.objects.db_manager("default").create_user(
            username="inactive_auth_test",
            email="inactive_auth@example.com",
            password="SecurePass123!",
            role=self.role_assistant,
            is_active=False,
        )

        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    def _login(self, username="assistant_auth_test", password="SecurePass123!"):
        return self.client.post(
            "/api/auth/login/",
            {"username": username, "password": password},
            format="json",
        )

    # ========== LOGIN TESTS ==========

    def test_login_success_returns_tokens_and_user(self):
        response = self._login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

        user_data = response.data["user"]
        self.assertEqual(user_data["id"], self.assistant.id)
        self.assertEqual(user_data["email"], "assistant_auth@example.com")
        self.assertEqual(user_data["role"]["name"], "assistant")
        self.assertEqual(user_data["queue"], {"view": True, "edit": True, "clear": True})

    def test_login_writes_audit_entry(self):
        self._login()

        entry = AuditLog.objects.get(action="auth_login")
        self.assertEqual(entry.user, self.assistant)
        self.assertEqual(entry.role_name, "assistant")

    def test_access_token_carries_role_claim(self):
        response = self._login()

        token = AccessToken(response.data["access"])
        self.assertEqual(token["role"], "assistant")

    def test_login_wrong_password_returns_401(self):
        response = self._login(password="WrongPassword!")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertNotIn("access", response.data)

    def test_login_inactive_user_returns_401(self):
        response = self._login(username="inactive_auth_test")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(AuditLog.objects.filter(action="auth_login").exists())

    def test_login_missing_password_returns_400(self):
        response = self.client.post(
            "/api/auth/login/",
            {"username": "assistant_auth_test"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    # ========== REFRESH TESTS ==========

    def test_refresh_success_returns_new_access_token(self):
        refresh_token = self._login().data["refresh"]

        response = self.client.post("/api/auth/refresh/", {"refresh": refresh_token}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)

    def test_refresh_invalid_token_returns_401(self):
        response = self.client.post("/api/auth/refresh/", {"refresh": "invalid_token_here"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    # ========== ME ENDPOINT TESTS ==========

    def test_me_with_valid_token_returns_user(self):
        access_token = self._login().data["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], "assistant_auth_test")
        self.assertEqual(response.data["role"]["name"], "assistant")
        self.assertIn("queue", response.data)

    def test_me_without_token_returns_401(self):
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_queue_accessible_with_bearer_token(self):
        access_token = self._login().data["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
        response = self.client.get("/api/queue/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["waiting"], [])


class HealthTest(TestCase):
    """GET /api/health/ needs no authentication."""

    databases = {"default"}

    def setUp(self):
        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    def test_health_ok(self):
        response = self.client.get("/api/health/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "database": "ok"})

    def test_health_reports_database_failure(self):
        with patch("clinicqueue.core.views.connection") as conn:
            conn.cursor.side_effect = DatabaseError("db down")
            response = self.client.get("/api/health/")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {"status": "error", "database": "unreachable"})

    def test_root_liveness(self):
        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)


class QueueCapabilitiesTest(TestCase):
    """Role -> queue rights as reported by /api/auth/me/."""

    databases = {"default"}

    def _user(self, role: str | None) -> User:
        role_obj = None
        if role:
            role_obj, _ = Role.objects.using("default").get_or_create(name=role, defaults={"label": role})
        return User.objects.db_manager("default").create_user(
            username=f"{role or 'none'}_caps",
            email=f"{role or 'none'}_caps@example.com",
            password="SecurePass123!",
            role=role_obj,
        )

    def test_capabilities_per_role(self):
        expected = {
            "admin": {"view": True, "edit": True, "clear": True},
            "assistant": {"view": True, "edit": True, "clear": True},
            "doctor": {"view": True, "edit": True, "clear": False},
            "billing": {"view": True, "edit": False, "clear": False},
            None: {"view": False, "edit": False, "clear": False},
        }
        for role, caps in expected.items():
            with self.subTest(role=role):
                self.assertEqual(queue_capabilities(self._user(role)), caps)

    def test_role_name_of_anonymous_is_none(self):
        self.assertIsNone(role_name(AnonymousUser()))
        self.assertIsNone(role_name(None))
