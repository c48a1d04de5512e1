# users/tests/test_auth.py

import os
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from common.exceptions import UnauthorizedError
from users.services.identity import JWTIdentityProvider, issue_tokens_for

User = get_user_model()


class LoginTests(TestCase):
    """
    Staff login.

    GUARANTEES:
    - Cashier/admin receive access + refresh tokens and their identity
    - Bad credentials -> 401, other roles -> 403
    """

    def setUp(self):
        self.client = APIClient()
        self.cashier = User.objects.create_user(
            email="cashier@example.com", password="pass12345", role="cashier"
        )
        self.customer = User.objects.create_user(
            email="customer@example.com", password="pass12345", role="customer"
        )

    def _login(self, email, password):
        return self.client.post(
            "/api/auth/login/", {"email": email, "password": password}, format="json"
        )

    def test_cashier_login(self):
        response = self._login("cashier@example.com", "pass12345")

        self.assertEqual(response.status_code, 200, response.content)
        data = response.json()
        self.assertIn("access", data)
        self.assertIn("refresh", data)
        self.assertEqual(
            data["user"],
            {"id": str(self.cashier.id), "email": "cashier@example.com", "role": "cashier"},
        )

    def test_wrong_password(self):
        response = self._login("cashier@example.com", "wrong")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"]["message"], "Invalid credentials")

    def test_unknown_email(self):
        response = self._login("nobody@example.com", "pass12345")
        self.assertEqual(response.status_code, 401)

    def test_customer_cannot_login(self):
        response = self._login("customer@example.com", "pass12345")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")

    def test_login_validates_payload(self):
        response = self.client.post("/api/auth/login/", {"email": "bad"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.json()["error"]["details"])

    def test_refresh_token(self):
        refresh = self._login("cashier@example.com", "pass12345").json()["refresh"]

        response = self.client.post("/api/auth/jwt/refresh/", {"refresh": refresh}, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertIn("access", response.json())


class MeTests(TestCase):
    """
    GUARANTEES:
    - /me/ reflects the bearer token's identity and current role
    - Missing or broken tokens -> 401
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass12345", role="admin"
        )

    def test_me(self):
        self.client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {issue_tokens_for(self.admin)['access']}"
        )

        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["email"], "admin@example.com")
        self.assertEqual(response.json()["role"], "admin")

    def test_me_without_token(self):
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 401)
        self.assertIn("WWW-Authenticate", response)

    def test_me_with_refresh_token_is_rejected(self):
        self.client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {issue_tokens_for(self.admin)['refresh']}"
        )

        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 401)

    def test_inactive_user_is_rejected(self):
        token = issue_tokens_for(self.admin)["access"]
        self.admin.is_active = False
        self.admin.save()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 401)


class JWTIdentityProviderTests(TestCase):
    def setUp(self):
        self.provider = JWTIdentityProvider()
        self.user = User.objects.create_user(
            email="cashier@example.com", password="pass12345", role="cashier"
        )

    def test_verify_and_role(self):
        subject = self.provider.verify_credential(issue_tokens_for(self.user)["access"])

        self.assertEqual(subject.subject_id, str(self.user.id))
        self.assertEqual(subject.email, "cashier@example.com")
        self.assertEqual(self.provider.get_role(subject.subject_id), "cashier")

    def test_token_without_email_claim_falls_back_to_user(self):
        token = str(AccessToken.for_user(self.user))

        subject = self.provider.verify_credential(token)

        self.assertEqual(subject.email, "cashier@example.com")

    def test_garbage_token(self):
        with self.assertRaises(UnauthorizedError):
            self.provider.verify_credential("garbage")


class CreateStaffUserCommandTests(TestCase):
    def test_creates_then_updates(self):
        out = StringIO()
        call_command(
            "create_staff_user", "--email", "new@example.com", "--password", "pw-12345", stdout=out
        )
        user = User.objects.get(email="new@example.com")
        self.assertEqual(user.role, "cashier")
        self.assertTrue(user.check_password("pw-12345"))

        call_command(
            "create_staff_user",
            "--email", "new@example.com",
            "--password", "pw-67890",
            "--role", "admin",
            stdout=out,
        )
        user.refresh_from_db()
        self.assertEqual(user.role, "admin")
        self.assertTrue(user.is_staff)
        self.assertTrue(user.check_password("pw-67890"))
        self.assertEqual(User.objects.filter(email="new@example.com").count(), 1)

    def test_password_from_environment(self):
        with mock.patch.dict(os.environ, {"STAFF_USER_PASSWORD": "env-pass-1"}):
            call_command("create_staff_user", "--email", "env@example.com", stdout=StringIO())

        self.assertTrue(User.objects.get(email="env@example.com").check_password("env-pass-1"))

    def test_requires_password(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop("STAFF_USER_PASSWORD", None)
            with self.assertRaises(CommandError):
                call_command("create_staff_user", "--email", "x@example.com", stdout=StringIO())
