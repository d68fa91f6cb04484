"""API tests for authentication endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="faculty@example.com",
            password="StrongPass123",
            first_name="Ada",
            last_name="Lovelace",
            department="Mathematics",
        )

    def test_token_obtain_with_email(self) -> None:
        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "faculty@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)

    def test_token_rejects_wrong_password(self) -> None:
        response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "faculty@example.com", "password": "wrong"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_returns_profile_for_bearer_token(self) -> None:
        token = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "faculty@example.com", "password": "StrongPass123"},
            format="json",
        ).data["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get(reverse("user-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["email"], "faculty@example.com")
        self.assertEqual(response.data["role"], User.RoleChoices.FACULTY)
        self.assertEqual(response.data["display_name"], "Ada Lovelace")

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("user-me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UserManagerTests(APITestCase):
    def test_admin_role_gets_staff_flag(self) -> None:
        admin = User.objects.create_user(
            email="admin@example.com",
            password="StrongPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_admin())
        self.assertFalse(admin.is_faculty())

    def test_phone_is_normalized(self) -> None:
        user = User.objects.create_user(
            email="phone@example.com",
            password="StrongPass123",
            phone="+7 700 123-45-67",
        )
        self.assertEqual(user.phone, "+77001234567")
