"""
======================================================
PATH: users/tests/test_api.py
======================================================
USER API TESTS

GUARANTEES:
- Only admins can list and create users
- New users get the requested role; passwords are never returned
- /me/ returns the caller for any authenticated role
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

User = get_user_model()

USERS_URL = "/api/users/"
ME_URL = "/api/users/me/"


class UserApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass12345", role=User.ROLE_ADMIN
        )
        self.accountant = User.objects.create_user(
            email="acc@example.com", password="pass12345", role=User.ROLE_ACCOUNTANT
        )
        self.viewer = User.objects.create_user(email="viewer@example.com", password="pass12345")

    def _payload(self, **overrides):
        payload = {
            "email": "new.clerk@example.com",
            "password": "Str0ng-Passw0rd!",
            "first_name": "New",
            "last_name": "Clerk",
            "role": User.ROLE_ACCOUNTANT,
        }
        payload.update(overrides)
        return payload

    def test_admin_lists_users(self):
        self.client.force_authenticate(self.admin)
        res = self.client.get(USERS_URL)

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 3)
        emails = [row["email"] for row in res.data["results"]]
        self.assertEqual(emails, sorted(emails))
        self.assertNotIn("password", res.data["results"][0])

    def test_admin_filters_by_role(self):
        self.client.force_authenticate(self.admin)
        res = self.client.get(USERS_URL, {"role": User.ROLE_ACCOUNTANT})

        self.assertEqual(res.status_code, 200)
        self.assertEqual([row["email"] for row in res.data["results"]], ["acc@example.com"])

    def test_admin_creates_accountant(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post(USERS_URL, self._payload(), format="json")

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["role"], User.ROLE_ACCOUNTANT)
        self.assertTrue(res.data["can_post_entries"])
        self.assertNotIn("password", res.data)

        created = User.objects.get(email="new.clerk@example.com")
        self.assertTrue(created.check_password("Str0ng-Passw0rd!"))
        self.assertFalse(created.is_staff)

    def test_created_admin_is_staff(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post(
            USERS_URL, self._payload(email="second.admin@example.com", role=User.ROLE_ADMIN), format="json"
        )

        self.assertEqual(res.status_code, 201)
        self.assertTrue(User.objects.get(email="second.admin@example.com").is_staff)

    def test_duplicate_email_rejected(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post(USERS_URL, self._payload(email="acc@example.com"), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.data)
        self.assertEqual(User.objects.count(), 3)

    def test_unknown_role_rejected(self):
        self.client.force_authenticate(self.admin)
        res = self.client.post(USERS_URL, self._payload(role="owner"), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertIn("role", res.data)

    def test_non_admins_forbidden(self):
        for user in (self.accountant, self.viewer):
            with self.subTest(user=user.email):
                self.client.force_authenticate(user)
                self.assertEqual(self.client.get(USERS_URL).status_code, 403)
                res = self.client.post(USERS_URL, self._payload(), format="json")
                self.assertEqual(res.status_code, 403)

        self.assertFalse(User.objects.filter(email="new.clerk@example.com").exists())

    def test_anonymous_unauthorized(self):
        self.assertEqual(self.client.get(USERS_URL).status_code, 401)
        self.assertEqual(self.client.get(ME_URL).status_code, 401)

    def test_me_returns_current_user(self):
        self.client.force_authenticate(self.viewer)
        res = self.client.get(ME_URL)

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["authenticated"])
        self.assertEqual(res.data["user"]["email"], "viewer@example.com")
        self.assertEqual(res.data["user"]["role"], User.ROLE_USER)
        self.assertFalse(res.data["user"]["can_post_entries"])
