"""
======================================================
PATH: users/tests/test_users.py
======================================================
USER MODEL + ROLE PERMISSION TESTS

GUARANTEES:
- Email is the login identity
- Roles decide who may post to the ledger
"""

from __future__ import annotations

from io import StringIO
from types import SimpleNamespace

from django.contrib.admin import site
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from users.permissions import CanPostOrReadOnly

User = get_user_model()


class UserModelTests(TestCase):
    def test_create_user_normalizes_email_and_defaults_role(self):
        user = User.objects.create_user(email="Clerk@EXAMPLE.com", password="pass1234")

        self.assertEqual(user.email, "Clerk@example.com")
        self.assertEqual(user.role, User.ROLE_USER)
        self.assertTrue(user.check_password("pass1234"))
        self.assertFalse(user.can_post_entries)

    def test_username_fallback_builds_local_email(self):
        user = User.objects.create_user(username="Bob", password="pass1234")
        self.assertEqual(user.email, "bob@local.test")

    def test_create_user_without_identity_fails(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(password="pass1234")

    def test_superuser_is_admin(self):
        admin = User.objects.create_superuser(email="root@example.com", password="pass1234")

        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.can_post_entries)


class CanPostOrReadOnlyTests(TestCase):
    def setUp(self):
        self.permission = CanPostOrReadOnly()
        self.reader = User.objects.create_user(email="reader@example.com", password="x")
        self.accountant = User.objects.create_user(
            email="acc@example.com", password="x", role=User.ROLE_ACCOUNTANT
        )

    def _request(self, user, method):
        return SimpleNamespace(user=user, method=method)

    def test_any_authenticated_user_can_read(self):
        self.assertTrue(self.permission.has_permission(self._request(self.reader, "GET"), None))

    def test_plain_user_cannot_write(self):
        self.assertFalse(self.permission.has_permission(self._request(self.reader, "POST"), None))

    def test_accountant_can_write(self):
        self.assertTrue(
            self.permission.has_permission(self._request(self.accountant, "POST"), None)
        )

    def test_write_access_matches_can_post_entries(self):
        admin = User.objects.create_user(email="boss@example.com", password="x", role=User.ROLE_ADMIN)
        root = User.objects.create_superuser(email="root@example.com", password="x")
        root.role = User.ROLE_USER

        for user in (self.reader, self.accountant, admin, root):
            with self.subTest(user=user.email):
                allowed = self.permission.has_permission(self._request(user, "DELETE"), None)
                self.assertEqual(allowed, user.can_post_entries)

    def test_anonymous_cannot_read(self):
        anonymous = SimpleNamespace(is_authenticated=False)
        self.assertFalse(self.permission.has_permission(self._request(anonymous, "GET"), None))


class SeedUsersCommandTests(TestCase):
    def test_seed_is_idempotent_and_restores_roles(self):
        call_command("seed_users", stdout=StringIO())
        self.assertEqual(User.objects.count(), 3)

        accountant = User.objects.get(email="accountant@example.com")
        self.assertTrue(accountant.can_post_entries)

        accountant.role = User.ROLE_USER
        accountant.save()

        call_command("seed_users", "--password", "Another1!", stdout=StringIO())
        accountant.refresh_from_db()
        self.assertEqual(User.objects.count(), 3)
        self.assertEqual(accountant.role, User.ROLE_ACCOUNTANT)
        self.assertTrue(accountant.check_password("Another1!"))


class UserAdminTests(TestCase):
    def setUp(self):
        self.root = User.objects.create_superuser(email="root@example.com", password="pass1234")
        User.objects.create_user(email="acc@example.com", password="x", role=User.ROLE_ACCOUNTANT)
        self.client.force_login(self.root)

    def test_changelist_shows_roles_and_posting_rights(self):
        res = self.client.get(reverse("admin:users_user_changelist"), {"role__exact": "accountant"})

        self.assertEqual(res.status_code, 200)
        self.assertContains(res, "acc@example.com")
        self.assertNotContains(res, "root@example.com")
        self.assertContains(res, "Can post")

    def test_can_post_column_follows_model(self):
        admin_view = site._registry[User]
        accountant = User.objects.get(email="acc@example.com")
        viewer = User.objects.create_user(email="viewer@example.com", password="x")

        self.assertTrue(admin_view.can_post(accountant))
        self.assertFalse(admin_view.can_post(viewer))
