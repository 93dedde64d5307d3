# users/management/commands/seed_users.py

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

User = get_user_model()


DEFAULT_PASSWORD = "Pass1234!"  # dev only; change for production

SEED_USERS = [
    (User.ROLE_ADMIN, "admin@example.com", "Ledger", "Admin"),
    (User.ROLE_ACCOUNTANT, "accountant@example.com", "Ledger", "Accountant"),
    (User.ROLE_USER, "viewer@example.com", "Ledger", "Viewer"),
]


class Command(BaseCommand):
    help = "Seed one admin, one accountant and one read-only user (dev only)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default=DEFAULT_PASSWORD,
            help="Password for all seeded users (dev only).",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options["password"]

        created = 0
        updated = 0

        for role, email, first_name, last_name in SEED_USERS:
            user = User.objects.filter(email=email).first()
            if user is None:
                User.objects.create_user(
                    email=email,
                    password=password,
                    role=role,
                    first_name=first_name,
                    last_name=last_name,
                    is_staff=role == User.ROLE_ADMIN,
                )
                created += 1
                continue

            # Corrective re-run: restore role + active flag, reset password.
            if user.role != role or not user.is_active:
                user.role = role
                user.is_active = True
                updated += 1
            user.set_password(password)
            user.save()

        self.stdout.write(
            self.style.SUCCESS(f"Users seeded: {created} created, {updated} updated.")
        )
