# accounting/management/commands/seed_standard_chart.py

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounting.models.account import Account

# (code, name, type, is_cash_equivalent)
STANDARD_CHART = [
    ("1000", "Cash", Account.ASSET, True),
    ("1010", "Bank", Account.ASSET, True),
    ("1100", "Accounts Receivable", Account.ASSET, False),
    ("1200", "Inventory", Account.ASSET, False),
    ("1300", "Tax Receivable", Account.ASSET, False),
    ("2100", "Accounts Payable", Account.LIABILITY, False),
    ("2300", "Tax Payable", Account.LIABILITY, False),
    ("3000", "Owner's Equity", Account.EQUITY, False),
    ("3100", "Retained Earnings", Account.EQUITY, False),
    ("4000", "Sales Revenue", Account.REVENUE, False),
    ("5000", "Cost of Goods Sold", Account.EXPENSE, False),
    ("6000", "Operating Expenses", Account.EXPENSE, False),
    ("6100", "Rent Expense", Account.EXPENSE, False),
]


class Command(BaseCommand):
    help = "Seed the standard small-business chart of accounts (idempotent)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding standard Chart of Accounts...")

        created_count = 0
        updated_count = 0

        for code, name, account_type, is_cash in STANDARD_CHART:
            acc, acc_created = Account.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "account_type": account_type,
                    "is_active": True,
                    "is_cash_equivalent": is_cash,
                },
            )

            if acc_created:
                created_count += 1
                continue

            # account_type is immutable once an account exists
            if acc.account_type != account_type:
                raise CommandError(
                    f"Account {code} exists as {acc.account_type}, expected {account_type}"
                )

            needs_update = False
            if acc.name != name:
                acc.name = name
                needs_update = True
            if not acc.is_active:
                acc.is_active = True
                needs_update = True
            if acc.is_cash_equivalent != is_cash:
                acc.is_cash_equivalent = is_cash
                needs_update = True

            if needs_update:
                acc.save(update_fields=["name", "is_active", "is_cash_equivalent", "updated_at"])
                updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Standard chart seeded ({created_count} new accounts, {updated_count} updated)."
            )
        )
