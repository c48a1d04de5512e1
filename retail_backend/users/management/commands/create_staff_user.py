"""
PATH: users/management/commands/create_staff_user.py

Create or update a staff account (cashier/admin) for the order API.

- Idempotent: an existing email gets its role/password updated.
- Password may come from --password or STAFF_USER_PASSWORD (never printed).
"""

from __future__ import annotations

import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from permissions.roles import CASHIER_ROLES, ROLE_ADMIN


class Command(BaseCommand):
    help = "Create/update a cashier or admin account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", default=None)
        parser.add_argument("--role", default="cashier", choices=sorted(CASHIER_ROLES))

    def handle(self, *args, **options):
        email = (options["email"] or "").strip()
        password = (options["password"] or os.environ.get("STAFF_USER_PASSWORD") or "").strip()
        role = options["role"]

        if not password:
            raise CommandError("Provide --password or set STAFF_USER_PASSWORD.")

        User = get_user_model()

        with transaction.atomic():
            user = User.objects.filter(email__iexact=email).first()

            if user is None:
                User.objects.create_user(
                    email=email,
                    password=password,
                    role=role,
                    is_staff=role == ROLE_ADMIN,
                )
                self.stdout.write(self.style.SUCCESS(f"Created {role} {email}."))
                return

            user.role = role
            user.is_active = True
            user.is_staff = user.is_staff or role == ROLE_ADMIN
            user.set_password(password)
            user.save(update_fields=["role", "is_active", "is_staff", "password", "updated_at"])
            self.stdout.write(self.style.SUCCESS(f"Updated {role} {email}."))
