# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS
- In-memory SQLite (no external services)
- Fast password hashing
- No throttles (API tests hit the same endpoints repeatedly)
- Quiet logging
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, REST_FRAMEWORK  # explicit for Ruff (F405)

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production-use-only-0123456789"

ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
}

RETAIL_STORE_BACKEND = "storage.django_store.DjangoStore"
IDENTITY_PROVIDER = "users.services.identity.JWTIdentityProvider"

LOGGING = {
    **LOGGING,
    "root": {"handlers": ["console"], "level": "CRITICAL"},
}
