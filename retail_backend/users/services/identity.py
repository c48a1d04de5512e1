# users/services/identity.py

"""
IDENTITY PORT

What the API needs from an identity provider:
- verify_credential(token) -> Subject(subject_id, email)
- get_role(subject_id)     -> role string

Both raise UnauthorizedError when the caller cannot be identified.

JWTIdentityProvider is the default adapter: SimpleJWT access tokens + the
User table for roles. Swap it with settings.IDENTITY_PROVIDER.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.module_loading import import_string
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from common.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_PROVIDER = "users.services.identity.JWTIdentityProvider"

EMAIL_CLAIM = "email"


@dataclass(frozen=True)
class Subject:
    subject_id: str
    email: str


class IdentityProvider(ABC):
    @abstractmethod
    def verify_credential(self, token: str) -> Subject:
        ...

    @abstractmethod
    def get_role(self, subject_id: str) -> str:
        ...


class JWTIdentityProvider(IdentityProvider):
    def _active_user(self, subject_id):
        User = get_user_model()
        try:
            return User.objects.filter(pk=subject_id, is_active=True).first()
        except (ValueError, TypeError, DjangoValidationError):
            return None

    def verify_credential(self, token):
        try:
            access = AccessToken(token)
        except TokenError as exc:
            raise UnauthorizedError("Invalid token") from exc

        subject_id = access.get(jwt_settings.USER_ID_CLAIM)
        if not subject_id:
            raise UnauthorizedError("Invalid token")

        email = access.get(EMAIL_CLAIM)
        if not email:
            user = self._active_user(subject_id)
            if user is None:
                raise UnauthorizedError("Invalid token")
            email = user.email

        return Subject(subject_id=str(subject_id), email=email)

    def get_role(self, subject_id):
        user = self._active_user(subject_id)
        if user is None:
            raise UnauthorizedError("Invalid token")
        return user.role


def issue_tokens_for(user) -> dict:
    refresh = RefreshToken.for_user(user)
    refresh[EMAIL_CLAIM] = user.email
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


def get_identity_provider() -> IdentityProvider:
    backend = getattr(settings, "IDENTITY_PROVIDER", DEFAULT_IDENTITY_PROVIDER)
    return import_string(backend)()
