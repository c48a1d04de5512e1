# users/authentication.py

"""
DRF AUTHENTICATION (Bearer token -> Principal)

- No Authorization header      -> anonymous (public endpoints still work)
- Bearer <token> that verifies -> request.user = Principal(subject_id, email, role)
- Anything else                -> 401 "Invalid token"

authenticate_header() makes DRF answer 401 (not 403) when a protected view is
hit without credentials.
"""

from __future__ import annotations

from dataclasses import dataclass

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from common.exceptions import UnauthorizedError
from users.services.identity import get_identity_provider

AUTH_HEADER_TYPE = "Bearer"


@dataclass(frozen=True)
class Principal:
    subject_id: str
    email: str
    role: str

    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self):
        return self.subject_id

    @property
    def id(self):
        return self.subject_id


class IdentityAuthentication(BaseAuthentication):
    def authenticate(self, request):
        header = get_authorization_header(request).split()
        if not header:
            return None

        if header[0].decode("latin-1").lower() != AUTH_HEADER_TYPE.lower():
            return None

        if len(header) != 2:
            raise exceptions.AuthenticationFailed("Invalid token")

        try:
            token = header[1].decode("utf-8")
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Invalid token")

        provider = get_identity_provider()
        try:
            subject = provider.verify_credential(token)
            role = provider.get_role(subject.subject_id)
        except UnauthorizedError as exc:
            raise exceptions.AuthenticationFailed(exc.message)

        return Principal(subject_id=subject.subject_id, email=subject.email, role=role), token

    def authenticate_header(self, request):
        return f'{AUTH_HEADER_TYPE} realm="api"'
