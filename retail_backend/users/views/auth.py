"""
USER AUTH VIEWS

- Staff login only: cashier/admin receive tokens, other roles get 403.
- Login is AllowAny with no authentication classes, so a stale token in the
  client never blocks signing in again.
"""

from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from common.exceptions import ForbiddenError, UnauthorizedError
from permissions.roles import is_cashier_role
from users.serializers import LoginResponseSerializer, LoginSerializer, UserSerializer
from users.services.identity import issue_tokens_for

logger = logging.getLogger(__name__)


class LoginAnonThrottle(AnonRateThrottle):
    """
    Anonymous login throttling.
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['anon'].
    """

    scope = "anon"


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [LoginAnonThrottle]
    serializer_class = LoginSerializer

    @extend_schema(
        request=LoginSerializer,
        responses={200: LoginResponseSerializer},
        description="Authenticate a cashier or admin with email and password; returns JWT tokens",
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        user = authenticate(request=request, email=email, password=password)

        if user is None:
            logger.warning("Rejected login: bad credentials", extra={"email": email})
            raise UnauthorizedError("Invalid credentials")

        if not is_cashier_role(user.role):
            logger.warning(
                "Rejected login: role not allowed",
                extra={"email": email, "role": user.role},
            )
            raise ForbiddenError("Access denied: cashier or admin role required")

        tokens = issue_tokens_for(user)
        logger.info("Staff login", extra={"user_id": str(user.id), "role": user.role})

        return Response(
            {
                **tokens,
                "user": UserSerializer(user).data,
            }
        )
