# common/api.py

"""
API ERROR NORMALIZATION

Every error leaving the API uses one envelope:

    {"error": {"code": "...", "message": "...", "details": ...}}

Sources:
- DomainError raised by services (orders, products, identity)
- DRF exceptions (validation, authentication, permission, 404, 405, throttling)
- Anything unexpected -> logged, rendered as a generic 500 without internals
- Django-level 404/500 (unknown routes) via handler404 / handler500
"""

from __future__ import annotations

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404, JsonResponse
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from common.exceptions import DomainError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Headers DRF attaches to error responses that clients rely on.
_PASSTHROUGH_HEADERS = ("WWW-Authenticate", "Retry-After", "Allow")

_DRF_ERROR_CODES = (
    (exceptions.ValidationError, "VALIDATION_ERROR"),
    (exceptions.ParseError, "VALIDATION_ERROR"),
    (exceptions.NotAuthenticated, "UNAUTHORIZED"),
    (exceptions.AuthenticationFailed, "UNAUTHORIZED"),
    (exceptions.PermissionDenied, "FORBIDDEN"),
    (exceptions.NotFound, "NOT_FOUND"),
    (exceptions.MethodNotAllowed, "METHOD_NOT_ALLOWED"),
    (exceptions.Throttled, "THROTTLED"),
)


def error_response(
    *, code: str, message: str, http_status: int, details=None
) -> Response:
    body = {"code": code, "message": message}
    if details is not None:
        body["details"] = details
    return Response({"error": body}, status=http_status)


def _code_for(exc: exceptions.APIException) -> str:
    for exc_class, code in _DRF_ERROR_CODES:
        if isinstance(exc, exc_class):
            return code
    return str(getattr(exc, "default_code", "error")).upper()


def api_exception_handler(exc, context):
    """
    REST_FRAMEWORK["EXCEPTION_HANDLER"].

    Never returns None: an unhandled exception becomes a logged 500 instead of
    bubbling up to Django's debug page.
    """
    if isinstance(exc, DomainError):
        set_rollback()
        return error_response(
            code=exc.code,
            message=exc.message,
            http_status=exc.http_status,
            details=exc.details,
        )

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = drf_exception_handler(exc, context)

    if response is None:
        view = context.get("view") if context else None
        logger.exception(
            "Unhandled API error",
            extra={"view": view.__class__.__name__ if view else None},
        )
        set_rollback()
        return error_response(
            code="INTERNAL_ERROR",
            message=INTERNAL_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        message = "Invalid request"
        details = response.data
    else:
        message = str(getattr(exc, "detail", "") or "Request failed")
        details = None

    normalized = error_response(
        code=_code_for(exc),
        message=message,
        http_status=response.status_code,
        details=details,
    )
    for header in _PASSTHROUGH_HEADERS:
        if header in response:
            normalized[header] = response[header]
    return normalized


# =====================================================
# DJANGO-LEVEL HANDLERS (unknown routes, crashes outside DRF)
# =====================================================


def not_found(request, exception=None):
    return JsonResponse(
        {"error": {"code": "NOT_FOUND", "message": "Endpoint not found"}},
        status=status.HTTP_404_NOT_FOUND,
    )


def server_error(request):
    return JsonResponse(
        {"error": {"code": "INTERNAL_ERROR", "message": INTERNAL_ERROR_MESSAGE}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
