import logging

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


# ─── Exceptions ──────────────────────────────────────────────────────────────

class BadRequestError(APIException):
    """Raised when a request is well formed but breaks a business rule
    (illegal state transition, expired or used registration token)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"
    default_code = "bad_request"


class UnauthorizedError(APIException):
    """Raised when credentials are missing, wrong, or belong to a blocked account."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"
    default_code = "unauthorized"


class ForbiddenError(APIException):
    """Raised when the caller is known but the action is not allowed for them."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"
    default_code = "forbidden"


class NotFoundError(APIException):
    """Raised when the addressed record does not exist (or is outside the caller's scope)."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"
    default_code = "not_found"


class ConflictError(APIException):
    """Raised on uniqueness violations: duplicate email, registration number, lead source."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"
    default_code = "conflict"


# ─── Handler ─────────────────────────────────────────────────────────────────

def _flatten_errors(detail, prefix=""):
    if isinstance(detail, dict):
        items = []
        for field, value in detail.items():
            path = f"{prefix}.{field}" if prefix else str(field)
            items.extend(_flatten_errors(value, path))
        return items
    if isinstance(detail, list):
        items = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                items.extend(_flatten_errors(value, f"{prefix}.{index}" if prefix else str(index)))
            else:
                items.append({"field": prefix or "non_field_errors", "message": str(value)})
        return items
    return [{"field": prefix or "non_field_errors", "message": str(detail)}]


def api_exception_handler(exc, context):
    """
    Every error leaves the API as {"error": "<message>"}; validation errors
    also carry a list of {field, message} details.
    """
    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error in %s: %s", context.get("view").__class__.__name__, exc)
        return Response({"error": "Duplicate entry"}, status=status.HTTP_409_CONFLICT)

    if isinstance(exc, ObjectDoesNotExist):
        exc = NotFoundError("Record not found")

    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error in %s", context.get("view").__class__.__name__, exc_info=exc)
        body = {"error": "Internal server error"}
        if settings.DEBUG:
            body["details"] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        response.data = {"error": "Validation error", "details": _flatten_errors(exc.detail)}
        return response

    detail = response.data.get("detail") if isinstance(response.data, dict) else response.data
    response.data = {"error": str(detail)}
    return response
