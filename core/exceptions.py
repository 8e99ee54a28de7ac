from contextlib import contextmanager

from django.core.exceptions import PermissionDenied
from django.db import DatabaseError, IntegrityError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
import logging

logger = logging.getLogger("devflow")


# ---- Error taxonomy ---------------------------------------------------


class ValidationError(drf_exceptions.APIException):
    """Malformed or missing required input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid"


class AuthError(drf_exceptions.APIException):
    """Bad credentials, role mismatch, invalid or expired session."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password."
    default_code = "auth_failed"


class ForbiddenError(drf_exceptions.APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden."
    default_code = "forbidden"


class NotFoundError(drf_exceptions.APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(drf_exceptions.APIException):
    """Duplicate email, duplicate member name, or a stale workspace write."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class StorageError(drf_exceptions.APIException):
    """Persistence failure. Transient; the caller may retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Storage is temporarily unavailable, please retry."
    default_code = "storage_unavailable"


# ---- Envelope handler -------------------------------------------------


def _message_from_detail(detail) -> str:
    """
    Flatten DRF error details into one human-readable message.

    Serializer-style dicts become "field: message"; lists are joined.
    """
    if isinstance(detail, dict):
        if "detail" in detail:
            return _message_from_detail(detail["detail"])
        parts = []
        for field, value in detail.items():
            parts.append(f"{field}: {_message_from_detail(value)}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return " ".join(_message_from_detail(item) for item in detail)
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into the envelope every endpoint uses:
    {"success": false, "message": "<human readable>"}

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    if isinstance(exc, Http404):
        exc = NotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = ForbiddenError()

    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        if isinstance(exc, StorageError):
            logger.warning(f"Storage failure surfaced to client: {exc.detail}")
        return Response(
            {
                "success": False,
                "message": _message_from_detail(response.data),
            },
            status=response.status_code,
            headers={
                key: value
                for key, value in response.items()
                if key in ("WWW-Authenticate", "Retry-After")
            },
        )

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "message": "Internal server error.",
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@contextmanager
def storage_errors(operation: str):
    """
    Translate database failures raised inside the block into StorageError.

    IntegrityError is re-raised untouched so callers can map it to a
    domain conflict.
    """
    try:
        yield
    except IntegrityError:
        raise
    except DatabaseError as exc:
        logger.error(f"Storage failure during {operation}: {exc}")
        raise StorageError() from exc
