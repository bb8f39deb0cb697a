"""Mapping of domain errors to HTTP responses."""

from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from events.domain.errors import DomainError, ErrorCode, ValidationFailedError

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.DUPLICATE_RSVP: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(exc: DomainError) -> Response:
    body: dict[str, Any] = {"success": False, "code": exc.code.value, "error": exc.message}
    if isinstance(exc, ValidationFailedError):
        body["details"] = exc.details
    return Response(body, status=STATUS_BY_CODE[exc.code])


def exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """DRF exception handler that understands domain errors."""
    if isinstance(exc, DomainError):
        return error_response(exc)
    return drf_exception_handler(exc, context)
