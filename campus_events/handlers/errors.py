"""Maps domain errors to HTTP responses.

Installed as the REST framework EXCEPTION_HANDLER. Only the error code, the
user-safe message and, for validation errors, the field name are exposed.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from campus_events.domain.errors import DomainError, ErrorCode, ValidationError

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.REGISTRATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DEADLINE_EXPIRED: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_REGISTRATION: status.HTTP_409_CONFLICT,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.INFRASTRUCTURE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def exception_handler(exc, context):
    if not isinstance(exc, DomainError):
        return drf_exception_handler(exc, context)

    body = {"code": exc.code.value, "message": exc.message}
    if isinstance(exc, ValidationError):
        body["field"] = exc.field
    headers = {"Retry-After": "1"} if exc.retriable else None
    return Response(body, status=STATUS_BY_CODE[exc.code], headers=headers)
