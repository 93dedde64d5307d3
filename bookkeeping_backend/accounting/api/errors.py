# accounting/api/errors.py

"""
DOMAIN ERROR -> HTTP MAPPING

Single mapping point used by every API view that calls a posting or
reporting service.

Payload: {"detail": <message>, "code": <machine code>}
"""

from rest_framework import status
from rest_framework.response import Response

from accounting.services.exceptions import (
    AccountingConfigurationError,
    AccountingServiceError,
    ConflictError,
    NotFoundError,
)

# First match wins (most specific first).
STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AccountingConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (AccountingServiceError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: AccountingServiceError) -> int:
    for error_cls, http_status in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def domain_error_response(exc: AccountingServiceError) -> Response:
    return Response({"detail": str(exc), "code": exc.code}, status=status_for(exc))
