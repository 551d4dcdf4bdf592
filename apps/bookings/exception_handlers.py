"""Translate domain errors into DRF responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from apps.bookings.domain.exceptions import (
    ConflictError,
    DomainError,
    InvalidTransitionError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
)


def domain_exception_handler(exc, context):  # type: ignore
    """DRF ``EXCEPTION_HANDLER``: domain errors first, then DRF defaults."""

    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    http_status = status.HTTP_400_BAD_REQUEST
    for error_type, mapped_status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            http_status = mapped_status
            break

    body = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, ConflictError):
        body["conflicting_booking_ids"] = [str(booking_id) for booking_id in exc.conflicting_booking_ids]

    logger.info("Domain error %s: %s (status=%s)", exc.code, exc.message, http_status)
    return Response(body, status=http_status)
