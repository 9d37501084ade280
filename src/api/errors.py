"""Mapping of domain errors to HTTP responses."""

import logging

from fastapi import HTTPException

from domain.model.errors import (
    DomainError,
    GatewayError,
    ImportFormatError,
    NotFoundError,
    RecognitionBusyError,
    RequestInFlightError,
    SessionStateError,
    StorageError,
    UnsupportedCapabilityError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order: subclasses before their bases
_STATUS_CODES: tuple[tuple[type[DomainError], int], ...] = (
    (RequestInFlightError, 409),
    (RecognitionBusyError, 409),
    (SessionStateError, 409),
    (NotFoundError, 404),
    (ImportFormatError, 400),
    (ValidationError, 400),
    (GatewayError, 502),
    (UnsupportedCapabilityError, 501),
    (StorageError, 503),
)


def to_http(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTPException, logging it once."""
    status_code = 500
    for error_type, code in _STATUS_CODES:
        if isinstance(error, error_type):
            status_code = code
            break

    log = logger.warning if status_code >= 500 else logger.info
    log("Request failed", extra={
        "error_type": type(error).__name__,
        "status_code": status_code,
        "error": str(error),
    })
    return HTTPException(status_code=status_code, detail=str(error))
