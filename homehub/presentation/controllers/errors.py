"""
Error Mapping - Presentation Layer

Translates domain errors raised by the use cases into HTTP errors.
"""

from fastapi import HTTPException, status

from homehub.domain.entities.errors import (
    GatewayError,
    ResourceNotFoundError,
    RoutingError,
    UnknownServiceError,
)
from homehub.shared import get_logger

logger = get_logger(__name__)


def to_http_exception(event: str, error: Exception, **context) -> HTTPException:
    """
    Log ``error`` under ``event`` and build the matching ``HTTPException``.

    Unknown services and missing resources map to 404, other routing
    errors to 400, backend failures to 502 and anything else to 500.
    """
    if isinstance(error, HTTPException):
        return error

    if isinstance(error, (ResourceNotFoundError, UnknownServiceError)):
        logger.warning(event, error=str(error), **context)
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)

    if isinstance(error, RoutingError):
        logger.warning(event, error=str(error), **context)
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=error.message
        )

    if isinstance(error, GatewayError):
        logger.error(event, error=str(error), **context)
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message)

    logger.error(event, error=str(error), exc_info=error, **context)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )
