"""
Shared router plumbing: dependency providers, pagination parsing and
mapping of service exceptions onto HTTP errors
"""

import logging
from typing import Optional

from fastapi import HTTPException, Request, status

from config import Settings
from services import (
    AttestationService,
    ObjectNotFoundError,
    SignerNotConfiguredError,
    UpstreamUnavailableError,
)

# Configure logger for this module
logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100


def get_attestation_service(request: Request) -> AttestationService:
    return request.app.state.attestation_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def explorer_link(settings: Settings, object_id: Optional[str]) -> Optional[str]:
    if not object_id:
        return None
    return f"{settings.explorer_base_url}/object/{object_id}"


def parse_limit(limit: Optional[str]) -> int:
    """Validate the `limit` query parameter (1..100, default 10)"""
    if limit is None or limit == "":
        return DEFAULT_PAGE_LIMIT
    try:
        value = int(limit)
    except ValueError:
        value = 0
    if value < 1 or value > MAX_PAGE_LIMIT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Limit must be a positive integer between 1 and {MAX_PAGE_LIMIT}"
        )
    return value


def http_error_for(error: Exception, action: str) -> HTTPException:
    """
    Translate a service exception into an HTTPException

    Args:
        error: Exception raised by the service layer
        action: Short description used in the response detail
    """
    if isinstance(error, ObjectNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    if isinstance(error, SignerNotConfiguredError):
        logger.error(f"{action}: {str(error)}")
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))

    if isinstance(error, UpstreamUnavailableError):
        logger.error(f"{action}: {str(error)}")
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"{action}: {str(error)}")

    if isinstance(error, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    logger.error(f"{action}: {str(error)}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"{action}: {str(error)}"
    )
