"""
Transaction Router - look up the object a past transaction created
"""

import logging

from fastapi import APIRouter, Depends

from config import Settings
from models.schemas import CreateObjectResponse, ObjectKind
from routers.dependencies import explorer_link, get_app_settings, get_attestation_service, http_error_for
from services import AttestationService

# Configure logger for this module
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1", tags=["Transactions"])


@router.get("/transactions/{digest}", response_model=CreateObjectResponse)
async def resolve_transaction(
    digest: str,
    kind: ObjectKind = ObjectKind.ATTESTATION,
    service: AttestationService = Depends(get_attestation_service),
    settings: Settings = Depends(get_app_settings)
):
    """Resolve the Schema or Attestation created by transaction `digest`"""
    try:
        result = await service.resolve_transaction(digest, kind)
    except Exception as e:
        raise http_error_for(e, f"Failed to resolve transaction {digest}")

    return CreateObjectResponse(
        message=f"Resolved created {kind.value.lower()}" if result.created_object_id
        else f"No created {kind.value.lower()} found",
        transaction_digest=result.transaction_digest,
        object_id=result.created_object_id,
        explorer_link=explorer_link(settings, result.created_object_id)
    )


@router.get("/health")
async def health_check(
    service: AttestationService = Depends(get_attestation_service),
    settings: Settings = Depends(get_app_settings)
):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "Sui Attestation Service",
        "network": settings.SUI_NETWORK,
        "package_id": service.package_id,
        "module": service.module
    }
