"""
Attestation Router - create, list and fetch attestations

Provides endpoints for:
1. POST /attestations - Hash the attested data and publish an attestation
2. GET /attestations - List attestations from history, or by owner
3. GET /attestations/{object_id} - Fetch one attestation
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from config import Settings
from models.schemas import (
    AttestationRecord,
    CreateAttestationRequest,
    CreateAttestationResponse,
    Page,
    Record,
)
from routers.dependencies import (
    explorer_link,
    get_app_settings,
    get_attestation_service,
    http_error_for,
    parse_limit,
)
from services import AttestationService, ObjectNotFoundError
from utils.hashing import sha256_hash
from utils.validation import is_valid_object_id, is_valid_sui_address

# Configure logger for this module
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1/attestations", tags=["Attestations"])


@router.post("", response_model=CreateAttestationResponse, status_code=status.HTTP_201_CREATED)
async def create_attestation(
    request: CreateAttestationRequest,
    service: AttestationService = Depends(get_attestation_service),
    settings: Settings = Depends(get_app_settings)
):
    """
    Publish an attestation

    Only the sha256 of data_to_attest goes on-chain. The referenced schema
    must exist before the transaction is submitted.
    """
    logger.info("=== Attestation Creation Request ===")
    logger.info(f"Schema: {request.schema_object_id}, has subject: {bool(request.subject_address)}")

    if not request.data_to_attest or not request.data_to_attest.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="data_to_attest must be a non-empty string"
        )
    if not is_valid_sui_address(request.schema_object_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="schema_object_id must be a valid Sui Object ID"
        )
    if request.subject_address and not is_valid_sui_address(request.subject_address):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="subject_address must be a valid Sui address if provided"
        )

    try:
        await service.get_schema_by_id(request.schema_object_id)
    except ObjectNotFoundError:
        logger.warning(f"Schema validation failed for {request.schema_object_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Schema with ID {request.schema_object_id} not found or inaccessible"
        )
    except Exception as e:
        raise http_error_for(e, "Failed to validate schema")

    data_hash = sha256_hash(request.data_to_attest)
    logger.info(f"Creating attestation with data hash: 0x{data_hash.hex()}")

    try:
        result = await service.create_attestation(
            request.subject_address,
            data_hash,
            request.schema_object_id
        )
    except Exception as e:
        raise http_error_for(e, "Failed to create attestation")

    logger.info(f"Attestation created: digest={result.transaction_digest}, id={result.created_object_id}")

    return CreateAttestationResponse(
        message="Attestation created successfully",
        transaction_digest=result.transaction_digest,
        object_id=result.created_object_id,
        explorer_link=explorer_link(settings, result.created_object_id),
        data_hash=f"0x{data_hash.hex()}",
        schema_id=request.schema_object_id,
        subject_address=request.subject_address or None
    )


@router.get("", response_model=Page[Record])
async def list_attestations(
    limit: Optional[str] = None,
    cursor: Optional[str] = None,
    owner: Optional[str] = None,
    retry: bool = False,
    service: AttestationService = Depends(get_attestation_service)
):
    page_limit = parse_limit(limit)

    if owner is not None and not is_valid_sui_address(owner):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="owner must be a valid Sui address"
        )

    try:
        if owner:
            return await service.list_attestations_by_owner(owner, page_limit, cursor)
        return await service.list_attestations(page_limit, cursor, retry=retry)
    except Exception as e:
        raise http_error_for(e, "Failed to fetch attestations")


@router.get("/{object_id}", response_model=AttestationRecord)
async def get_attestation(
    object_id: str,
    service: AttestationService = Depends(get_attestation_service)
):
    if not is_valid_object_id(object_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Sui object ID format"
        )

    try:
        return await service.get_attestation_by_id(object_id)
    except Exception as e:
        raise http_error_for(e, f"Failed to fetch attestation {object_id}")
