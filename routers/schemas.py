"""
Schema Router - create, list and fetch schemas

Provides endpoints for:
1. POST /schemas - Register a schema on-chain
2. GET /schemas - List schemas from history, or by owner
3. GET /schemas/{object_id} - Fetch one schema
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from config import Settings
from models.schemas import CreateObjectResponse, CreateSchemaRequest, Page, Record, SchemaRecord
from routers.dependencies import (
    explorer_link,
    get_app_settings,
    get_attestation_service,
    http_error_for,
    parse_limit,
)
from services import AttestationService
from utils.validation import definition_json_error, is_valid_object_id, is_valid_sui_address, sanitize_text

# Configure logger for this module
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1/schemas", tags=["Schemas"])


@router.post("", response_model=CreateObjectResponse, status_code=status.HTTP_201_CREATED)
async def create_schema(
    request: CreateSchemaRequest,
    service: AttestationService = Depends(get_attestation_service),
    settings: Settings = Depends(get_app_settings)
):
    """
    Register a schema on-chain

    The transaction result is reported even when the created object id
    cannot be resolved; object_id and explorer_link are then null.
    """
    logger.info("=== Schema Creation Request ===")

    name = sanitize_text(request.name)
    description = sanitize_text(request.description)

    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Schema name is required and must be a non-empty string"
        )
    if not description:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Schema description is required and must be a non-empty string"
        )

    json_error = definition_json_error(request.definition_json)
    if json_error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid definition_json: {json_error}"
        )

    try:
        result = await service.create_schema(name, description, request.definition_json)
    except Exception as e:
        raise http_error_for(e, "Failed to create schema")

    logger.info(f"Schema created: digest={result.transaction_digest}, id={result.created_object_id}")

    return CreateObjectResponse(
        message="Schema created successfully",
        transaction_digest=result.transaction_digest,
        object_id=result.created_object_id,
        explorer_link=explorer_link(settings, result.created_object_id)
    )


@router.get("", response_model=Page[Record])
async def list_schemas(
    limit: Optional[str] = None,
    cursor: Optional[str] = None,
    owner: Optional[str] = None,
    retry: bool = False,
    service: AttestationService = Depends(get_attestation_service)
):
    """
    List schemas

    With `owner`, the owned-objects index is used; otherwise schemas are
    discovered from create_schema transactions. `retry` absorbs the delay
    before a freshly created schema shows up in history.
    """
    page_limit = parse_limit(limit)

    if owner is not None and not is_valid_sui_address(owner):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="owner must be a valid Sui address"
        )

    try:
        if owner:
            return await service.list_schemas_by_owner(owner, page_limit, cursor)
        return await service.list_schemas(page_limit, cursor, retry=retry)
    except Exception as e:
        raise http_error_for(e, "Failed to fetch schemas")


@router.get("/{object_id}", response_model=SchemaRecord)
async def get_schema(
    object_id: str,
    service: AttestationService = Depends(get_attestation_service)
):
    if not is_valid_object_id(object_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Sui object ID format"
        )

    try:
        return await service.get_schema_by_id(object_id)
    except Exception as e:
        raise http_error_for(e, f"Failed to fetch schema {object_id}")
