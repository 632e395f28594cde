"""
Attestation Service - schema & attestation operations on Sui

Builds create_schema / create_attestation move calls, resolves the objects
they create, and lists or fetches existing objects through the scanners.
"""

import asyncio
import logging
from functools import partial
from typing import Awaitable, Callable, List, Optional

from config import Settings
from models.schemas import (
    ZERO_ADDRESS,
    AttestationRecord,
    CreationResult,
    MoveCall,
    ObjectKind,
    Page,
    Record,
    SchemaRecord,
    TransactionArgument,
)
from services.creation_resolver import resolve_created
from services.exceptions import ObjectNotFoundError, TransactionFailedError
from services.gateway import ChainGateway
from services.history_scanner import HistoryScanner
from services.object_classifier import ObjectClassifier
from services.owner_scanner import OwnerScanner
from services.retry import with_retry

# Configure logger for this module
logger = logging.getLogger(__name__)


class AttestationService:
    """
    Schema / Attestation operations against one deployed Move package

    Handles:
    - Creating schemas and attestations and resolving the created object ids
    - Listing objects from transaction history (optionally with retry)
    - Listing objects by owner
    - Fetching single objects by id
    """

    def __init__(
        self,
        gateway: ChainGateway,
        package_id: str,
        module: str,
        schema_gas_budget: int = 10_000_000,
        attestation_gas_budget: int = 15_000_000,
        scan_max_pages: int = 5,
        retry_max_attempts: int = 3,
        retry_delay: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.gateway = gateway
        self.classifier = ObjectClassifier(package_id, module)
        self.history_scanner = HistoryScanner(gateway, self.classifier, max_pages=scan_max_pages)
        self.owner_scanner = OwnerScanner(gateway, self.classifier)
        self.schema_gas_budget = schema_gas_budget
        self.attestation_gas_budget = attestation_gas_budget
        self.retry_max_attempts = retry_max_attempts
        self.retry_delay = retry_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, gateway: ChainGateway, settings: Settings) -> "AttestationService":
        return cls(
            gateway=gateway,
            package_id=settings.MOVE_PACKAGE_ID,
            module=settings.APP_MODULE_NAME,
            schema_gas_budget=settings.SCHEMA_GAS_BUDGET,
            attestation_gas_budget=settings.ATTESTATION_GAS_BUDGET,
            scan_max_pages=settings.SCAN_MAX_PAGES,
            retry_max_attempts=settings.RETRY_MAX_ATTEMPTS,
            retry_delay=settings.RETRY_DELAY_SECONDS
        )

    @property
    def package_id(self) -> str:
        return self.classifier.package_id

    @property
    def module(self) -> str:
        return self.classifier.module

    # =========================================================================
    # Writes
    # =========================================================================

    async def create_schema(
        self,
        name: str,
        description: str,
        definition_json: str
    ) -> CreationResult:
        """
        Register a schema on-chain

        Args:
            name: Schema name
            description: Human readable description
            definition_json: Opaque JSON definition, stored as a string

        Returns:
            CreationResult with the digest and the new Schema id (None if it
            could not be determined)
        """
        logger.info(f"Creating schema '{name}' (definition length {len(definition_json)})")

        move_call = MoveCall(
            package=self.package_id,
            module=self.module,
            function=ObjectKind.SCHEMA.create_function,
            arguments=[
                TransactionArgument(type="string", value=name),
                TransactionArgument(type="string", value=description),
                TransactionArgument(type="string", value=definition_json),
            ],
            gas_budget=self.schema_gas_budget
        )
        return await self._execute(move_call, ObjectKind.SCHEMA)

    async def create_attestation(
        self,
        subject_address: Optional[str],
        data_hash: bytes,
        schema_id: str
    ) -> CreationResult:
        """
        Publish an attestation against an existing schema

        Args:
            subject_address: Address the attestation is about; empty means none
            data_hash: Digest of the attested data (the data itself is never stored)
            schema_id: Schema object id

        Returns:
            CreationResult with the digest and the new Attestation id (None if
            it could not be determined)
        """
        subject = subject_address or ZERO_ADDRESS
        logger.info(f"Creating attestation for schema {schema_id}, subject {subject}")

        move_call = MoveCall(
            package=self.package_id,
            module=self.module,
            function=ObjectKind.ATTESTATION.create_function,
            arguments=[
                TransactionArgument(type="address", value=subject),
                TransactionArgument(type="vector_u8", value=data_hash.hex()),
                TransactionArgument(type="object", value=schema_id),
            ],
            gas_budget=self.attestation_gas_budget
        )
        return await self._execute(move_call, ObjectKind.ATTESTATION)

    async def _execute(self, move_call: MoveCall, kind: ObjectKind) -> CreationResult:
        logger.info(f"Executing transaction for {kind.value}: {move_call.target}")

        result = await self.gateway.submit_transaction(move_call)

        if not result.succeeded:
            error = result.effects.status.error if result.effects and result.effects.status else ""
            logger.error(f"Transaction {result.digest} for {kind.value} failed: {error}")
            raise TransactionFailedError(result.digest, error or "")

        logger.info(f"Transaction successful for {kind.value}. Digest: {result.digest}")
        created_id = resolve_created(result, kind, self.classifier)

        return CreationResult(
            transaction_digest=result.digest,
            created_object_id=created_id
        )

    # =========================================================================
    # Listing
    # =========================================================================

    async def list_schemas(
        self,
        limit: int = 50,
        cursor: Optional[str] = None,
        retry: bool = False
    ) -> Page[Record]:
        return await self._scan_history(ObjectKind.SCHEMA, limit, cursor, retry)

    async def list_attestations(
        self,
        limit: int = 50,
        cursor: Optional[str] = None,
        retry: bool = False
    ) -> Page[Record]:
        return await self._scan_history(ObjectKind.ATTESTATION, limit, cursor, retry)

    async def list_schemas_by_owner(
        self,
        owner: str,
        limit: int = 50,
        cursor: Optional[str] = None
    ) -> Page[Record]:
        return await self.owner_scanner.scan_owned_objects(ObjectKind.SCHEMA, owner, limit, cursor)

    async def list_attestations_by_owner(
        self,
        owner: str,
        limit: int = 50,
        cursor: Optional[str] = None
    ) -> Page[Record]:
        return await self.owner_scanner.scan_owned_objects(ObjectKind.ATTESTATION, owner, limit, cursor)

    async def _scan_history(
        self,
        kind: ObjectKind,
        limit: int,
        cursor: Optional[str],
        retry: bool
    ) -> Page[Record]:
        scan = partial(self.history_scanner.scan_created_objects, kind, limit, cursor)
        if not retry:
            return await scan()
        return await with_retry(
            scan,
            max_attempts=self.retry_max_attempts,
            delay=self.retry_delay,
            sleep=self._sleep
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    async def get_object_by_id(self, object_id: str) -> Record:
        """
        Fetch an object and classify it as whichever kind its type names

        Raises:
            ObjectNotFoundError: If the object is missing, has no content, or
                is not a Schema / Attestation of this package
        """
        obj = await self.gateway.get_object(object_id)
        if obj is None or obj.content is None:
            raise ObjectNotFoundError(object_id)

        kind = self.classifier.kind_of(self.classifier.type_of(obj))
        if kind is None:
            raise ObjectNotFoundError(object_id, "is not a schema or attestation")

        record = self.classifier.classify(kind, obj)
        if record is None:
            raise ObjectNotFoundError(object_id)
        return record

    async def get_schema_by_id(self, object_id: str) -> SchemaRecord:
        return await self._get_of_kind(object_id, ObjectKind.SCHEMA)

    async def get_attestation_by_id(self, object_id: str) -> AttestationRecord:
        return await self._get_of_kind(object_id, ObjectKind.ATTESTATION)

    async def _get_of_kind(self, object_id: str, kind: ObjectKind) -> Record:
        record = await self.get_object_by_id(object_id)
        if record.kind != kind:
            raise ObjectNotFoundError(object_id, f"is not a {kind.value.lower()}")
        return record

    async def get_schemas_by_ids(self, object_ids: List[str]) -> List[SchemaRecord]:
        """Fetch known schema ids; missing or unreadable ones are skipped"""
        logger.info(f"Fetching schemas by IDs: {', '.join(object_ids)}")
        schemas: List[SchemaRecord] = []

        for object_id in object_ids:
            try:
                obj = await self.gateway.get_object(object_id)
            except Exception as e:
                logger.warning(f"Failed to fetch schema {object_id}: {str(e)}")
                continue

            record = self.classifier.classify(ObjectKind.SCHEMA, obj)
            if record is not None:
                schemas.append(record)

        return schemas

    async def resolve_transaction(self, digest: str, kind: ObjectKind) -> CreationResult:
        """Find the object of `kind` created by an already executed transaction"""
        logger.info(f"Resolving created {kind.value} for transaction {digest}")
        result = await self.gateway.get_transaction(digest)
        return CreationResult(
            transaction_digest=result.digest,
            created_object_id=resolve_created(result, kind, self.classifier)
        )
