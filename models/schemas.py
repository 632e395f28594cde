"""
Pydantic models for the Sui Attestation Service

Three groups live here:
1. Chain payloads - JSON-RPC responses from the Sui fullnode (camelCase on the wire)
2. Records - canonical Schema / Attestation records handed to the API layer
3. API request/response bodies
"""

from enum import Enum
from typing import Annotated, Any, Dict, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel


# Zero address stands for "no subject" on attestations
ZERO_ADDRESS = "0x" + "0" * 64


class ObjectKind(str, Enum):
    """Object kinds created by the attestation Move module"""
    SCHEMA = "Schema"
    ATTESTATION = "Attestation"

    @property
    def create_function(self) -> str:
        return f"create_{self.value.lower()}"


class ChangeSource(str, Enum):
    """Where a created object id was found inside a transaction"""
    OBJECT_CHANGES = "object_changes"
    EFFECTS_CREATED = "effects_created"


def _as_str(value: Any) -> Any:
    # u64 values arrive as strings over JSON-RPC, ints elsewhere
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


U64 = Annotated[str, BeforeValidator(_as_str)]


# ============================================================================
# Chain payloads
# ============================================================================

class ChainModel(BaseModel):
    """Base for JSON-RPC payloads: camelCase aliases, unknown keys ignored"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore"
    )


class CreatedChange(ChainModel):
    change_type: Literal["created"] = Field(default="created", alias="type")
    object_id: str
    object_type: Optional[str] = None
    sender: Optional[str] = None
    owner: Optional[Any] = None
    version: Optional[U64] = None
    digest: Optional[str] = None


class MutatedChange(ChainModel):
    change_type: Literal["mutated"] = Field(default="mutated", alias="type")
    object_id: str
    object_type: Optional[str] = None
    previous_version: Optional[U64] = None
    version: Optional[U64] = None


class DeletedChange(ChainModel):
    change_type: Literal["deleted"] = Field(default="deleted", alias="type")
    object_id: str
    object_type: Optional[str] = None
    version: Optional[U64] = None


class OtherChange(ChainModel):
    """published / transferred / wrapped and any tag added upstream later"""
    change_type: str = Field(alias="type")
    object_id: Optional[str] = None
    object_type: Optional[str] = None


def _change_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "change_type", None)
    return tag if tag in ("created", "mutated", "deleted") else "other"


ObjectChange = Annotated[
    Union[
        Annotated[CreatedChange, Tag("created")],
        Annotated[MutatedChange, Tag("mutated")],
        Annotated[DeletedChange, Tag("deleted")],
        Annotated[OtherChange, Tag("other")],
    ],
    Discriminator(_change_tag),
]


class MoveObjectContent(ChainModel):
    data_type: Literal["moveObject"] = "moveObject"
    type: Optional[str] = None
    has_public_transfer: bool = False
    fields: Dict[str, Any] = Field(default_factory=dict)


class PackageContent(ChainModel):
    data_type: Literal["package"] = "package"
    disassembled: Dict[str, Any] = Field(default_factory=dict)


ObjectContent = Annotated[
    Union[MoveObjectContent, PackageContent],
    Field(discriminator="data_type"),
]


class SuiObjectData(ChainModel):
    object_id: str
    version: Optional[U64] = None
    digest: Optional[str] = None
    type: Optional[str] = None
    owner: Optional[Any] = None
    previous_transaction: Optional[str] = None
    content: Optional[ObjectContent] = None


class ObjectResponse(ChainModel):
    """One entry of sui_getObject / suix_getOwnedObjects: data or error"""
    data: Optional[SuiObjectData] = None
    error: Optional[Dict[str, Any]] = None


class ObjectRef(ChainModel):
    object_id: str
    version: Optional[U64] = None
    digest: Optional[str] = None


class OwnedObjectRef(ChainModel):
    owner: Optional[Any] = None
    reference: ObjectRef


class ExecutionStatus(ChainModel):
    status: str
    error: Optional[str] = None


class TransactionEffects(ChainModel):
    status: Optional[ExecutionStatus] = None
    created: List[OwnedObjectRef] = Field(default_factory=list)

    @field_validator("created", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return value or []


class ExecutionResult(ChainModel):
    """Transaction block response with effects and object changes"""
    digest: str
    effects: Optional[TransactionEffects] = None
    object_changes: List[ObjectChange] = Field(default_factory=list)
    timestamp_ms: Optional[U64] = None

    @field_validator("object_changes", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return value or []

    @property
    def succeeded(self) -> bool:
        if self.effects is None or self.effects.status is None:
            return True
        return self.effects.status.status == "success"


class TransactionPage(ChainModel):
    data: List[ExecutionResult] = Field(default_factory=list)
    has_next_page: bool = False
    next_cursor: Optional[str] = None


class ObjectPage(ChainModel):
    data: List[ObjectResponse] = Field(default_factory=list)
    has_next_page: bool = False
    next_cursor: Optional[str] = None


# ============================================================================
# Transaction building
# ============================================================================

class TransactionArgument(BaseModel):
    """Typed move call argument, same shape the frontend signs"""
    type: Literal["string", "address", "vector_u8", "object"]
    value: Any


class MoveCall(BaseModel):
    package: str
    module: str
    function: str
    arguments: List[TransactionArgument] = Field(default_factory=list)
    type_arguments: List[str] = Field(default_factory=list)
    gas_budget: int

    @property
    def target(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"


# ============================================================================
# Records
# ============================================================================

class ObjectRecord(BaseModel):
    """Envelope fields present on every classified object"""
    object_id: str
    type: Optional[str] = None
    owner: Optional[Any] = None
    previous_transaction: Optional[str] = None
    version: Optional[U64] = None
    digest: Optional[str] = None


class SchemaRecord(ObjectRecord):
    kind: Literal[ObjectKind.SCHEMA] = ObjectKind.SCHEMA
    name: Optional[str] = None
    description: Optional[str] = None
    definition_json: Optional[str] = None
    creator: Optional[str] = None
    timestamp: Optional[U64] = None


class AttestationRecord(ObjectRecord):
    kind: Literal[ObjectKind.ATTESTATION] = ObjectKind.ATTESTATION
    subject_address: Optional[str] = None
    data_hash: Optional[Union[List[int], str]] = None
    schema_id: Optional[str] = None
    attestor: Optional[str] = None
    timestamp: Optional[U64] = None

    @property
    def has_subject(self) -> bool:
        return bool(self.subject_address) and self.subject_address != ZERO_ADDRESS


Record = Union[SchemaRecord, AttestationRecord]

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    data: List[T] = Field(default_factory=list)
    has_next_page: bool = False
    next_cursor: Optional[str] = None


class ClassifiedChange(BaseModel):
    """Candidate created object found while scanning one transaction"""
    object_id: str
    object_type: Optional[str] = None
    source: ChangeSource


class CreationResult(BaseModel):
    transaction_digest: str
    created_object_id: Optional[str] = None


# ============================================================================
# API bodies
# ============================================================================

class CreateSchemaRequest(BaseModel):
    name: str
    description: str
    definition_json: str


class CreateAttestationRequest(BaseModel):
    data_to_attest: str
    schema_object_id: str
    subject_address: Optional[str] = None


class CreateObjectResponse(BaseModel):
    message: str
    transaction_digest: str
    object_id: Optional[str] = None
    explorer_link: Optional[str] = None


class CreateAttestationResponse(CreateObjectResponse):
    data_hash: str
    schema_id: str
    subject_address: Optional[str] = None
