"""
Object Classifier - turns raw Sui objects into Schema / Attestation records
"""

import logging
from typing import Dict, Optional, Tuple, Type

from pydantic import ValidationError

from models.schemas import (
    AttestationRecord,
    MoveObjectContent,
    ObjectKind,
    PackageContent,
    Record,
    SchemaRecord,
    SuiObjectData,
)
from services.type_matching import MatchTier, resolve_kind, struct_type

# Configure logger for this module
logger = logging.getLogger(__name__)


# Move struct fields copied verbatim into each record type
KIND_FIELDS: Dict[ObjectKind, Tuple[str, ...]] = {
    ObjectKind.SCHEMA: ("name", "description", "definition_json", "creator", "timestamp"),
    ObjectKind.ATTESTATION: ("subject_address", "data_hash", "schema_id", "attestor", "timestamp"),
}

RECORD_TYPES: Dict[ObjectKind, Type[Record]] = {
    ObjectKind.SCHEMA: SchemaRecord,
    ObjectKind.ATTESTATION: AttestationRecord,
}


class ObjectClassifier:
    """
    Decides whether a chain object is a Schema or Attestation of this
    application's Move module and normalizes it into a record.
    """

    def __init__(self, package_id: str, module: str):
        self.package_id = package_id
        self.module = module

    def struct_type(self, kind: ObjectKind) -> str:
        return struct_type(self.package_id, self.module, kind)

    def kind_of(self, object_type: Optional[str]) -> Optional[ObjectKind]:
        resolved = resolve_kind(object_type, self.package_id, self.module)
        return resolved.kind if resolved else None

    def match(self, object_type: Optional[str], kind: ObjectKind) -> Optional[MatchTier]:
        """Tier under which object_type is of kind, None if it is not"""
        resolved = resolve_kind(object_type, self.package_id, self.module)
        if resolved is None or resolved.kind != kind:
            return None
        return resolved.tier

    def type_of(self, obj: SuiObjectData) -> Optional[str]:
        """Object type, taken from Move content when the envelope omits it"""
        if obj.type is None and isinstance(obj.content, MoveObjectContent):
            return obj.content.type
        return obj.type

    def classify(self, kind: ObjectKind, obj: Optional[SuiObjectData]) -> Optional[Record]:
        """
        Normalize a fetched object into a record of the given kind

        Args:
            kind: Expected object kind
            obj: Object data from the gateway (None when the fetch found nothing)

        Returns:
            SchemaRecord / AttestationRecord, or None when the object has no
            content, is not of the expected kind, or its fields do not fit the
            record. Callers skip None.
        """
        if obj is None or obj.content is None:
            return None

        content = obj.content
        object_type = self.type_of(obj)

        if self.match(object_type, kind) is None:
            logger.debug(f"Object {obj.object_id} of type {object_type} is not a {kind.value}")
            return None

        values = {
            "object_id": obj.object_id,
            "type": object_type,
            "owner": obj.owner,
            "previous_transaction": obj.previous_transaction,
            "version": obj.version,
            "digest": obj.digest,
        }

        if isinstance(content, MoveObjectContent):
            for name in KIND_FIELDS[kind]:
                if name in content.fields:
                    values[name] = content.fields[name]
        elif isinstance(content, PackageContent):
            logger.debug(f"Object {obj.object_id} has package content, returning envelope only")

        try:
            return RECORD_TYPES[kind](**values)
        except ValidationError as e:
            logger.warning(f"Object {obj.object_id} of type {object_type} has malformed {kind.value} fields: {str(e)}")
            return None
