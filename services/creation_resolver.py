"""
Creation Resolver - finds the object created by a schema/attestation transaction
"""

import logging
from typing import Optional

from models.schemas import CreatedChange, ExecutionResult, ObjectKind
from services.object_classifier import ObjectClassifier

# Configure logger for this module
logger = logging.getLogger(__name__)


def resolve_created(
    result: ExecutionResult,
    kind: ObjectKind,
    classifier: ObjectClassifier
) -> Optional[str]:
    """
    Determine the id of the object a creating transaction produced

    Strategies, first success wins:
    1. A "created" object change whose type matches kind
    2. The first reference in effects.created (type is not re-checked)

    Args:
        result: Execution result with object changes and effects
        kind: Kind the transaction was meant to create
        classifier: Classifier bound to the attestation package

    Returns:
        Object id, or None when the transaction succeeded but no created
        object could be identified
    """
    for change in result.object_changes:
        if isinstance(change, CreatedChange) and classifier.match(change.object_type, kind) is not None:
            logger.info(f"Found created {kind.value} from object changes: {change.object_id}")
            return change.object_id

    if result.effects is not None and result.effects.created:
        object_id = result.effects.created[0].reference.object_id
        logger.warning(f"Using effects.created fallback for {kind.value}: {object_id}")
        return object_id

    logger.warning(f"Could not determine created {kind.value} for transaction {result.digest}")
    return None
