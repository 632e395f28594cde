"""
Chain-facing services

The concrete SuiGateway lives in services.sui_gateway and is constructed by the
process entry point; everything exported here depends only on the
ChainGateway protocol.
"""

from services.attestation_service import AttestationService
from services.creation_resolver import resolve_created
from services.exceptions import (
    ObjectNotFoundError,
    SignerNotConfiguredError,
    TransactionFailedError,
    UpstreamUnavailableError,
)
from services.gateway import ChainGateway
from services.history_scanner import HistoryScanner
from services.object_classifier import ObjectClassifier
from services.owner_scanner import OwnerScanner
from services.retry import with_retry

__all__ = [
    "AttestationService",
    "ChainGateway",
    "HistoryScanner",
    "ObjectClassifier",
    "ObjectNotFoundError",
    "OwnerScanner",
    "SignerNotConfiguredError",
    "TransactionFailedError",
    "UpstreamUnavailableError",
    "resolve_created",
    "with_retry",
]
