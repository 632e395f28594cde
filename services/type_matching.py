"""
Move type matching for Schema / Attestation objects

RPC code paths report object types at different qualification levels
("0xpkg::module::Schema", "module::Schema", "...::Schema<...>"), so a type is
matched against a kind through an ordered list of tiers:

    1. EXACT      - equals the fully-qualified struct type
    2. SUFFIX     - ends with "::<Kind>"
    3. SUBSTRING  - contains "::<Kind>"

A looser tier is only consulted when every stricter tier failed for all kinds,
which keeps the kind of a given type string stable.
"""

import logging
from enum import IntEnum
from typing import NamedTuple, Optional

from models.schemas import ObjectKind

# Configure logger for this module
logger = logging.getLogger(__name__)


class MatchTier(IntEnum):
    EXACT = 1
    SUFFIX = 2
    SUBSTRING = 3


class KindMatch(NamedTuple):
    kind: ObjectKind
    tier: MatchTier


def struct_type(package_id: str, module: str, kind: ObjectKind) -> str:
    """Fully-qualified Move struct type for a kind"""
    return f"{package_id}::{module}::{kind.value}"


def match_tier(object_type: Optional[str], expected_type: str, kind: ObjectKind) -> Optional[MatchTier]:
    """
    Return the strictest tier under which object_type matches kind, or None

    Args:
        object_type: Type string reported by the RPC
        expected_type: Fully-qualified struct type for kind
        kind: Kind being matched
    """
    if not object_type:
        return None

    if object_type == expected_type:
        return MatchTier.EXACT

    marker = f"::{kind.value}"
    if object_type.endswith(marker):
        return MatchTier.SUFFIX
    if marker in object_type:
        return MatchTier.SUBSTRING

    return None


def resolve_kind(object_type: Optional[str], package_id: str, module: str) -> Optional[KindMatch]:
    """
    Decide which kind, if any, a type string belongs to

    Tiers are walked in order across all kinds. When several kinds match at the
    same tier (e.g. "m::Attestation<m::Schema>"), the kind whose marker occurs
    first wins, since generic arguments follow the outer struct name.
    """
    if not object_type:
        return None

    for tier in MatchTier:
        candidates = [
            kind for kind in ObjectKind
            if match_tier(object_type, struct_type(package_id, module, kind), kind) == tier
        ]
        if candidates:
            kind = min(candidates, key=lambda k: object_type.find(f"::{k.value}"))
            if tier != MatchTier.EXACT:
                logger.debug(f"Type {object_type} matched {kind.value} by {tier.name.lower()}")
            return KindMatch(kind, tier)

    return None
