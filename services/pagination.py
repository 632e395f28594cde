"""Pagination helpers shared by the scanners."""

from typing import Iterable, List, Set

from models.schemas import Record

# Largest page suix_queryTransactionBlocks / suix_getOwnedObjects will serve
MAX_RPC_PAGE_SIZE = 100


def overfetch_limit(limit: int) -> int:
    """Raw transactions to request for `limit` records; some will not qualify."""
    return min(limit * 2, MAX_RPC_PAGE_SIZE)


def unique_by_id(records: Iterable[Record]) -> List[Record]:
    """Drop records whose object id was already seen, keeping first occurrence."""
    seen: Set[str] = set()
    unique: List[Record] = []
    for record in records:
        if record.object_id in seen:
            continue
        seen.add(record.object_id)
        unique.append(record)
    return unique
