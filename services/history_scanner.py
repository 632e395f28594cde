"""
History Scanner - discovers Schema / Attestation objects from transaction history

There is no on-chain index of every object of a type, so the scanner queries
transactions that called the kind's create function and collects the objects
they created. Two sources are checked per transaction because the fullnode
does not always populate both:

    a. objectChanges entries of type "created" whose objectType matches
    b. effects.created references (type verified after fetching the object)
"""

import asyncio
import logging
from typing import List, Optional, Set

from models.schemas import (
    ChangeSource,
    ClassifiedChange,
    CreatedChange,
    ExecutionResult,
    ObjectKind,
    Page,
    Record,
)
from services.gateway import ChainGateway
from services.object_classifier import ObjectClassifier
from services.pagination import overfetch_limit, unique_by_id

# Configure logger for this module
logger = logging.getLogger(__name__)


class HistoryScanner:
    """
    Walks create_* transaction pages until enough records are collected

    Args:
        gateway: Chain gateway used for transaction queries and object fetches
        classifier: Classifier bound to the attestation package
        max_pages: Upper bound on upstream pages walked per call
    """

    def __init__(self, gateway: ChainGateway, classifier: ObjectClassifier, max_pages: int = 5):
        self.gateway = gateway
        self.classifier = classifier
        self.max_pages = max_pages

    async def scan_created_objects(
        self,
        kind: ObjectKind,
        limit: int,
        cursor: Optional[str] = None
    ) -> Page[Record]:
        """
        Collect up to `limit` objects of `kind`, newest first

        Args:
            kind: Schema or Attestation
            limit: Maximum records to return
            cursor: Opaque transaction cursor from a previous page

        Returns:
            Page whose next_cursor is the upstream transaction cursor, verbatim

        Raises:
            UpstreamUnavailableError: If the transaction query itself fails
        """
        if limit < 1:
            raise ValueError("limit must be a positive integer")

        function = kind.create_function
        query_limit = overfetch_limit(limit)
        seen: Set[str] = set()
        records: List[Record] = []
        next_cursor = cursor
        has_more = False
        pages_read = 0

        while True:
            page = await self.gateway.query_transactions_by_function(
                package=self.classifier.package_id,
                module=self.classifier.module,
                function=function,
                limit=query_limit,
                cursor=next_cursor,
                descending=True,
            )
            pages_read += 1
            logger.info(f"Found {len(page.data)} {function} transactions (page {pages_read})")

            candidates: List[ClassifiedChange] = []
            for tx in page.data:
                candidates.extend(self._collect_candidates(tx, kind, seen))

            records.extend(await self._fetch_and_classify(kind, candidates))

            has_more = page.has_next_page
            next_cursor = page.next_cursor

            if len(records) >= limit or not has_more or not next_cursor:
                break
            if pages_read >= self.max_pages:
                logger.info(f"Stopping {kind.value} scan after {pages_read} pages with {len(records)} records")
                break

        unique = unique_by_id(records)[:limit]
        logger.info(f"Returning {len(unique)} unique {kind.value} records out of {len(records)} found")

        return Page[Record](
            data=unique,
            has_next_page=has_more and len(unique) == limit,
            next_cursor=next_cursor
        )

    def _collect_candidates(
        self,
        tx: ExecutionResult,
        kind: ObjectKind,
        seen: Set[str]
    ) -> List[ClassifiedChange]:
        candidates: List[ClassifiedChange] = []

        for change in tx.object_changes:
            if not isinstance(change, CreatedChange) or change.object_id in seen:
                continue
            if self.classifier.match(change.object_type, kind) is None:
                continue
            seen.add(change.object_id)
            candidates.append(ClassifiedChange(
                object_id=change.object_id,
                object_type=change.object_type,
                source=ChangeSource.OBJECT_CHANGES
            ))

        if tx.effects is not None:
            for created in tx.effects.created:
                object_id = created.reference.object_id
                if object_id in seen:
                    continue
                seen.add(object_id)
                candidates.append(ClassifiedChange(
                    object_id=object_id,
                    source=ChangeSource.EFFECTS_CREATED
                ))

        logger.debug(f"Transaction {tx.digest}: {len(candidates)} new {kind.value} candidates")
        return candidates

    async def _fetch_and_classify(
        self,
        kind: ObjectKind,
        candidates: List[ClassifiedChange]
    ) -> List[Record]:
        results = await asyncio.gather(
            *(self._fetch_candidate(kind, candidate) for candidate in candidates)
        )
        return [record for record in results if record is not None]

    async def _fetch_candidate(self, kind: ObjectKind, candidate: ClassifiedChange) -> Optional[Record]:
        try:
            obj = await self.gateway.get_object(candidate.object_id)
        except Exception as e:
            logger.warning(f"Failed to fetch {kind.value} object {candidate.object_id}: {str(e)}")
            return None

        record = self.classifier.classify(kind, obj)
        if record is None:
            logger.debug(f"Skipping {candidate.object_id} from {candidate.source.value}")
        return record
