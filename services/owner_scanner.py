"""
Owner Scanner - lists Schema / Attestation objects owned by an address

The owned-objects index is filtered by struct type on the fullnode, so paging
information is passed straight through.
"""

import logging
from typing import List, Optional

from models.schemas import ObjectKind, Page, Record
from services.gateway import ChainGateway
from services.object_classifier import ObjectClassifier
from services.pagination import unique_by_id

# Configure logger for this module
logger = logging.getLogger(__name__)


class OwnerScanner:

    def __init__(self, gateway: ChainGateway, classifier: ObjectClassifier):
        self.gateway = gateway
        self.classifier = classifier

    async def scan_owned_objects(
        self,
        kind: ObjectKind,
        owner: str,
        limit: int,
        cursor: Optional[str] = None
    ) -> Page[Record]:
        """
        Get one page of objects of `kind` owned by `owner`

        Raises:
            UpstreamUnavailableError: If the owned-objects query fails
        """
        logger.info(f"Fetching {kind.value} objects owned by {owner}")

        response = await self.gateway.list_owned_objects(
            owner=owner,
            struct_type=self.classifier.struct_type(kind),
            limit=limit,
            cursor=cursor
        )
        logger.info(f"Found {len(response.data)} owned {kind.value} objects")

        records: List[Record] = []
        for entry in response.data:
            if entry.data is None:
                logger.debug(f"Skipping owned entry without data: {entry.error}")
                continue
            record = self.classifier.classify(kind, entry.data)
            if record is not None:
                records.append(record)

        return Page[Record](
            data=unique_by_id(records),
            has_next_page=response.has_next_page,
            next_cursor=response.next_cursor
        )
