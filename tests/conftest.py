import sys
from pathlib import Path

# Ensure repo root is on sys.path so `import services` works under all pytest import modes.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from typing import Any, Dict, Iterable, List, Optional, Set, Tuple  # noqa: E402

import pytest  # noqa: E402

from models.schemas import (  # noqa: E402
    ExecutionResult,
    MoveCall,
    ObjectPage,
    SuiObjectData,
    TransactionPage,
)
from services import AttestationService, ObjectClassifier, UpstreamUnavailableError  # noqa: E402

PACKAGE = "0x" + "a" * 64
MODULE = "attestation_service_module"
SCHEMA_TYPE = f"{PACKAGE}::{MODULE}::Schema"
ATTESTATION_TYPE = f"{PACKAGE}::{MODULE}::Attestation"
COIN_TYPE = "0x2::coin::Coin<0x2::sui::SUI>"
OWNER = "0x" + "b" * 64


def oid(n: int) -> str:
    return "0x" + format(n, "064x")


def move_object(object_id: str, object_type: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "objectId": object_id,
        "version": "7",
        "digest": f"digest-{object_id[-4:]}",
        "type": object_type,
        "owner": {"AddressOwner": OWNER},
        "previousTransaction": f"tx-{object_id[-4:]}",
        "content": {
            "dataType": "moveObject",
            "type": object_type,
            "hasPublicTransfer": True,
            "fields": fields
        }
    }


def schema_object(object_id: str, object_type: str = SCHEMA_TYPE, name: str = "KYC") -> Dict[str, Any]:
    return move_object(object_id, object_type, {
        "name": name,
        "description": f"{name} schema",
        "definition_json": '{"verified": "bool"}',
        "creator": OWNER,
        "timestamp": "1700000000000"
    })


def attestation_object(object_id: str, schema_id: str, object_type: str = ATTESTATION_TYPE) -> Dict[str, Any]:
    return move_object(object_id, object_type, {
        "subject_address": OWNER,
        "data_hash": [1, 2, 3, 4],
        "schema_id": schema_id,
        "attestor": OWNER,
        "timestamp": "1700000000001"
    })


def created_change(object_id: str, object_type: str) -> Dict[str, Any]:
    return {
        "type": "created",
        "sender": OWNER,
        "owner": {"AddressOwner": OWNER},
        "objectType": object_type,
        "objectId": object_id,
        "version": "1",
        "digest": "change-digest"
    }


def mutated_change(object_id: str, object_type: str) -> Dict[str, Any]:
    return {
        "type": "mutated",
        "sender": OWNER,
        "objectType": object_type,
        "objectId": object_id,
        "previousVersion": "1",
        "version": "2",
        "digest": "change-digest"
    }


def effects(created_ids: Iterable[str] = (), status: str = "success", error: str = None) -> Dict[str, Any]:
    status_block = {"status": status}
    if error:
        status_block["error"] = error
    return {
        "messageVersion": "v1",
        "status": status_block,
        "created": [
            {"owner": {"AddressOwner": OWNER}, "reference": {"objectId": i, "version": 1, "digest": "ref"}}
            for i in created_ids
        ]
    }


def transaction(
    digest: str,
    changes: Iterable[Dict[str, Any]] = (),
    created_ids: Iterable[str] = (),
    status: str = "success"
) -> Dict[str, Any]:
    return {
        "digest": digest,
        "effects": effects(created_ids, status=status),
        "objectChanges": list(changes)
    }


def transaction_page(txs: List[Dict[str, Any]], has_next: bool, cursor: Optional[str]) -> Dict[str, Any]:
    return {"data": txs, "hasNextPage": has_next, "nextCursor": cursor}


class FakeGateway:
    """In-memory ChainGateway recording every call"""

    def __init__(self):
        self.objects: Dict[str, Dict[str, Any]] = {}
        self.failing_objects: Set[str] = set()
        self.transaction_pages: Dict[Optional[str], Dict[str, Any]] = {}
        self.transactions: Dict[str, Dict[str, Any]] = {}
        self.owned_page: Dict[str, Any] = {"data": [], "hasNextPage": False, "nextCursor": None}
        self.submit_result: Optional[Dict[str, Any]] = None
        self.query_error: Optional[Exception] = None
        self.calls: List[Tuple[str, Any]] = []

    def add_objects(self, *raw_objects: Dict[str, Any]) -> None:
        for raw in raw_objects:
            self.objects[raw["objectId"]] = raw

    def calls_named(self, name: str) -> List[Any]:
        return [args for call, args in self.calls if call == name]

    async def submit_transaction(self, move_call: MoveCall) -> ExecutionResult:
        self.calls.append(("submit_transaction", move_call))
        return ExecutionResult.model_validate(self.submit_result)

    async def get_object(self, object_id: str) -> Optional[SuiObjectData]:
        self.calls.append(("get_object", object_id))
        if object_id in self.failing_objects:
            raise UpstreamUnavailableError(f"sui_getObject request failed for {object_id}")
        raw = self.objects.get(object_id)
        return SuiObjectData.model_validate(raw) if raw else None

    async def get_transaction(self, digest: str) -> ExecutionResult:
        self.calls.append(("get_transaction", digest))
        return ExecutionResult.model_validate(self.transactions[digest])

    async def query_transactions_by_function(
        self,
        package: str,
        module: str,
        function: str,
        limit: int,
        cursor: Optional[str] = None,
        descending: bool = True
    ) -> TransactionPage:
        self.calls.append(("query_transactions_by_function", {
            "package": package,
            "module": module,
            "function": function,
            "limit": limit,
            "cursor": cursor,
            "descending": descending
        }))
        if self.query_error is not None:
            raise self.query_error
        raw = self.transaction_pages.get(cursor, transaction_page([], False, None))
        return TransactionPage.model_validate(raw)

    async def list_owned_objects(
        self,
        owner: str,
        struct_type: str,
        limit: int,
        cursor: Optional[str] = None
    ) -> ObjectPage:
        self.calls.append(("list_owned_objects", {
            "owner": owner,
            "struct_type": struct_type,
            "limit": limit,
            "cursor": cursor
        }))
        return ObjectPage.model_validate(self.owned_page)


class RecordingSleep:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def classifier() -> ObjectClassifier:
    return ObjectClassifier(PACKAGE, MODULE)


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def service(gateway: FakeGateway, sleeper: RecordingSleep) -> AttestationService:
    return AttestationService(gateway, PACKAGE, MODULE, sleep=sleeper)
