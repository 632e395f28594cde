"""
Sui Gateway - JSON-RPC access to a Sui fullnode

Reads (objects, transaction history, owned objects) and transaction execution
go through the fullnode JSON-RPC over httpx. Move calls are built and signed
with pysui using the service keypair.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from pysui import SuiConfig, SyncClient, SuiAddress
from pysui.sui.sui_txn import SyncTransaction
from pysui.sui.sui_types.scalars import ObjectID, SuiString, SuiU8

from config import Settings
from models.schemas import (
    ExecutionResult,
    MoveCall,
    ObjectPage,
    ObjectResponse,
    SuiObjectData,
    TransactionArgument,
    TransactionPage,
)
from services.exceptions import SignerNotConfiguredError, UpstreamUnavailableError

# Configure logger for this module
logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

OBJECT_OPTIONS = {
    "showType": True,
    "showContent": True,
    "showOwner": True,
    "showPreviousTransaction": True
}

TRANSACTION_OPTIONS = {
    "showInput": True,
    "showEffects": True,
    "showEvents": True,
    "showObjectChanges": True
}


def _plain(value: Any) -> Any:
    """Unwrap pysui scalar / array wrappers into JSON-ready values"""
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    array = getattr(value, "array", None)
    if isinstance(array, list):
        return [_plain(item) for item in array]
    inner = getattr(value, "value", None)
    if inner is not None:
        return inner
    return value if isinstance(value, str) else str(value)


class SuiGateway:
    """
    Chain gateway backed by a Sui fullnode

    Args:
        rpc_url: Fullnode JSON-RPC endpoint
        private_key: Signer keystring; reads work without one
        timeout: Per-request timeout in seconds
        http_client: Preconfigured client, mainly for tests
    """

    def __init__(
        self,
        rpc_url: str,
        private_key: Optional[str] = None,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        logger.info(f"Initializing SuiGateway with RPC URL: {rpc_url}")
        self.rpc_url = rpc_url
        self._private_key = private_key
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._sui_client: Optional[SyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SuiGateway":
        return cls(
            rpc_url=settings.SUI_RPC_URL,
            private_key=settings.SUI_PRIVATE_KEY,
            timeout=settings.RPC_TIMEOUT_SECONDS
        )

    async def close(self) -> None:
        await self._http.aclose()

    # =========================================================================
    # JSON-RPC plumbing
    # =========================================================================

    async def _rpc(self, method: str, params: List[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params
        }

        try:
            response = await self._http.post(self.rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{method} request failed: {str(e)}")
            raise UpstreamUnavailableError(f"{method} request failed: {str(e)}") from e

        if "error" in body:
            logger.error(f"RPC error from {method}: {body['error']}")
            raise UpstreamUnavailableError(f"RPC error from {method}: {body['error']}")
        if "result" not in body:
            raise UpstreamUnavailableError(f"No result in {method} response")

        return body["result"]

    @staticmethod
    def _parse(model: Type[ModelT], payload: Any, method: str) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Malformed {method} response: {str(e)}")
            raise UpstreamUnavailableError(f"Malformed {method} response") from e

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_object(self, object_id: str) -> Optional[SuiObjectData]:
        """
        Fetch one object with type, content, owner and previous transaction

        Returns:
            Object data, or None when the fullnode reports no such object
        """
        logger.debug(f"Fetching object: {object_id}")
        result = await self._rpc("sui_getObject", [object_id, OBJECT_OPTIONS])
        response = self._parse(ObjectResponse, result, "sui_getObject")

        if response.data is None:
            logger.info(f"Object {object_id} not found or no data: {response.error}")
            return None
        return response.data

    async def get_transaction(self, digest: str) -> ExecutionResult:
        result = await self._rpc("sui_getTransactionBlock", [digest, TRANSACTION_OPTIONS])
        return self._parse(ExecutionResult, result, "sui_getTransactionBlock")

    async def query_transactions_by_function(
        self,
        package: str,
        module: str,
        function: str,
        limit: int,
        cursor: Optional[str] = None,
        descending: bool = True
    ) -> TransactionPage:
        query = {
            "filter": {
                "MoveFunction": {
                    "package": package,
                    "module": module,
                    "function": function
                }
            },
            "options": {
                "showEffects": True,
                "showObjectChanges": True
            }
        }
        logger.debug(f"Querying {package}::{module}::{function} transactions, limit {limit}, cursor {cursor}")
        result = await self._rpc("suix_queryTransactionBlocks", [query, cursor, limit, descending])
        return self._parse(TransactionPage, result, "suix_queryTransactionBlocks")

    async def list_owned_objects(
        self,
        owner: str,
        struct_type: str,
        limit: int,
        cursor: Optional[str] = None
    ) -> ObjectPage:
        query = {
            "filter": {
                "StructType": struct_type
            },
            "options": OBJECT_OPTIONS
        }
        result = await self._rpc("suix_getOwnedObjects", [owner, query, cursor, limit])
        return self._parse(ObjectPage, result, "suix_getOwnedObjects")

    # =========================================================================
    # Writes
    # =========================================================================

    async def submit_transaction(self, move_call: MoveCall) -> ExecutionResult:
        """
        Sign a move call with the service keypair and execute it

        Raises:
            SignerNotConfiguredError: If no private key is configured
            UpstreamUnavailableError: If signing or execution fails
        """
        signed = await asyncio.to_thread(self._build_and_sign, move_call)

        signatures = _plain(signed["signatures"])
        if not isinstance(signatures, list):
            signatures = [signatures]

        result = await self._rpc(
            "sui_executeTransactionBlock",
            [_plain(signed["tx_bytes"]), signatures, TRANSACTION_OPTIONS, "WaitForLocalExecution"]
        )
        execution = self._parse(ExecutionResult, result, "sui_executeTransactionBlock")
        logger.info(f"Executed {move_call.target}, digest: {execution.digest}")
        return execution

    def _signing_client(self) -> SyncClient:
        if not self._private_key:
            raise SignerNotConfiguredError("SUI_PRIVATE_KEY is not configured")
        if self._sui_client is None:
            config = SuiConfig.user_config(rpc_url=self.rpc_url, prv_keys=[self._private_key])
            self._sui_client = SyncClient(config)
            logger.info(f"Signer ready: {self._sui_client.config.active_address}")
        return self._sui_client

    def _build_and_sign(self, move_call: MoveCall) -> Dict[str, Any]:
        client = self._signing_client()
        try:
            txn = SyncTransaction(
                client=client,
                initial_sender=client.config.active_address
            )
            txn.move_call(
                target=SuiString(move_call.target),
                arguments=[self._move_argument(arg) for arg in move_call.arguments],
                type_arguments=[SuiString(t) for t in move_call.type_arguments]
            )
            return txn.build_and_sign(gas_budget=str(move_call.gas_budget))
        except Exception as e:
            logger.error(f"Error building {move_call.target} transaction: {str(e)}", exc_info=True)
            raise UpstreamUnavailableError(f"Error building {move_call.target} transaction: {str(e)}") from e

    @staticmethod
    def _move_argument(argument: TransactionArgument) -> Any:
        if argument.type == "string":
            return SuiString(argument.value)
        if argument.type == "address":
            return SuiAddress(argument.value)
        if argument.type == "object":
            return ObjectID(argument.value)
        # vector_u8 arrives hex encoded for JSON transport
        raw = bytes.fromhex(argument.value) if isinstance(argument.value, str) else bytes(argument.value)
        return [SuiU8(b) for b in raw]
