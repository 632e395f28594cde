"""Chain gateway protocol - the ledger capabilities the services depend on."""

from typing import Optional, Protocol

from models.schemas import ExecutionResult, MoveCall, ObjectPage, SuiObjectData, TransactionPage


class ChainGateway(Protocol):
    """Abstract interface for Sui RPC interactions."""

    async def submit_transaction(self, move_call: MoveCall) -> ExecutionResult: ...

    async def get_object(self, object_id: str) -> Optional[SuiObjectData]: ...

    async def get_transaction(self, digest: str) -> ExecutionResult: ...

    async def query_transactions_by_function(
        self,
        package: str,
        module: str,
        function: str,
        limit: int,
        cursor: Optional[str] = None,
        descending: bool = True,
    ) -> TransactionPage: ...

    async def list_owned_objects(
        self,
        owner: str,
        struct_type: str,
        limit: int,
        cursor: Optional[str] = None,
    ) -> ObjectPage: ...
