import asyncio
import json

import httpx
import pytest
from conftest import OWNER, SCHEMA_TYPE, oid, schema_object, transaction, transaction_page

from models.schemas import MoveCall, TransactionArgument
from services import SignerNotConfiguredError, UpstreamUnavailableError

pytest.importorskip("pysui")

from pysui import SuiAddress  # noqa: E402
from pysui.sui.sui_types.scalars import ObjectID, SuiString, SuiU8  # noqa: E402

from services.sui_gateway import TRANSACTION_OPTIONS, SuiGateway, _plain  # noqa: E402

RPC_URL = "https://fullnode.test"


def make_gateway(handler):
    """SuiGateway whose HTTP traffic is answered by `handler`"""
    requests = []

    def recording(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        requests.append(payload)
        return handler(payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return SuiGateway(RPC_URL, http_client=client), requests


def rpc_result(result):
    return lambda payload: httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})


def test_get_object():
    gateway, requests = make_gateway(rpc_result({"data": schema_object(oid(1))}))

    obj = asyncio.run(gateway.get_object(oid(1)))

    assert obj.object_id == oid(1)
    assert obj.type == SCHEMA_TYPE
    assert requests[0]["method"] == "sui_getObject"
    assert requests[0]["params"][0] == oid(1)
    assert requests[0]["params"][1]["showContent"] is True


def test_get_object_missing_returns_none():
    gateway, _ = make_gateway(rpc_result({"error": {"code": "notExists", "object_id": oid(1)}}))

    assert asyncio.run(gateway.get_object(oid(1))) is None


def test_query_transactions_params():
    page = transaction_page([transaction("tx-1")], True, "next")
    gateway, requests = make_gateway(rpc_result(page))

    result = asyncio.run(gateway.query_transactions_by_function(
        "0xpkg", "attestation_service_module", "create_schema", limit=20, cursor="c0"
    ))

    assert result.has_next_page is True
    assert result.next_cursor == "next"
    assert [tx.digest for tx in result.data] == ["tx-1"]

    query, cursor, limit, descending = requests[0]["params"]
    assert requests[0]["method"] == "suix_queryTransactionBlocks"
    assert query["filter"]["MoveFunction"] == {
        "package": "0xpkg",
        "module": "attestation_service_module",
        "function": "create_schema"
    }
    assert (cursor, limit, descending) == ("c0", 20, True)


def test_list_owned_objects_params():
    gateway, requests = make_gateway(rpc_result({
        "data": [{"data": schema_object(oid(1))}],
        "hasNextPage": False,
        "nextCursor": None
    }))

    page = asyncio.run(gateway.list_owned_objects(OWNER, SCHEMA_TYPE, limit=5))

    assert page.data[0].data.object_id == oid(1)
    owner, query, cursor, limit = requests[0]["params"]
    assert owner == OWNER
    assert query["filter"] == {"StructType": SCHEMA_TYPE}
    assert (cursor, limit) == (None, 5)


def test_rpc_error_maps_to_upstream_unavailable():
    gateway, _ = make_gateway(
        lambda payload: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "boom"}})
    )

    with pytest.raises(UpstreamUnavailableError):
        asyncio.run(gateway.get_transaction("digest"))


def test_http_error_maps_to_upstream_unavailable():
    gateway, _ = make_gateway(lambda payload: httpx.Response(503, text="unavailable"))

    with pytest.raises(UpstreamUnavailableError):
        asyncio.run(gateway.get_object(oid(1)))


def test_malformed_result_maps_to_upstream_unavailable():
    gateway, _ = make_gateway(rpc_result({"data": [], "hasNextPage": "maybe"}))

    with pytest.raises(UpstreamUnavailableError):
        asyncio.run(gateway.query_transactions_by_function("0xpkg", "m", "f", limit=1))


def test_submit_without_signer():
    gateway, requests = make_gateway(rpc_result({}))
    move_call = MoveCall(package="0xpkg", module="m", function="create_schema", gas_budget=1)

    with pytest.raises(SignerNotConfiguredError):
        asyncio.run(gateway.submit_transaction(move_call))

    assert requests == []


def test_submit_executes_signed_bytes():
    gateway, requests = make_gateway(rpc_result(transaction("digest-x")))
    gateway._build_and_sign = lambda move_call: {"tx_bytes": "AAEC", "signatures": ["c2lnLTE="]}
    move_call = MoveCall(package="0xpkg", module="m", function="create_schema", gas_budget=1)

    result = asyncio.run(gateway.submit_transaction(move_call))

    assert result.digest == "digest-x"
    assert requests[0]["method"] == "sui_executeTransactionBlock"
    assert requests[0]["params"] == ["AAEC", ["c2lnLTE="], TRANSACTION_OPTIONS, "WaitForLocalExecution"]


def test_submit_wraps_single_signature():
    gateway, requests = make_gateway(rpc_result(transaction("digest-x")))
    gateway._build_and_sign = lambda move_call: {"tx_bytes": "AAEC", "signatures": "c2lnLTE="}
    move_call = MoveCall(package="0xpkg", module="m", function="create_schema", gas_budget=1)

    asyncio.run(gateway.submit_transaction(move_call))

    assert requests[0]["params"][1] == ["c2lnLTE="]


def test_move_argument_wrappers():
    string_arg = SuiGateway._move_argument(TransactionArgument(type="string", value="KYC"))
    address_arg = SuiGateway._move_argument(TransactionArgument(type="address", value=OWNER))
    object_arg = SuiGateway._move_argument(TransactionArgument(type="object", value=oid(1)))
    bytes_arg = SuiGateway._move_argument(TransactionArgument(type="vector_u8", value="0aff"))

    assert isinstance(string_arg, SuiString)
    assert isinstance(address_arg, SuiAddress)
    assert isinstance(object_arg, ObjectID)
    assert all(isinstance(item, SuiU8) for item in bytes_arg)
    assert [item.value for item in bytes_arg] == [10, 255]


def test_plain_unwraps_wrappers():
    class Wrapped:
        def __init__(self, value):
            self.value = value

    class Array:
        def __init__(self, items):
            self.array = items

    assert _plain("raw") == "raw"
    assert _plain(Wrapped("inner")) == "inner"
    assert _plain(Array([Wrapped("a"), "b"])) == ["a", "b"]
    assert _plain((Wrapped("x"),)) == ["x"]
