from __future__ import annotations

import logging
import unittest
from typing import Any
from unittest.mock import AsyncMock

import aiohttp

from keeper.chain.client import ChainClient
from keeper.chain.errors import ChainConnectionError, DecodeError, RpcError


class _FakeResponse:
    def __init__(self, *, status: int, body: Any) -> None:
        self.status = status
        self._body = body

    async def json(self, content_type: str | None = None) -> Any:
        return self._body

    async def __aenter__(self) -> "_FakeResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, *, status: int = 200, body: Any = None, error: Exception | None = None) -> None:
        self._status = status
        self._body = body
        self._error = error
        self.payloads: list[dict[str, Any]] = []

    def post(self, url: str, *, json: dict[str, Any]) -> _FakeResponse:
        self.payloads.append(json)
        if self._error is not None:
            raise self._error
        return _FakeResponse(status=self._status, body=self._body)

    async def close(self) -> None:
        return None


def _make_client() -> ChainClient:
    return ChainClient("https://rpc.example.org", logger=logging.getLogger("test.client"))


class RpcCallTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_result_field(self) -> None:
        client = _make_client()
        session = _FakeSession(body={"jsonrpc": "2.0", "id": 1, "result": "0x2a"})
        client._session = session  # type: ignore[assignment]

        self.assertEqual(await client._rpc_call("eth_chainId"), "0x2a")
        self.assertEqual(session.payloads[0]["method"], "eth_chainId")
        self.assertEqual(session.payloads[0]["params"], [])

    async def test_json_rpc_error_raises_rpc_error_with_code(self) -> None:
        client = _make_client()
        client._session = _FakeSession(  # type: ignore[assignment]
            body={"jsonrpc": "2.0", "id": 1, "error": {"code": 3, "message": "execution reverted"}}
        )

        with self.assertRaises(RpcError) as ctx:
            await client._rpc_call("eth_call", [])
        self.assertEqual(ctx.exception.code, 3)
        self.assertIn("execution reverted", str(ctx.exception))

    async def test_http_error_status_raises_rpc_error(self) -> None:
        client = _make_client()
        client._session = _FakeSession(status=503, body={"message": "unavailable"})  # type: ignore[assignment]

        with self.assertRaises(RpcError) as ctx:
            await client._rpc_call("eth_call", [])
        self.assertIn("status=503", str(ctx.exception))

    async def test_transport_failure_raises_rpc_error(self) -> None:
        client = _make_client()
        client._session = _FakeSession(error=aiohttp.ClientConnectionError("refused"))  # type: ignore[assignment]

        with self.assertRaises(RpcError):
            await client._rpc_call("eth_call", [])

    async def test_call_without_session_raises_rpc_error(self) -> None:
        with self.assertRaises(RpcError):
            await _make_client()._rpc_call("eth_call", [])


class ChainClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_connect_records_chain_id(self) -> None:
        client = _make_client()
        client._rpc_call = AsyncMock(return_value="0x14a34")  # type: ignore[method-assign]

        async with client:
            self.assertEqual(client.chain_id, 84532)

    async def test_unreachable_endpoint_raises_connection_error(self) -> None:
        client = _make_client()
        client._rpc_call = AsyncMock(side_effect=RpcError("refused", method="eth_chainId"))  # type: ignore[method-assign]

        with self.assertRaises(ChainConnectionError):
            await client.connect()
        self.assertIsNone(client._session)

    async def test_empty_url_raises_connection_error(self) -> None:
        client = ChainClient("  ", logger=logging.getLogger("test.client"))
        with self.assertRaises(ChainConnectionError):
            await client.connect()

    async def test_eth_call_sends_hex_data_and_decodes_result(self) -> None:
        client = _make_client()
        client._rpc_call = AsyncMock(return_value="0x" + "00" * 31 + "12")  # type: ignore[method-assign]

        raw = await client.eth_call(to="0x" + "11" * 20, data=bytes.fromhex("313ce567"))

        self.assertEqual(raw[-1], 0x12)
        method, params = client._rpc_call.await_args.args
        self.assertEqual(method, "eth_call")
        self.assertEqual(params[0]["data"], "0x313ce567")
        self.assertEqual(params[1], "latest")

    async def test_eth_call_rejects_non_string_result(self) -> None:
        client = _make_client()
        client._rpc_call = AsyncMock(return_value=None)  # type: ignore[method-assign]

        with self.assertRaises(DecodeError):
            await client.eth_call(to="0x" + "11" * 20, data=b"\x00")

    async def test_get_balance_parses_quantity(self) -> None:
        client = _make_client()
        client._rpc_call = AsyncMock(return_value="0xde0b6b3a7640000")  # type: ignore[method-assign]

        self.assertEqual(await client.get_balance("0x" + "c7" * 20), 10**18)


if __name__ == "__main__":
    unittest.main()
