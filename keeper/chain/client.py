from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any

import aiohttp
from eth_utils import decode_hex, is_address, to_checksum_address

from keeper.common import log_event

from .errors import ChainConnectionError, DecodeError, RpcError


def _error_payload_to_message(error: Any) -> tuple[str, int | None]:
    if isinstance(error, dict):
        code = error.get("code")
        message = str(error.get("message") or error)
        data = error.get("data")
        if data:
            message = f"{message} (data={data})"
        return message, code if isinstance(code, int) else None
    return str(error), None


def _parse_quantity(value: Any, *, method: str) -> int:
    if not isinstance(value, str) or not value.startswith("0x"):
        raise DecodeError(f"Unexpected {method} quantity: {value!r}")
    try:
        return int(value, 16)
    except ValueError as error:
        raise DecodeError(f"Unexpected {method} quantity: {value!r}") from error


class ChainClient:
    def __init__(
        self,
        rpc_url: str,
        *,
        logger: logging.Logger,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._rpc_url = rpc_url.strip()
        self._logger = logger
        self._timeout_seconds = timeout_seconds
        self._session: aiohttp.ClientSession | None = None
        self._request_ids = itertools.count(1)
        self.chain_id: int | None = None

    async def __aenter__(self) -> "ChainClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def connect(self) -> None:
        if not self._rpc_url:
            raise ChainConnectionError("RPC URL is not configured.")

        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self._timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)

        try:
            self.chain_id = _parse_quantity(await self._rpc_call("eth_chainId"), method="eth_chainId")
        except RpcError as error:
            await self.close()
            raise ChainConnectionError(f"error connecting to network: {error}") from error

        log_event(
            self._logger,
            level="debug",
            event="chain_client_connected",
            message="Connected to JSON-RPC endpoint",
            rpc_url=self._rpc_url,
            chain_id=self.chain_id,
        )

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _rpc_call(self, method: str, params: list[Any] | None = None) -> Any:
        if self._session is None:
            raise RpcError("RPC HTTP session is not initialized.", method=method)

        payload: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params or [],
        }

        try:
            async with self._session.post(self._rpc_url, json=payload) as response:
                body = await response.json(content_type=None)
                if response.status >= 400:
                    raise RpcError(
                        f"RPC call failed: method={method} status={response.status} body={body}",
                        method=method,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as error:
            raise RpcError(f"RPC transport failure for {method}: {error!r}", method=method) from error

        if not isinstance(body, dict):
            raise RpcError(f"Invalid RPC response for {method}: {body}", method=method)

        if body.get("error"):
            message, code = _error_payload_to_message(body["error"])
            raise RpcError(f"RPC error for {method}: {message}", method=method, code=code)

        return body.get("result")

    async def eth_call(self, *, to: str, data: bytes, block: str = "latest") -> bytes:
        result = await self._rpc_call(
            "eth_call",
            [{"to": to, "data": "0x" + data.hex()}, block],
        )
        if not isinstance(result, str):
            raise DecodeError(f"Unexpected eth_call result: {result!r}")
        try:
            return decode_hex(result)
        except (ValueError, TypeError) as error:
            raise DecodeError(f"eth_call returned non-hex data: {result!r}") from error

    async def get_balance(self, address: str, *, block: str = "latest") -> int:
        if not is_address(address):
            raise RpcError(f"Invalid address for eth_getBalance: {address!r}", method="eth_getBalance")
        result = await self._rpc_call("eth_getBalance", [to_checksum_address(address), block])
        return _parse_quantity(result, method="eth_getBalance")
