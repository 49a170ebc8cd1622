from __future__ import annotations

from typing import Any

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

ARBITRAGE = "0x" + "a1" * 20
DEX1 = "0x" + "d1" * 20
DEX2 = "0x" + "d2" * 20
TOKEN1 = "0x" + "11" * 20
TOKEN2 = "0x" + "22" * 20
ORACLE = "0x" + "0c" * 20
WHALE = "0x" + "9e" * 20
COPY_TRADER = "0x" + "c7" * 20


class FakeChainClient:
    """In-memory stand-in for ChainClient keyed by (contract, selector)."""

    def __init__(self) -> None:
        self._responses: dict[tuple[str, bytes], bytes | Exception] = {}
        self._exact: dict[tuple[str, bytes], bytes] = {}
        self.balances: dict[str, int] = {}
        self.calls: list[tuple[str, bytes]] = []

    def respond(self, address: str, signature: str, types: list[str], values: list[Any]) -> None:
        key = (to_checksum_address(address), function_signature_to_4byte_selector(signature))
        self._responses[key] = encode(types, values)

    def respond_raw(self, address: str, signature: str, data: bytes) -> None:
        key = (to_checksum_address(address), function_signature_to_4byte_selector(signature))
        self._responses[key] = data

    def respond_exact(self, address: str, calldata: bytes, types: list[str], values: list[Any]) -> None:
        self._exact[(to_checksum_address(address), bytes(calldata))] = encode(types, values)

    def fail(self, address: str, signature: str, error: Exception) -> None:
        key = (to_checksum_address(address), function_signature_to_4byte_selector(signature))
        self._responses[key] = error

    async def eth_call(self, *, to: str, data: bytes, block: str = "latest") -> bytes:
        key = (to_checksum_address(to), bytes(data[:4]))
        self.calls.append(key)
        exact = self._exact.get((key[0], bytes(data)))
        if exact is not None:
            return exact
        response = self._responses.get(key, b"")
        if isinstance(response, Exception):
            raise response
        return response

    async def get_balance(self, address: str, *, block: str = "latest") -> int:
        return self.balances.get(to_checksum_address(address), 0)


def selector(signature: str) -> bytes:
    return function_signature_to_4byte_selector(signature)


def arbitrage_chain(*, dex1_output: int, dex2_output: int, decimals: int = 18) -> FakeChainClient:
    chain = FakeChainClient()
    chain.respond(ARBITRAGE, "dex1()", ["address"], [DEX1])
    chain.respond(ARBITRAGE, "dex2()", ["address"], [DEX2])
    chain.respond(ARBITRAGE, "token1()", ["address"], [TOKEN1])
    chain.respond(ARBITRAGE, "token2()", ["address"], [TOKEN2])
    chain.respond(TOKEN1, "decimals()", ["uint8"], [decimals])
    chain.respond(DEX1, "getOutputAmount(address,uint256)", ["uint256"], [dex1_output])
    chain.respond(DEX2, "getOutputAmount(address,uint256)", ["uint256"], [dex2_output])
    return chain
