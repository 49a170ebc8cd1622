from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from eth_utils import is_address, to_checksum_address

from keeper.common import log_event

from .abi import ContractAbi
from .client import ChainClient
from .errors import DecodeError, EncodeError
from .structs import PriceUpdateParams


def checksum_address(value: str, *, label: str = "address") -> str:
    if not isinstance(value, str) or not is_address(value):
        raise EncodeError(f"Invalid {label}: {value!r}")
    return to_checksum_address(value)


@dataclass(slots=True, frozen=True)
class Contract:
    address: str
    abi: ContractAbi

    @classmethod
    def at(cls, address: str, abi: ContractAbi) -> "Contract":
        return cls(address=checksum_address(address, label="contract address"), abi=abi)


class ContractReader:
    def __init__(self, client: ChainClient, *, logger: logging.Logger) -> None:
        self._client = client
        self._logger = logger

    async def call(self, contract: Contract, method: str, *args: Any) -> tuple[Any, ...]:
        function = contract.abi.function(method)
        raw = await self._client.eth_call(to=contract.address, data=function.encode_call(*args))
        values = function.decode_output(raw)
        log_event(
            self._logger,
            level="debug",
            event="contract_call",
            message="Contract view call decoded",
            contract=contract.address,
            method=method,
            outputs=len(values),
        )
        return values

    async def read_address(self, contract: Contract, method: str) -> str:
        value = (await self.call(contract, method))[0]
        if not isinstance(value, str) or not is_address(value):
            raise DecodeError(f"{method} did not return an address: {value!r}")
        return to_checksum_address(value)

    async def read_uint8(self, contract: Contract, method: str) -> int:
        value = (await self.call(contract, method))[0]
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
            raise DecodeError(f"{method} did not return a uint8: {value!r}")
        return value

    async def read_uint256(self, contract: Contract, method: str, *args: Any) -> int:
        value = (await self.call(contract, method, *args))[0]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise DecodeError(f"{method} did not return a uint256: {value!r}")
        return value

    async def read_quote(self, dex: Contract, token_address: str, amount: int) -> int:
        return await self.read_uint256(dex, "getOutputAmount", token_address, amount)

    async def read_struct(self, contract: Contract, method: str) -> PriceUpdateParams:
        value = (await self.call(contract, method))[0]
        return PriceUpdateParams.from_abi(value)

    async def get_balance(self, address: str) -> int:
        return await self._client.get_balance(address)
