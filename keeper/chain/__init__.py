from .abi import AbiFunction, ContractAbi
from .client import ChainClient
from .contracts import Contract, ContractReader, checksum_address
from .errors import (
    AbiParseError,
    ChainConnectionError,
    ConditionError,
    DecodeError,
    EmptyResultError,
    EncodeError,
    InvalidQuoteError,
    JobExpiredError,
    JobNotReadyError,
    RpcError,
)
from .structs import PriceUpdateParams

__all__ = [
    "AbiFunction",
    "AbiParseError",
    "ChainClient",
    "ChainConnectionError",
    "ConditionError",
    "Contract",
    "ContractAbi",
    "ContractReader",
    "DecodeError",
    "EmptyResultError",
    "EncodeError",
    "InvalidQuoteError",
    "JobExpiredError",
    "JobNotReadyError",
    "PriceUpdateParams",
    "RpcError",
    "checksum_address",
]
