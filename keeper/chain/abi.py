from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from eth_abi import decode, encode, is_encodable_type
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import function_signature_to_4byte_selector
from eth_utils.abi import collapse_if_tuple

from .errors import AbiParseError, DecodeError, EmptyResultError, EncodeError


def _param_types(params: Any, *, function_name: str, section: str) -> tuple[str, ...]:
    if params is None:
        return ()
    if not isinstance(params, list):
        raise AbiParseError(f"ABI {section} of {function_name} must be a list: {params!r}")

    types: list[str] = []
    for idx, param in enumerate(params):
        if not isinstance(param, dict) or not param.get("type"):
            raise AbiParseError(f"ABI {section}[{idx}] of {function_name} has no type: {param!r}")
        try:
            type_str = collapse_if_tuple(param)
        except (KeyError, TypeError, ValueError) as error:
            raise AbiParseError(f"ABI {section}[{idx}] of {function_name} is malformed: {error}") from error
        if not is_encodable_type(type_str):
            raise AbiParseError(f"ABI {section}[{idx}] of {function_name} has unsupported type {type_str}")
        types.append(type_str)
    return tuple(types)


@dataclass(slots=True, frozen=True)
class AbiFunction:
    name: str
    input_types: tuple[str, ...]
    output_types: tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: Any) -> bytes:
        if len(args) != len(self.input_types):
            raise EncodeError(
                f"{self.signature} expects {len(self.input_types)} arguments, got {len(args)}"
            )
        try:
            return self.selector + encode(list(self.input_types), list(args))
        except (EncodingError, TypeError, ValueError, OverflowError) as error:
            raise EncodeError(f"failed to pack {self.name} call: {error}") from error

    def decode_output(self, data: bytes) -> tuple[Any, ...]:
        if not self.output_types:
            raise EmptyResultError(f"{self.name} declares no outputs")
        if not data:
            raise EmptyResultError(f"{self.name} returned no data")
        try:
            values = decode(list(self.output_types), data)
        except (DecodingError, OverflowError, ValueError) as error:
            raise DecodeError(f"failed to unpack {self.name} result: {error}") from error
        if len(values) == 0:
            raise EmptyResultError(f"{self.name} decoded to an empty result")
        return tuple(values)


class ContractAbi:
    def __init__(self, functions: dict[str, AbiFunction]) -> None:
        self._functions = dict(functions)

    @classmethod
    def from_json(cls, raw: str | list[dict[str, Any]]) -> "ContractAbi":
        if isinstance(raw, str):
            try:
                entries = json.loads(raw)
            except json.JSONDecodeError as error:
                raise AbiParseError(f"ABI is not valid JSON: {error}") from error
        else:
            entries = raw

        if not isinstance(entries, list):
            raise AbiParseError(f"ABI must be a JSON array, got {type(entries).__name__}")

        functions: dict[str, AbiFunction] = {}
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise AbiParseError(f"ABI entry [{idx}] is not an object: {entry!r}")
            # Solidity ABI: a missing "type" means "function".
            if entry.get("type", "function") != "function":
                continue
            name = entry.get("name")
            if not isinstance(name, str) or not name:
                raise AbiParseError(f"ABI function entry [{idx}] has no name")
            functions[name] = AbiFunction(
                name=name,
                input_types=_param_types(entry.get("inputs"), function_name=name, section="inputs"),
                output_types=_param_types(entry.get("outputs"), function_name=name, section="outputs"),
            )

        return cls(functions)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def function(self, name: str) -> AbiFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise AbiParseError(f"method {name} not found in ABI") from None

    def encode_call(self, name: str, *args: Any) -> bytes:
        return self.function(name).encode_call(*args)

    def decode_output(self, name: str, data: bytes) -> tuple[Any, ...]:
        return self.function(name).decode_output(data)
