from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import DecodeError


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(slots=True, frozen=True)
class PriceUpdateParams:
    trading_pairs: tuple[str, ...]
    thresholds: tuple[int, ...]
    confirmations: int
    max_age: int

    @classmethod
    def from_abi(cls, value: Any) -> "PriceUpdateParams":
        if not isinstance(value, (tuple, list)) or len(value) != 4:
            raise DecodeError(f"PriceUpdateParams expects a 4-field tuple, got {value!r}")

        pairs, thresholds, confirmations, max_age = value
        if not isinstance(pairs, (tuple, list)) or not all(isinstance(item, str) for item in pairs):
            raise DecodeError(f"PriceUpdateParams.tradingPairs is not a string list: {pairs!r}")
        if not isinstance(thresholds, (tuple, list)) or not all(_is_uint(item) for item in thresholds):
            raise DecodeError(f"PriceUpdateParams.thresholds is not a uint list: {thresholds!r}")
        if not _is_uint(confirmations) or not _is_uint(max_age):
            raise DecodeError(
                f"PriceUpdateParams scalars are not uints: confirmations={confirmations!r} maxAge={max_age!r}"
            )

        return cls(
            trading_pairs=tuple(pairs),
            thresholds=tuple(thresholds),
            confirmations=confirmations,
            max_age=max_age,
        )

    def to_abi(self) -> tuple[list[str], list[int], int, int]:
        return (list(self.trading_pairs), list(self.thresholds), self.confirmations, self.max_age)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tradingPairs": list(self.trading_pairs),
            "thresholds": list(self.thresholds),
            "confirmations": self.confirmations,
            "maxAge": self.max_age,
        }
