from __future__ import annotations

from typing import Any

from keeper.chain.structs import PriceUpdateParams

from .types import ArbitrageParams, RebalanceParams


def condition_payload(satisfied: bool) -> dict[str, Any]:
    return {"satisfied": satisfied}


def transaction_payload(
    *,
    to: str,
    data: bytes,
    params: PriceUpdateParams | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "to": to,
        "data": "0x" + data.hex(),
        "value": "0",
    }
    if params is not None:
        payload["params"] = params.to_dict()
    return payload


def arbitrage_params_payload(
    params: ArbitrageParams,
    *,
    tx: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "amount": str(params.amount),
        "buyFromVenue1": params.buy_from_venue1,
    }
    if tx is not None:
        payload["tx"] = tx
    return payload


def rebalance_payload(params: RebalanceParams) -> dict[str, Any]:
    return {
        "isBuy": params.is_buy,
        "amount": str(params.amount),
    }


def error_payload(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}
