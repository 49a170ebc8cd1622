from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

DEFAULT_RPC_URL = "https://sepolia.base.org"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def to_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def to_int(value: Any, default: int) -> int:
    try:
        if value is None or str(value).strip() == "":
            return default
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return default


def to_float(value: Any, default: float) -> float:
    try:
        if value is None or str(value).strip() == "":
            return default
        return float(str(value).strip())
    except (TypeError, ValueError):
        return default


def to_decimal(value: Any, default: str) -> Decimal:
    try:
        if value is None or str(value).strip() == "":
            return Decimal(default)
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal(default)
    # NaN and Infinity parse but cannot scale to integer token units.
    return parsed if parsed.is_finite() else Decimal(default)


def normalize_log_level(value: str) -> str:
    level = (value or "").strip().upper()
    if level in LOG_LEVELS:
        return level
    return "INFO"


@dataclass(slots=True)
class AppSettings:
    rpc_url: str
    rpc_timeout_seconds: float
    arbitrage_address: str
    arbitrage_amount_tokens: Decimal
    min_profit_bps: int
    oracle_address: str
    copy_trader_address: str
    whale_address: str
    whale_token: str
    arbitrage_include_tx: bool
    copy_ratio: Decimal
    copy_min_difference_tokens: Decimal
    watch_interval_seconds: float
    log_level: str

    @classmethod
    def from_env(cls) -> "AppSettings":
        return cls(
            rpc_url=os.getenv("RPC_URL", DEFAULT_RPC_URL).strip(),
            rpc_timeout_seconds=max(1.0, to_float(os.getenv("RPC_TIMEOUT_SECONDS"), 10.0)),
            arbitrage_address=os.getenv("ARBITRAGE_ADDRESS", "").strip(),
            arbitrage_amount_tokens=to_decimal(os.getenv("ARBITRAGE_AMOUNT_TOKENS"), "50"),
            min_profit_bps=max(0, to_int(os.getenv("MIN_PROFIT_BPS"), 100)),
            oracle_address=os.getenv("ORACLE_ADDRESS", "").strip(),
            copy_trader_address=os.getenv("COPY_TRADER_ADDRESS", "").strip(),
            whale_address=os.getenv("WHALE_ADDRESS", "").strip(),
            whale_token=os.getenv("WHALE_TOKEN", "").strip(),
            arbitrage_include_tx=to_bool(os.getenv("ARBITRAGE_INCLUDE_TX"), False),
            copy_ratio=to_decimal(os.getenv("COPY_RATIO"), "0.01"),
            copy_min_difference_tokens=to_decimal(os.getenv("COPY_MIN_DIFFERENCE_TOKENS"), "0.5"),
            watch_interval_seconds=max(1.0, to_float(os.getenv("WATCH_INTERVAL_SECONDS"), 600.0)),
            log_level=normalize_log_level(os.getenv("LOG_LEVEL", "INFO")),
        )
