from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

BPS_DENOMINATOR = 10_000
WAD = 10**18


def to_units(amount: Decimal | str | int, decimals: int) -> int:
    """Scale a human token amount to its smallest unit, truncating extra precision."""
    return int(Decimal(str(amount)).scaleb(decimals))


def parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        if value <= 0:
            return None
        return datetime.fromtimestamp(float(value), tz=timezone.utc)

    raw = str(value).strip()
    if not raw:
        return None
    # Schedulers serialise an unset timestamp as year 1.
    if raw.startswith("0001-01-01"):
        return None
    if raw.lstrip("-").replace(".", "", 1).isdigit():
        return parse_timestamp(float(raw))
    normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    parsed = datetime.fromisoformat(normalized)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


@dataclass(slots=True, frozen=True)
class Job:
    job_id: str
    interval_seconds: int
    created_at: datetime
    last_executed: datetime | None = None
    time_frame_seconds: int = 0

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Job":
        if not isinstance(raw, dict):
            raise ValueError(f"Job descriptor must be an object, got {type(raw).__name__}")

        job_id = _first_present(raw, "id", "jobId", "job_id")
        if job_id in (None, ""):
            raise ValueError("Job descriptor is missing its id")

        created_at = parse_timestamp(_first_present(raw, "createdAt", "created_at"))
        if created_at is None:
            raise ValueError(f"Job {job_id} is missing createdAt")

        interval = _first_present(raw, "intervalSeconds", "timeInterval", "interval_seconds")
        time_frame = _first_present(raw, "timeFrameSeconds", "timeFrame", "time_frame_seconds")

        return cls(
            job_id=str(job_id),
            interval_seconds=int(interval or 0),
            created_at=created_at,
            last_executed=parse_timestamp(_first_present(raw, "lastExecuted", "last_executed")),
            time_frame_seconds=int(time_frame or 0),
        )


@dataclass(slots=True, frozen=True)
class ArbitrageParams:
    amount: int
    buy_from_venue1: bool


@dataclass(slots=True, frozen=True)
class SpreadAssessment:
    venue1_output: int
    venue2_output: int
    profit_amount: int
    profit_bps: int
    min_profit_bps: int
    buy_from_venue1: bool
    satisfied: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "venue1_output": str(self.venue1_output),
            "venue2_output": str(self.venue2_output),
            "profit_amount": str(self.profit_amount),
            "profit_bps": self.profit_bps,
            "min_profit_bps": self.min_profit_bps,
            "buy_from_venue1": self.buy_from_venue1,
            "satisfied": self.satisfied,
        }


@dataclass(slots=True, frozen=True)
class RebalanceParams:
    is_buy: bool
    amount: int


@dataclass(slots=True, frozen=True)
class CheckResult:
    satisfied: bool
    payload: dict[str, Any] = field(default_factory=dict)
    reason: str | None = None

    @classmethod
    def failed(cls, reason: str) -> "CheckResult":
        return cls(satisfied=False, payload={"error": reason}, reason=reason)

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.satisfied, "payload": dict(self.payload)}
