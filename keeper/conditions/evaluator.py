from __future__ import annotations

from keeper.chain.errors import InvalidQuoteError

from .types import BPS_DENOMINATOR, SpreadAssessment


def _validate_quotes(quote_a: int, quote_b: int) -> None:
    for label, quote in (("quote_a", quote_a), ("quote_b", quote_b)):
        if isinstance(quote, bool) or not isinstance(quote, int):
            raise InvalidQuoteError(f"{label} must be an integer amount, got {quote!r}")
        if quote < 0:
            raise InvalidQuoteError(f"{label} must not be negative, got {quote}")


def compute_profit_bps(high: int, low: int) -> int:
    if low <= 0:
        raise InvalidQuoteError(f"cannot compute profit against a zero quote (high={high}, low={low})")
    return (high - low) * BPS_DENOMINATOR // low


def evaluate_spread(quote_a: int, quote_b: int, min_profit_bps: int) -> bool:
    _validate_quotes(quote_a, quote_b)
    high, low = (quote_a, quote_b) if quote_a >= quote_b else (quote_b, quote_a)
    if high == low:
        return False
    return compute_profit_bps(high, low) >= min_profit_bps


def assess_spread(venue1_output: int, venue2_output: int, min_profit_bps: int) -> SpreadAssessment:
    _validate_quotes(venue1_output, venue2_output)
    buy_from_venue1 = venue1_output > venue2_output

    if venue1_output == venue2_output:
        profit_amount = 0
        profit_bps = 0
        satisfied = False
    else:
        high, low = (venue1_output, venue2_output) if buy_from_venue1 else (venue2_output, venue1_output)
        profit_amount = high - low
        profit_bps = compute_profit_bps(high, low)
        satisfied = profit_bps >= min_profit_bps

    return SpreadAssessment(
        venue1_output=venue1_output,
        venue2_output=venue2_output,
        profit_amount=profit_amount,
        profit_bps=profit_bps,
        min_profit_bps=min_profit_bps,
        buy_from_venue1=buy_from_venue1,
        satisfied=satisfied,
    )
