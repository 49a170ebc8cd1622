from .arbitrage import ArbitrageChecker
from .copy_trading import CopyTradeChecker, evaluate_rebalance
from .evaluator import assess_spread, compute_profit_bps, evaluate_spread
from .job_gate import ensure_job_ready, validate_job_interval, validate_job_time_frame
from .oracle import PriceOracleChecker
from .types import ArbitrageParams, CheckResult, Job, RebalanceParams, SpreadAssessment

__all__ = [
    "ArbitrageChecker",
    "ArbitrageParams",
    "CheckResult",
    "CopyTradeChecker",
    "Job",
    "PriceOracleChecker",
    "RebalanceParams",
    "SpreadAssessment",
    "assess_spread",
    "compute_profit_bps",
    "ensure_job_ready",
    "evaluate_rebalance",
    "evaluate_spread",
    "validate_job_interval",
    "validate_job_time_frame",
]
