from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import signal
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from keeper.common import log_event
from keeper.conditions import Job
from keeper.conditions.payload import error_payload
from keeper.runtime import CHECK_MODES, AppSettings, run_check, run_watch_loop, setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Evaluate an on-chain keeper condition and print the result as JSON.",
    )
    parser.add_argument("mode", choices=CHECK_MODES)
    parser.add_argument("--rpc-url", default=None, help="JSON-RPC endpoint (overrides RPC_URL)")
    parser.add_argument(
        "--address",
        default=None,
        help="Target contract address for the chosen mode (overrides the matching *_ADDRESS variable)",
    )
    parser.add_argument("--min-profit-bps", type=int, default=None)
    parser.add_argument("--include-tx", action="store_true", help="Add executeArbitrage calldata to arbitrage-params")
    job_group = parser.add_mutually_exclusive_group()
    job_group.add_argument("--job", default=None, help="Job descriptor as a JSON object")
    job_group.add_argument("--job-file", type=Path, default=None, help="Path to a JSON job descriptor")
    parser.add_argument("--watch", action="store_true", help="Repeat the check every WATCH_INTERVAL_SECONDS")
    return parser.parse_args(argv)


def apply_overrides(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    overrides: dict[str, Any] = {}
    if args.rpc_url:
        overrides["rpc_url"] = args.rpc_url.strip()
    if args.min_profit_bps is not None:
        overrides["min_profit_bps"] = max(0, args.min_profit_bps)
    if args.include_tx:
        overrides["arbitrage_include_tx"] = True
    if args.address:
        field_name = {
            "oracle-update": "oracle_address",
            "copy-trade": "copy_trader_address",
        }.get(args.mode, "arbitrage_address")
        overrides[field_name] = args.address.strip()
    return replace(settings, **overrides) if overrides else settings


def load_job(args: argparse.Namespace) -> Job | None:
    if args.job_file is not None:
        raw = args.job_file.read_text(encoding="utf-8")
    elif args.job is not None:
        raw = args.job
    else:
        return None
    return Job.from_dict(json.loads(raw))


def emit(output: dict[str, Any]) -> None:
    print(json.dumps(output, ensure_ascii=False, default=str), flush=True)


async def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    settings = AppSettings.from_env()
    logger = setup_logger(settings.log_level)

    try:
        settings = apply_overrides(settings, args)
        job = load_job(args)
    except (OSError, ValueError) as error:
        log_event(logger, level="error", event="setup_failed", message="Invalid invocation", error=str(error))
        emit(error_payload(str(error)))
        return 1

    if args.mode == "oracle-update" and job is None:
        emit(error_payload("oracle-update requires --job or --job-file"))
        return 1

    if not args.watch:
        output = await run_check(mode=args.mode, settings=settings, logger=logger, job=job)
        emit(output)
        return 1 if output.get("success") is False and "error" in output else 0

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def request_shutdown(sig: signal.Signals) -> None:
        logger.info(
            "Shutdown signal received",
            extra={"event": "shutdown_signal_received", "signal": sig.name},
        )
        stop_event.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, request_shutdown, sig)

    logger.info(
        "Watch loop started",
        extra={
            "event": "watch_started",
            "mode": args.mode,
            "watch_interval_seconds": settings.watch_interval_seconds,
        },
    )
    await run_watch_loop(
        logger=logger,
        stop_event=stop_event,
        settings=settings,
        mode=args.mode,
        emit=emit,
        job=job,
    )
    logger.info("Shutdown completed", extra={"event": "shutdown_completed"})
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
