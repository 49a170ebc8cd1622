from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from keeper.chain import AbiParseError, ChainClient, ChainConnectionError, ContractReader
from keeper.common import log_event
from keeper.conditions import ArbitrageChecker, CheckResult, CopyTradeChecker, Job, PriceOracleChecker
from keeper.conditions.payload import condition_payload, error_payload

from .settings import AppSettings

MODE_ARBITRAGE_CONDITION = "arbitrage-condition"
MODE_ARBITRAGE_PARAMS = "arbitrage-params"
MODE_ORACLE_UPDATE = "oracle-update"
MODE_COPY_TRADE = "copy-trade"
CHECK_MODES = (
    MODE_ARBITRAGE_CONDITION,
    MODE_ARBITRAGE_PARAMS,
    MODE_ORACLE_UPDATE,
    MODE_COPY_TRADE,
)


async def wait_with_stop(stop_event: asyncio.Event, timeout_seconds: float) -> None:
    if timeout_seconds <= 0:
        return

    try:
        await asyncio.wait_for(stop_event.wait(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        pass


def render_output(mode: str, result: CheckResult) -> dict[str, Any]:
    if mode == MODE_ORACLE_UPDATE:
        return {"success": result.satisfied, "payload": dict(result.payload)}
    if mode == MODE_ARBITRAGE_PARAMS:
        if not result.satisfied:
            return error_payload(result.reason or "failed to derive arbitrage parameters")
        return dict(result.payload)
    if mode == MODE_COPY_TRADE:
        return dict(result.payload) if result.satisfied else condition_payload(False)
    return condition_payload(result.satisfied)


async def evaluate(
    *,
    mode: str,
    reader: ContractReader,
    settings: AppSettings,
    logger: logging.Logger,
    job: Job | None = None,
) -> CheckResult:
    if mode in {MODE_ARBITRAGE_CONDITION, MODE_ARBITRAGE_PARAMS}:
        arbitrage = ArbitrageChecker(
            reader=reader,
            logger=logger,
            arbitrage_address=settings.arbitrage_address,
            amount_tokens=settings.arbitrage_amount_tokens,
            min_profit_bps=settings.min_profit_bps,
        )
        if mode == MODE_ARBITRAGE_CONDITION:
            return await arbitrage.check_condition()
        return await arbitrage.get_parameters(include_tx=settings.arbitrage_include_tx)

    if mode == MODE_ORACLE_UPDATE:
        if job is None:
            return CheckResult.failed("oracle-update requires a job descriptor")
        oracle = PriceOracleChecker(reader=reader, logger=logger, oracle_address=settings.oracle_address)
        return await oracle.checker(job)

    if mode == MODE_COPY_TRADE:
        copy_trade = CopyTradeChecker(
            reader=reader,
            logger=logger,
            copy_trader_address=settings.copy_trader_address,
            whale_address=settings.whale_address,
            whale_token=settings.whale_token,
            ratio=settings.copy_ratio,
            min_difference_tokens=settings.copy_min_difference_tokens,
        )
        return await copy_trade.check_condition()

    raise ValueError(f"Unknown check mode: {mode}")


async def run_check(
    *,
    mode: str,
    settings: AppSettings,
    logger: logging.Logger,
    job: Job | None = None,
) -> dict[str, Any]:
    try:
        async with ChainClient(
            settings.rpc_url,
            logger=logger,
            timeout_seconds=settings.rpc_timeout_seconds,
        ) as client:
            reader = ContractReader(client, logger=logger)
            result = await evaluate(mode=mode, reader=reader, settings=settings, logger=logger, job=job)
    except (ChainConnectionError, AbiParseError) as error:
        log_event(
            logger,
            level="error",
            event="check_setup_failed",
            message="Condition check could not be set up",
            mode=mode,
            error=str(error),
        )
        return error_payload(str(error))

    log_event(
        logger,
        level="info",
        event="check_completed",
        message="Condition check completed",
        mode=mode,
        satisfied=result.satisfied,
        reason=result.reason,
    )
    return render_output(mode, result)


async def run_watch_loop(
    *,
    logger: logging.Logger,
    stop_event: asyncio.Event,
    settings: AppSettings,
    mode: str,
    emit: Callable[[dict[str, Any]], None],
    job: Job | None = None,
) -> None:
    loop = asyncio.get_running_loop()
    next_tick = loop.time()

    while not stop_event.is_set():
        try:
            emit(await run_check(mode=mode, settings=settings, logger=logger, job=job))
        except Exception as error:
            logger.exception(
                "Watch loop iteration failed",
                extra={"event": "watch_loop_error", "mode": mode, "error": str(error)},
            )
        finally:
            next_tick += settings.watch_interval_seconds
            now = loop.time()
            if next_tick <= now:
                missed_cycles = int((now - next_tick) / settings.watch_interval_seconds) + 1
                next_tick += missed_cycles * settings.watch_interval_seconds

            await wait_with_stop(stop_event, max(0.0, next_tick - now))
