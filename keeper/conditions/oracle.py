from __future__ import annotations

import logging
from datetime import datetime

from keeper.chain import ConditionError, Contract, ContractAbi, ContractReader
from keeper.chain.abis import PRICE_ORACLE_ABI
from keeper.common import guarded_call, log_event

from .job_gate import ensure_job_ready
from .payload import transaction_payload
from .types import CheckResult, Job


class PriceOracleChecker:
    def __init__(
        self,
        *,
        reader: ContractReader,
        logger: logging.Logger,
        oracle_address: str,
        oracle_abi: ContractAbi | None = None,
    ) -> None:
        self._reader = reader
        self._logger = logger
        self._oracle_address = oracle_address
        self._oracle_abi = oracle_abi or ContractAbi.from_json(PRICE_ORACLE_ABI)

    async def _check(self, job: Job, now: datetime | None) -> CheckResult:
        ensure_job_ready(job, now)

        oracle = Contract.at(self._oracle_address, self._oracle_abi)
        params = await self._reader.read_struct(oracle, "prepareUpdateParams")
        data = oracle.abi.encode_call("updatePrices", params.to_abi())

        log_event(
            self._logger,
            level="info",
            event="oracle_update_prepared",
            message="Price update transaction prepared",
            job_id=job.job_id,
            oracle=oracle.address,
            trading_pairs=list(params.trading_pairs),
            confirmations=params.confirmations,
            max_age=params.max_age,
        )
        return CheckResult(
            satisfied=True,
            payload=transaction_payload(to=oracle.address, data=data, params=params),
        )

    async def checker(self, job: Job, now: datetime | None = None) -> CheckResult:
        result = await guarded_call(
            lambda: self._check(job, now),
            logger=self._logger,
            event="oracle_check_failed",
            message="Price oracle check did not produce a payload",
            expected=(ConditionError,),
            on_error=lambda error: CheckResult.failed(str(error)),
            job_id=job.job_id,
            oracle=self._oracle_address,
        )
        return result if result is not None else CheckResult.failed("check produced no result")
