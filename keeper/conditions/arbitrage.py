from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from keeper.chain import ConditionError, Contract, ContractAbi, ContractReader
from keeper.chain.abis import ARBITRAGE_ABI, DEX_ABI, ERC20_ABI
from keeper.common import guarded_call, log_event

from .evaluator import assess_spread
from .payload import arbitrage_params_payload, condition_payload, transaction_payload
from .types import ArbitrageParams, CheckResult, SpreadAssessment, to_units


class ArbitrageChecker:
    """Cross-DEX spread check against the arbitrage contract's configured venues.

    Reads run strictly in order: venue and token addresses from the arbitrage
    contract, token decimals, then one quote per venue for the same input amount.
    """

    def __init__(
        self,
        *,
        reader: ContractReader,
        logger: logging.Logger,
        arbitrage_address: str,
        amount_tokens: Decimal = Decimal("50"),
        min_profit_bps: int = 100,
        arbitrage_abi: ContractAbi | None = None,
        dex_abi: ContractAbi | None = None,
        erc20_abi: ContractAbi | None = None,
    ) -> None:
        self._reader = reader
        self._logger = logger
        self._arbitrage_address = arbitrage_address
        self._amount_tokens = amount_tokens
        self._min_profit_bps = min_profit_bps
        self._arbitrage_abi = arbitrage_abi or ContractAbi.from_json(ARBITRAGE_ABI)
        self._dex_abi = dex_abi or ContractAbi.from_json(DEX_ABI)
        self._erc20_abi = erc20_abi or ContractAbi.from_json(ERC20_ABI)

    async def fetch_assessment(self) -> tuple[ArbitrageParams, SpreadAssessment]:
        arbitrage = Contract.at(self._arbitrage_address, self._arbitrage_abi)

        dex1_address = await self._reader.read_address(arbitrage, "dex1")
        dex2_address = await self._reader.read_address(arbitrage, "dex2")
        token1_address = await self._reader.read_address(arbitrage, "token1")

        token1 = Contract.at(token1_address, self._erc20_abi)
        decimals = await self._reader.read_uint8(token1, "decimals")
        amount = to_units(self._amount_tokens, decimals)

        dex1_output = await self._reader.read_quote(Contract.at(dex1_address, self._dex_abi), token1_address, amount)
        dex2_output = await self._reader.read_quote(Contract.at(dex2_address, self._dex_abi), token1_address, amount)

        assessment = assess_spread(dex1_output, dex2_output, self._min_profit_bps)
        log_event(
            self._logger,
            level="info",
            event="arbitrage_assessed",
            message="Arbitrage opportunity found" if assessment.satisfied else "No profitable arbitrage",
            arbitrage=arbitrage.address,
            dex1=dex1_address,
            dex2=dex2_address,
            token1=token1_address,
            token1_decimals=decimals,
            amount=str(amount),
            **assessment.to_dict(),
        )
        return ArbitrageParams(amount=amount, buy_from_venue1=assessment.buy_from_venue1), assessment

    def build_execute_tx(self, params: ArbitrageParams) -> dict[str, Any]:
        arbitrage = Contract.at(self._arbitrage_address, self._arbitrage_abi)
        data = arbitrage.abi.encode_call("executeArbitrage", params.amount, params.buy_from_venue1)
        return transaction_payload(to=arbitrage.address, data=data)

    async def _check_condition(self) -> CheckResult:
        _, assessment = await self.fetch_assessment()
        if assessment.satisfied:
            return CheckResult(satisfied=True, payload=condition_payload(True))
        if assessment.profit_amount == 0:
            reason = "no price difference between venues"
        else:
            reason = f"profit {assessment.profit_bps} bps below minimum {assessment.min_profit_bps} bps"
        return CheckResult(satisfied=False, payload=condition_payload(False), reason=reason)

    async def check_condition(self) -> CheckResult:
        result = await guarded_call(
            self._check_condition,
            logger=self._logger,
            event="arbitrage_condition_failed",
            message="Arbitrage condition check failed",
            expected=(ConditionError,),
            on_error=lambda error: CheckResult(
                satisfied=False,
                payload=condition_payload(False),
                reason=str(error),
            ),
            arbitrage=self._arbitrage_address,
        )
        return result if result is not None else CheckResult.failed("check produced no result")

    async def _get_parameters(self, include_tx: bool) -> CheckResult:
        params, _ = await self.fetch_assessment()
        tx = self.build_execute_tx(params) if include_tx else None
        return CheckResult(satisfied=True, payload=arbitrage_params_payload(params, tx=tx))

    async def get_parameters(self, *, include_tx: bool = False) -> CheckResult:
        result = await guarded_call(
            lambda: self._get_parameters(include_tx),
            logger=self._logger,
            event="arbitrage_parameters_failed",
            message="Failed to derive arbitrage parameters",
            expected=(ConditionError,),
            on_error=lambda error: CheckResult.failed(str(error)),
            arbitrage=self._arbitrage_address,
        )
        return result if result is not None else CheckResult.failed("check produced no result")
