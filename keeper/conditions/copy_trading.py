from __future__ import annotations

import logging
from decimal import ROUND_FLOOR, Decimal

from keeper.chain import ConditionError, Contract, ContractAbi, ContractReader, checksum_address
from keeper.chain.abis import ERC20_ABI
from keeper.common import guarded_call, log_event

from .payload import condition_payload, rebalance_payload
from .types import WAD, CheckResult, RebalanceParams, to_units


def ratio_to_wad(ratio: Decimal) -> int:
    return int((ratio * WAD).to_integral_value(rounding=ROUND_FLOOR))


def evaluate_rebalance(
    *,
    whale_balance: int,
    contract_balance: int,
    native_balance: int,
    ratio_wad: int,
    min_difference: int,
) -> RebalanceParams | None:
    target_balance = whale_balance * ratio_wad // WAD
    difference = target_balance - contract_balance

    # Buying needs native currency on the contract to pay for the swap.
    if difference > min_difference and native_balance > 0:
        return RebalanceParams(is_buy=True, amount=difference)
    if difference < -min_difference:
        return RebalanceParams(is_buy=False, amount=-difference)
    return None


class CopyTradeChecker:
    """Keeps a copy-trading contract's token balance at a fixed ratio of a tracked account."""

    def __init__(
        self,
        *,
        reader: ContractReader,
        logger: logging.Logger,
        copy_trader_address: str,
        whale_address: str,
        whale_token: str,
        ratio: Decimal = Decimal("0.01"),
        min_difference_tokens: Decimal = Decimal("0.5"),
        erc20_abi: ContractAbi | None = None,
    ) -> None:
        self._reader = reader
        self._logger = logger
        self._copy_trader_address = copy_trader_address
        self._whale_address = whale_address
        self._whale_token = whale_token
        self._ratio_wad = ratio_to_wad(ratio)
        # Threshold is expressed in 18-decimal units regardless of the token.
        self._min_difference = to_units(min_difference_tokens, 18)
        self._erc20_abi = erc20_abi or ContractAbi.from_json(ERC20_ABI)

    async def _check(self) -> CheckResult:
        token = Contract.at(self._whale_token, self._erc20_abi)
        whale = checksum_address(self._whale_address, label="whale address")
        copy_trader = checksum_address(self._copy_trader_address, label="copy trader address")

        whale_balance = await self._reader.read_uint256(token, "balanceOf", whale)
        contract_balance = await self._reader.read_uint256(token, "balanceOf", copy_trader)
        native_balance = await self._reader.get_balance(copy_trader)

        params = evaluate_rebalance(
            whale_balance=whale_balance,
            contract_balance=contract_balance,
            native_balance=native_balance,
            ratio_wad=self._ratio_wad,
            min_difference=self._min_difference,
        )
        log_event(
            self._logger,
            level="info",
            event="copy_trade_assessed",
            message="Copy-trade rebalance required" if params else "Copy-trade balance within tolerance",
            whale_balance=str(whale_balance),
            contract_balance=str(contract_balance),
            target_balance=str(whale_balance * self._ratio_wad // WAD),
            native_balance=str(native_balance),
        )

        if params is None:
            return CheckResult(
                satisfied=False,
                payload=condition_payload(False),
                reason="balance within tolerance of target",
            )
        return CheckResult(
            satisfied=True,
            payload={**condition_payload(True), **rebalance_payload(params)},
        )

    async def check_condition(self) -> CheckResult:
        result = await guarded_call(
            self._check,
            logger=self._logger,
            event="copy_trade_check_failed",
            message="Copy-trade condition check failed",
            expected=(ConditionError,),
            on_error=lambda error: CheckResult(
                satisfied=False,
                payload=condition_payload(False),
                reason=str(error),
            ),
            copy_trader=self._copy_trader_address,
        )
        return result if result is not None else CheckResult.failed("check produced no result")
