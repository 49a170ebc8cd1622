from __future__ import annotations

import logging
import unittest
from datetime import datetime, timedelta, timezone

from eth_abi import decode

from fake_chain import ORACLE, FakeChainClient, selector
from keeper.chain.contracts import ContractReader
from keeper.conditions.oracle import PriceOracleChecker
from keeper.conditions.types import Job

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
STRUCT = "(string[],uint256[],uint256,uint256)"


def _make_job(**overrides) -> Job:
    fields = {
        "job_id": "price_oracle_update",
        "interval_seconds": 600,
        "created_at": NOW - timedelta(hours=1),
        "last_executed": NOW - timedelta(minutes=10),
        "time_frame_seconds": 0,
    }
    fields.update(overrides)
    return Job(**fields)


class PriceOracleCheckerTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.chain = FakeChainClient()
        self.chain.respond(
            ORACLE,
            "prepareUpdateParams()",
            [STRUCT],
            [(["ETH/USD", "BTC/USD"], [50, 75], 3, 300)],
        )
        logger = logging.getLogger("test.oracle")
        self.checker = PriceOracleChecker(
            reader=ContractReader(self.chain, logger=logger),  # type: ignore[arg-type]
            logger=logger,
            oracle_address=ORACLE,
        )

    async def test_ready_job_produces_update_prices_payload(self) -> None:
        result = await self.checker.checker(_make_job(), NOW)

        self.assertTrue(result.satisfied)
        payload = result.payload
        self.assertEqual(payload["to"].lower(), ORACLE)
        self.assertEqual(payload["value"], "0")
        self.assertEqual(
            payload["params"],
            {"tradingPairs": ["ETH/USD", "BTC/USD"], "thresholds": [50, 75], "confirmations": 3, "maxAge": 300},
        )

        data = bytes.fromhex(payload["data"][2:])
        self.assertEqual(data[:4], selector(f"updatePrices({STRUCT})"))
        (decoded,) = decode([STRUCT], data[4:])
        self.assertEqual(tuple(decoded[0]), ("ETH/USD", "BTC/USD"))
        self.assertEqual(tuple(decoded[1]), (50, 75))

    async def test_interval_not_elapsed_short_circuits_without_rpc(self) -> None:
        result = await self.checker.checker(_make_job(last_executed=NOW - timedelta(seconds=30)), NOW)

        self.assertFalse(result.satisfied)
        self.assertIn("job interval validation failed", result.payload["error"])
        self.assertEqual(self.chain.calls, [])

    async def test_expired_job_reports_age_and_limit(self) -> None:
        job = _make_job(created_at=NOW - timedelta(seconds=101), last_executed=None, time_frame_seconds=100)

        result = await self.checker.checker(job, NOW)

        self.assertFalse(result.satisfied)
        self.assertEqual(result.payload, {"error": "job expired: age 101s exceeds time frame 100 seconds"})
        self.assertEqual(self.chain.calls, [])

    async def test_time_frame_boundary_still_runs(self) -> None:
        job = _make_job(created_at=NOW - timedelta(seconds=100), last_executed=None, time_frame_seconds=100)

        result = await self.checker.checker(job, NOW)

        self.assertTrue(result.satisfied)

    async def test_undecodable_struct_is_reported(self) -> None:
        self.chain.respond_raw(ORACLE, "prepareUpdateParams()", b"\x00" * 8)

        result = await self.checker.checker(_make_job(), NOW)

        self.assertFalse(result.satisfied)
        self.assertIn("failed to unpack prepareUpdateParams", result.reason or "")

    async def test_placeholder_address_is_reported(self) -> None:
        logger = logging.getLogger("test.oracle")
        checker = PriceOracleChecker(
            reader=ContractReader(self.chain, logger=logger),  # type: ignore[arg-type]
            logger=logger,
            oracle_address="YOUR_ORACLE_CONTRACT_ADDRESS",
        )

        result = await checker.checker(_make_job(), NOW)

        self.assertFalse(result.satisfied)
        self.assertIn("Invalid contract address", result.reason or "")


if __name__ == "__main__":
    unittest.main()
