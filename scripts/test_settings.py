from __future__ import annotations

import os
import unittest
from decimal import Decimal
from unittest.mock import patch

from keeper.runtime.settings import DEFAULT_RPC_URL, AppSettings, to_decimal, to_int


class AppSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = AppSettings.from_env()

        self.assertEqual(settings.rpc_url, DEFAULT_RPC_URL)
        self.assertEqual(settings.arbitrage_amount_tokens, Decimal("50"))
        self.assertEqual(settings.min_profit_bps, 100)
        self.assertEqual(settings.copy_ratio, Decimal("0.01"))
        self.assertEqual(settings.copy_min_difference_tokens, Decimal("0.5"))
        self.assertEqual(settings.watch_interval_seconds, 600.0)
        self.assertFalse(settings.arbitrage_include_tx)
        self.assertEqual(settings.log_level, "INFO")

    def test_environment_overrides_and_junk_fallbacks(self) -> None:
        env = {
            "RPC_URL": " https://rpc.example.org ",
            "MIN_PROFIT_BPS": "25",
            "ARBITRAGE_AMOUNT_TOKENS": "not-a-number",
            "ARBITRAGE_INCLUDE_TX": "yes",
            "WATCH_INTERVAL_SECONDS": "0",
            "LOG_LEVEL": "chatty",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = AppSettings.from_env()

        self.assertEqual(settings.rpc_url, "https://rpc.example.org")
        self.assertEqual(settings.min_profit_bps, 25)
        self.assertEqual(settings.arbitrage_amount_tokens, Decimal("50"))
        self.assertTrue(settings.arbitrage_include_tx)
        self.assertEqual(settings.watch_interval_seconds, 1.0)
        self.assertEqual(settings.log_level, "INFO")

    def test_non_finite_decimals_fall_back_to_defaults(self) -> None:
        env = {
            "COPY_RATIO": "NaN",
            "ARBITRAGE_AMOUNT_TOKENS": "Infinity",
            "COPY_MIN_DIFFERENCE_TOKENS": "-inf",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = AppSettings.from_env()

        self.assertEqual(settings.copy_ratio, Decimal("0.01"))
        self.assertEqual(settings.arbitrage_amount_tokens, Decimal("50"))
        self.assertEqual(settings.copy_min_difference_tokens, Decimal("0.5"))

    def test_parsers(self) -> None:
        self.assertEqual(to_int("12.7", 0), 12)
        self.assertEqual(to_int("", 3), 3)
        self.assertEqual(to_decimal("0.25", "1"), Decimal("0.25"))


if __name__ == "__main__":
    unittest.main()
