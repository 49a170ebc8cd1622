from __future__ import annotations

import json
import unittest

from eth_abi import decode, encode

from keeper.chain.abi import ContractAbi
from keeper.chain.abis import ARBITRAGE_ABI, ERC20_ABI, PRICE_ORACLE_ABI
from keeper.chain.errors import AbiParseError, DecodeError, EmptyResultError, EncodeError


class ContractAbiParseTests(unittest.TestCase):
    def test_packaged_abis_parse(self) -> None:
        arbitrage = ContractAbi.from_json(ARBITRAGE_ABI)
        oracle = ContractAbi.from_json(PRICE_ORACLE_ABI)

        self.assertIn("dex1", arbitrage)
        self.assertEqual(arbitrage.function("executeArbitrage").signature, "executeArbitrage(uint256,bool)")
        self.assertEqual(
            oracle.function("updatePrices").signature,
            "updatePrices((string[],uint256[],uint256,uint256))",
        )
        self.assertEqual(
            oracle.function("prepareUpdateParams").output_types,
            ("(string[],uint256[],uint256,uint256)",),
        )

    def test_well_known_selectors(self) -> None:
        erc20 = ContractAbi.from_json(ERC20_ABI)

        self.assertEqual(erc20.function("balanceOf").selector.hex(), "70a08231")
        self.assertEqual(erc20.function("decimals").selector.hex(), "313ce567")

    def test_events_and_constructors_are_skipped(self) -> None:
        abi = ContractAbi.from_json(
            [
                {"type": "constructor", "inputs": []},
                {"type": "event", "name": "Swap", "inputs": []},
                {"name": "dex1", "inputs": [], "outputs": [{"name": "", "type": "address"}]},
            ]
        )

        self.assertIn("dex1", abi)
        self.assertNotIn("Swap", abi)

    def test_malformed_abis_raise_parse_error(self) -> None:
        cases = [
            "not json",
            json.dumps({"name": "dex1"}),
            json.dumps([{"type": "function", "inputs": []}]),
            json.dumps([{"type": "function", "name": "f", "inputs": [{"name": "x"}]}]),
            json.dumps([{"type": "function", "name": "f", "inputs": [{"type": "uint7"}]}]),
            json.dumps([{"type": "function", "name": "f", "inputs": [{"type": "tuple"}]}]),
        ]
        for raw in cases:
            with self.subTest(raw=raw):
                with self.assertRaises(AbiParseError):
                    ContractAbi.from_json(raw)

    def test_unknown_method_raises_parse_error(self) -> None:
        with self.assertRaises(AbiParseError):
            ContractAbi.from_json(ERC20_ABI).function("transfer")


class AbiCodecTests(unittest.TestCase):
    def setUp(self) -> None:
        self.erc20 = ContractAbi.from_json(ERC20_ABI)
        self.oracle = ContractAbi.from_json(PRICE_ORACLE_ABI)

    def test_encode_call_prefixes_selector(self) -> None:
        holder = "0x" + "ab" * 20
        data = self.erc20.encode_call("balanceOf", holder)

        self.assertEqual(data[:4].hex(), "70a08231")
        self.assertEqual(decode(["address"], data[4:])[0].lower(), holder)

    def test_encode_call_rejects_bad_arguments(self) -> None:
        with self.assertRaises(EncodeError):
            self.erc20.encode_call("balanceOf")
        with self.assertRaises(EncodeError):
            self.erc20.encode_call("balanceOf", "not-an-address")

    def test_decode_output_returns_typed_values(self) -> None:
        raw = encode(["(string[],uint256[],uint256,uint256)"], [(["ETH/USD", "BTC/USD"], [50, 75], 3, 300)])

        (params,) = self.oracle.decode_output("prepareUpdateParams", raw)

        self.assertEqual(tuple(params[0]), ("ETH/USD", "BTC/USD"))
        self.assertEqual(tuple(params[1]), (50, 75))
        self.assertEqual(params[2:], (3, 300))

    def test_empty_return_data_raises_empty_result(self) -> None:
        with self.assertRaises(EmptyResultError):
            self.erc20.decode_output("decimals", b"")

    def test_function_without_outputs_raises_empty_result(self) -> None:
        with self.assertRaises(EmptyResultError):
            self.oracle.decode_output("updatePrices", b"\x00" * 32)

    def test_truncated_return_data_raises_decode_error(self) -> None:
        with self.assertRaises(DecodeError):
            self.oracle.decode_output("prepareUpdateParams", b"\x00" * 8)


if __name__ == "__main__":
    unittest.main()
