from __future__ import annotations

import json

_PRICE_UPDATE_PARAMS_COMPONENTS = [
    {"internalType": "string[]", "name": "tradingPairs", "type": "string[]"},
    {"internalType": "uint256[]", "name": "thresholds", "type": "uint256[]"},
    {"internalType": "uint256", "name": "confirmations", "type": "uint256"},
    {"internalType": "uint256", "name": "maxAge", "type": "uint256"},
]

ARBITRAGE_ABI = json.dumps(
    [
        {"inputs": [], "name": "dex1", "outputs": [{"name": "", "type": "address"}], "stateMutability": "view", "type": "function"},
        {"inputs": [], "name": "dex2", "outputs": [{"name": "", "type": "address"}], "stateMutability": "view", "type": "function"},
        {"inputs": [], "name": "token1", "outputs": [{"name": "", "type": "address"}], "stateMutability": "view", "type": "function"},
        {"inputs": [], "name": "token2", "outputs": [{"name": "", "type": "address"}], "stateMutability": "view", "type": "function"},
        {
            "inputs": [
                {"name": "amount", "type": "uint256"},
                {"name": "buyFromDex1", "type": "bool"},
            ],
            "name": "executeArbitrage",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function",
        },
    ]
)

DEX_ABI = json.dumps(
    [
        {
            "inputs": [
                {"name": "_tokenIn", "type": "address"},
                {"name": "_amountIn", "type": "uint256"},
            ],
            "name": "getOutputAmount",
            "outputs": [{"name": "", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function",
        },
        {"inputs": [], "name": "getCurrentPrice", "outputs": [{"name": "", "type": "uint256"}], "stateMutability": "view", "type": "function"},
    ]
)

ERC20_ABI = json.dumps(
    [
        {"inputs": [{"name": "account", "type": "address"}], "name": "balanceOf", "outputs": [{"name": "", "type": "uint256"}], "stateMutability": "view", "type": "function"},
        {"inputs": [], "name": "decimals", "outputs": [{"name": "", "type": "uint8"}], "stateMutability": "view", "type": "function"},
        {"inputs": [], "name": "symbol", "outputs": [{"name": "", "type": "string"}], "stateMutability": "view", "type": "function"},
    ]
)

PRICE_ORACLE_ABI = json.dumps(
    [
        {
            "inputs": [],
            "name": "prepareUpdateParams",
            "outputs": [
                {
                    "components": _PRICE_UPDATE_PARAMS_COMPONENTS,
                    "internalType": "struct DynamicPriceOracle.PriceUpdateParams",
                    "name": "",
                    "type": "tuple",
                }
            ],
            "stateMutability": "view",
            "type": "function",
        },
        {
            "inputs": [
                {
                    "components": _PRICE_UPDATE_PARAMS_COMPONENTS,
                    "internalType": "struct DynamicPriceOracle.PriceUpdateParams",
                    "name": "params",
                    "type": "tuple",
                }
            ],
            "name": "updatePrices",
            "outputs": [],
            "stateMutability": "nonpayable",
            "type": "function",
        },
    ]
)
