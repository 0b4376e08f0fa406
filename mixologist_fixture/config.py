import os

from mixologist_fixture.common import ZERO_ADDRESS
from mixologist_fixture.errors import NotFound

PRICE_UNIT = 10 ** 18
# UniswapV2 pair reserves are stored as uint112
UNISWAP_V2_MAX_RESERVE = 2 ** 112 - 1
DEADLINE_MARGIN = 1000 * 60

# Per chain id addresses used when deploying BeachBar outside of the test fixture.
# Any value can be overridden with TAP_ADDRESS, FEE_TO and FEE_VE_TO.
NetworkConstants = {
    "31337": {
        "tapAddress": ZERO_ADDRESS,
        "feeTo": "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
        "feeVeTo": "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
    },
    "1337": {
        "tapAddress": ZERO_ADDRESS,
        "feeTo": "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
        "feeVeTo": "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
    },
}

TokenConfig = {
    "USDC": {"contract": "ERC20Mock", "initialSupply": 10 ** 9 * PRICE_UNIT},
    "WETH": {"contract": "WETH9Mock"},
    "TAP": {"contract": "ERC20Mock", "initialSupply": 10 ** 9 * PRICE_UNIT},
}

# Fixture defaults, copy before overriding for a single run
FixtureDefaults = {
    # Quote (USDC) per base (WETH), 18 decimals
    "wethUsdcPrice": 1000 * PRICE_UNIT,
    # TAP per WETH in the WETH/TAP pool
    "wethTapPrice": 1 * PRICE_UNIT,
    "wethPairAmount": 10 ** 6 * PRICE_UNIT,
    "riskTier": "mediumRisk",
    "eoaBalance": 100_000 * PRICE_UNIT,
    "liquidationQueue": {
        "activationTime": 600,  # 10 min
        "minBidAmount": 200 * PRICE_UNIT,  # 200 USDC
        "closeToMinBidAmount": 202 * PRICE_UNIT,
        "defaultBidAmount": 400 * PRICE_UNIT,  # 400 USDC
    },
    "curveStableIndex": 2,
}


def getNetworkConstants(chainId):
    key = str(chainId)
    if key not in NetworkConstants:
        raise NotFound("No network constants for chain {}".format(chainId))

    constants = dict(NetworkConstants[key])
    constants["tapAddress"] = os.getenv("TAP_ADDRESS", constants["tapAddress"])
    constants["feeTo"] = os.getenv("FEE_TO", constants["feeTo"])
    constants["feeVeTo"] = os.getenv("FEE_VE_TO", constants["feeVeTo"])
    return constants
