from collections import namedtuple

from mixologist_fixture.common import ZERO_ADDRESS
from mixologist_fixture.config import PRICE_UNIT

SET_LIQUIDATION_QUEUE = (
    "setLiquidationQueue(address,(uint256,uint256,uint256,uint256,address,address,address))"
)

_LiquidationQueueConfig = namedtuple(
    "LiquidationQueueConfig",
    [
        "activationTime",
        "minBidAmount",
        "closeToMinBidAmount",
        "defaultBidAmount",
        "feeCollector",
        "bidExecutionSwapper",
        "usdoSwapper",
    ],
)


class LiquidationQueueConfig(_LiquidationQueueConfig):
    """LiquidationQueue meta, field order matches the on-chain struct"""

    __slots__ = ()

    def __new__(
        cls,
        activationTime,
        minBidAmount,
        closeToMinBidAmount,
        defaultBidAmount,
        feeCollector,
        bidExecutionSwapper=ZERO_ADDRESS,
        usdoSwapper=ZERO_ADDRESS,
    ):
        if activationTime < 0 or minBidAmount < 0:
            raise ValueError("Liquidation queue amounts cannot be negative")
        if closeToMinBidAmount < minBidAmount:
            raise ValueError(
                "closeToMinBidAmount {} is below minBidAmount {}".format(
                    closeToMinBidAmount, minBidAmount
                )
            )
        if defaultBidAmount < closeToMinBidAmount:
            raise ValueError(
                "defaultBidAmount {} is below closeToMinBidAmount {}".format(
                    defaultBidAmount, closeToMinBidAmount
                )
            )
        return super().__new__(
            cls,
            int(activationTime),
            int(minBidAmount),
            int(closeToMinBidAmount),
            int(defaultBidAmount),
            feeCollector,
            bidExecutionSwapper,
            usdoSwapper,
        )

    @classmethod
    def fromConfig(cls, config, feeCollector):
        return cls(
            config["activationTime"],
            config["minBidAmount"],
            config["closeToMinBidAmount"],
            config["defaultBidAmount"],
            feeCollector,
            config.get("bidExecutionSwapper", ZERO_ADDRESS),
            config.get("usdoSwapper", ZERO_ADDRESS),
        )


class LiqDeployer:
    def __init__(self, contracts, encoder, bar) -> None:
        self.contracts = contracts
        self.encoder = encoder
        self.bar = bar

    def registerLiquidationQueue(self, market, config, name="liquidationQueue"):
        queue = self.contracts.deploy("LiquidationQueue", [], name)

        setLiquidationQueueFn = self.encoder.encodeInner(
            SET_LIQUIDATION_QUEUE, [queue.address, tuple(config)]
        )
        payload = self.encoder.wrapForModule(
            self.encoder.modules.moduleId("Setter"), setLiquidationQueueFn
        )
        self.bar.executeMixologistFn([market], [self.encoder.wrapForExecution(payload)])
        self.contracts.log("Liquidation queue %s set on %s", queue.address, market)
        return queue

    def deployHelpers(self, market):
        helper = self.contracts.deploy("MixologistHelper", [], "mixologistHelper")
        bidder = self.contracts.deploy(
            "UniUsdoToWethBidder",
            [self.contracts.artifacts.address("multiSwapper"), self.contracts.artifacts.address(market)],
            "usdoToWethBidder",
        )
        return (helper, bidder)

    def deployAndSetUsdo(self, name="usdo"):
        usdo = self.contracts.deploy("ERC20Mock", [10 ** 9 * PRICE_UNIT], name)
        self.contracts.call("bar", "setUsdoToken(address)", [usdo.address])
        return usdo

    def deployCurveStableToUsdoBidder(self, market, stable, usdo, stableIndex):
        artifacts = self.contracts.artifacts
        curvePool = self.contracts.deploy(
            "CurvePoolMock", [artifacts.address(usdo), artifacts.address(stable)], "curvePoolMock"
        )
        curveSwapper = self.contracts.deploy(
            "CurveSwapper", [curvePool.address, artifacts.address("bar")], "curveSwapper"
        )
        stableToUsdoBidder = self.contracts.deploy(
            "CurveStableToUsdoBidder",
            [curveSwapper.address, artifacts.address(market), stableIndex],
            "stableToUsdoBidder",
        )
        return (stableToUsdoBidder, curveSwapper)
