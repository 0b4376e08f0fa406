from collections import namedtuple

from mixologist_fixture.config import PRICE_UNIT
from mixologist_fixture.errors import RatioOverflow

LiquidityPlan = namedtuple("LiquidityPlan", ["baseAmount", "quoteAmount", "targetPrice"])


class PriceRatioCalculator:
    """
    Sizes the paired amounts minted into a fresh pool so that the pool opens at
    targetPrice (quote per base, scaled by priceUnit). Integer math only; any
    remainder is truncated so we never mint more than the ratio allows.
    """

    def __init__(self, priceUnit=PRICE_UNIT, maxAmount=2 ** 256 - 1) -> None:
        if priceUnit <= 0:
            raise ValueError("Price unit must be positive")
        self.priceUnit = priceUnit
        self.maxAmount = maxAmount

    def planLiquidity(self, targetPrice, baseAmount):
        targetPrice = int(targetPrice)
        baseAmount = int(baseAmount)
        if baseAmount <= 0:
            raise ValueError("Base amount must be positive, got {}".format(baseAmount))
        if targetPrice < 0:
            raise ValueError("Target price cannot be negative, got {}".format(targetPrice))
        if baseAmount > self.maxAmount:
            raise RatioOverflow("Base amount {} exceeds {}".format(baseAmount, self.maxAmount))

        quoteAmount = baseAmount * targetPrice // self.priceUnit
        if quoteAmount > self.maxAmount:
            raise RatioOverflow(
                "Quote amount {} for price {} exceeds {}".format(
                    quoteAmount, targetPrice, self.maxAmount
                )
            )

        return LiquidityPlan(baseAmount, quoteAmount, targetPrice)

    def impliedPrice(self, plan):
        return plan.quoteAmount * self.priceUnit // plan.baseAmount
