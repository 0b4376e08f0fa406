from mixologist_fixture.common import ZERO_ADDRESS
from mixologist_fixture.config import DEADLINE_MARGIN
from mixologist_fixture.errors import ProvisioningError


class UniswapDeployer:
    def __init__(self, contracts, tokens, calculator) -> None:
        self.contracts = contracts
        self.tokens = tokens
        self.calculator = calculator

    def deployUniswapV2(self, feeToSetter):
        factory = self.contracts.deploy("UniswapV2Factory", [feeToSetter], "uniFactory")
        router = self.contracts.deploy(
            "UniswapV2Router02", [factory.address, ZERO_ADDRESS], "uniRouter"
        )
        return (factory, router)

    def pairCodeHash(self):
        return self.contracts.view("uniFactory", "pairCodeHash()")

    def getPair(self, tokenA, tokenB):
        return self.contracts.view(
            "uniFactory",
            "getPair(address,address)",
            [self.contracts.artifacts.address(tokenA), self.contracts.artifacts.address(tokenB)],
        )

    def createPair(self, tokenA, tokenB, name):
        self.contracts.call(
            "uniFactory",
            "createPair(address,address)",
            [self.contracts.artifacts.address(tokenA), self.contracts.artifacts.address(tokenB)],
        )
        pair = self.getPair(tokenA, tokenB)
        if pair == ZERO_ADDRESS:
            raise ProvisioningError("Pair {}/{} was not created".format(tokenA, tokenB))
        return self.contracts.attach("UniswapV2Pair", pair, name)

    def addLiquidity(self, base, quote, plan, to, sender=None):
        router = self.contracts.artifacts.address("uniRouter")

        # Free mint both sides of the pair then hand them to the router
        self.tokens.freeMint(base, plan.baseAmount, sender=sender)
        self.tokens.freeMint(quote, plan.quoteAmount, sender=sender)
        self.tokens.approve(base, router, plan.baseAmount, sender=sender)
        self.tokens.approve(quote, router, plan.quoteAmount, sender=sender)

        deadline = self.contracts.ledger.time() + DEADLINE_MARGIN
        return self.contracts.call(
            "uniRouter",
            "addLiquidity(address,address,uint256,uint256,uint256,uint256,address,uint256)",
            [
                self.contracts.artifacts.address(base),
                self.contracts.artifacts.address(quote),
                plan.baseAmount,
                plan.quoteAmount,
                plan.baseAmount,
                plan.quoteAmount,
                to,
                deadline,
            ],
            sender=sender,
        )

    def seedPair(self, base, quote, targetPrice, baseAmount, name, to):
        plan = self.calculator.planLiquidity(targetPrice, baseAmount)
        pair = self.createPair(base, quote, name)
        self.addLiquidity(base, quote, plan, to)
        self.contracts.log(
            "Seeded %s with %s %s / %s %s", name, plan.baseAmount, base, plan.quoteAmount, quote
        )
        return (pair, plan)

    def getReserve(self, pairName, token):
        """Reserve held by a pair for one of its two tokens"""
        tokenAddress = self.contracts.artifacts.address(token)
        (reserve0, reserve1, _) = self.contracts.view(pairName, "getReserves()")
        token0 = self.contracts.view(pairName, "token0()")
        token1 = self.contracts.view(pairName, "token1()")
        if str(token0).lower() == str(tokenAddress).lower():
            return reserve0
        if str(token1).lower() == str(tokenAddress).lower():
            return reserve1
        raise ProvisioningError("{} is not a token of {}".format(token, pairName))
