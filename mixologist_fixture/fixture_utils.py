from collections import namedtuple

from mixologist_fixture.common import MAX_UINT256
from mixologist_fixture.deployers.bar_deployer import BarDeployer
from mixologist_fixture.deployers.liq_deployer import LiqDeployer
from mixologist_fixture.deployers.token_deployer import TokenDeployer
from mixologist_fixture.deployers.uniswap_deployer import UniswapDeployer
from mixologist_fixture.deployers.yieldbox_deployer import YieldBoxDeployer

ADD_COLLATERAL = "addCollateral(address,address,bool,uint256)"
ADD_ASSET = "addAsset(address,address,bool,uint256)"
MARKET = "wethUsdcMixologist"


class Default:
    """Act as the fixture deployer"""

    def resolve(self, deployer):
        return deployer

    def __repr__(self):
        return "Default"


DEFAULT = Default()


class As(namedtuple("As", ["address"])):
    """Act as the given account"""

    __slots__ = ()

    def resolve(self, deployer):
        return self.address


def resolveActingAs(actingAs, deployer):
    if not isinstance(actingAs, (Default, As)):
        raise TypeError("Expected Default or As(address), got {!r}".format(actingAs))
    return actingAs.resolve(deployer)


FixtureUtilities = namedtuple(
    "FixtureUtilities",
    [
        "approveTokensAndSetBarApproval",
        "wethDepositAndAddAsset",
        "usdcDepositAndAddCollateral",
        "initContracts",
        "timeTravel",
        "deployAndSetUsdo",
        "deployCurveStableToUsdoBidder",
        "addUniV2UsdoWethLiquidity",
    ],
)


class FixtureUtilityFactory:
    """
    Builds the helper operations test scenarios run against a provisioned
    fixture. Artifacts are looked up when an operation runs, so using one
    before provisioning has recorded the market fails with NotFound.
    """

    def __init__(self, contracts, encoder, calculator, config) -> None:
        self.contracts = contracts
        self.encoder = encoder
        self.calculator = calculator
        self.config = config

    def build(self):
        contracts = self.contracts
        ledger = contracts.ledger
        deployer = contracts.deployer
        tokens = TokenDeployer(contracts)
        yieldBox = YieldBoxDeployer(contracts)
        bar = BarDeployer(contracts, self.encoder)
        liq = LiqDeployer(contracts, self.encoder, bar)
        uniswap = UniswapDeployer(contracts, tokens, self.calculator)
        config = self.config

        def approveTokensAndSetBarApproval(actingAs=DEFAULT):
            account = resolveActingAs(actingAs, deployer)
            yieldBoxAddress = contracts.artifacts.address("yieldBox")
            market = contracts.artifacts.address(MARKET)
            tokens.approve("usdc", yieldBoxAddress, MAX_UINT256, sender=account)
            tokens.approve("weth", yieldBoxAddress, MAX_UINT256, sender=account)
            yieldBox.setApprovalForAll(market, True, sender=account)

        def wethDepositAndAddAsset(amount, actingAs=DEFAULT):
            account = resolveActingAs(actingAs, deployer)
            assetId = contracts.view(MARKET, "assetId()")
            share = yieldBox.toShare(assetId, amount, False)
            yieldBox.depositAsset(assetId, account, 0, share, sender=account)
            contracts.call(MARKET, ADD_ASSET, [account, account, False, share], sender=account)
            return share

        def usdcDepositAndAddCollateral(amount, actingAs=DEFAULT):
            account = resolveActingAs(actingAs, deployer)
            collateralId = contracts.view(MARKET, "collateralId()")
            before = yieldBox.balanceOf(account, collateralId)
            yieldBox.depositAsset(collateralId, account, amount, 0, sender=account)
            share = yieldBox.balanceOf(account, collateralId) - before

            bar.executeModule(
                MARKET, "LendingBorrowing", ADD_COLLATERAL, [account, account, False, share], sender=account
            )
            return share

        def initContracts():
            market = contracts.artifacts.address(MARKET)
            assetId = contracts.view(MARKET, "assetId()")
            tokens.freeMint("weth", 1000)
            share = yieldBox.toShare(assetId, 1000, False)
            tokens.approve("weth", contracts.artifacts.address("yieldBox"), 1000)
            yieldBox.depositAsset(assetId, deployer, 0, share)
            yieldBox.setApprovalForAll(market, True)
            contracts.call(MARKET, ADD_ASSET, [deployer, deployer, False, share])
            return share

        def timeTravel(seconds):
            if seconds < 0:
                raise ValueError("Time only moves forward, got {} seconds".format(seconds))
            ledger.advanceTime(seconds)

        def deployAndSetUsdo():
            return liq.deployAndSetUsdo()

        def deployCurveStableToUsdoBidder(usdo="usdo"):
            return liq.deployCurveStableToUsdoBidder(MARKET, "usdc", usdo, config["curveStableIndex"])

        def addUniV2UsdoWethLiquidity(usdo="usdo"):
            plan = self.calculator.planLiquidity(config["wethUsdcPrice"], config["wethPairAmount"])
            uniswap.addLiquidity("weth", usdo, plan, deployer)
            return plan

        return FixtureUtilities(
            approveTokensAndSetBarApproval,
            wethDepositAndAddAsset,
            usdcDepositAndAddCollateral,
            initContracts,
            timeTravel,
            deployAndSetUsdo,
            deployCurveStableToUsdoBidder,
            addUniV2UsdoWethLiquidity,
        )
