import logging
from copy import deepcopy

from mixologist_fixture.common import ModuleRegistry
from mixologist_fixture.config import UNISWAP_V2_MAX_RESERVE, FixtureDefaults
from mixologist_fixture.deployers.bar_deployer import BarDeployer, moduleArtifact
from mixologist_fixture.deployers.contract_deployer import ArtifactRegistry, ContractDeployer
from mixologist_fixture.deployers.liq_deployer import LiqDeployer, LiquidationQueueConfig
from mixologist_fixture.deployers.token_deployer import TokenDeployer
from mixologist_fixture.deployers.uniswap_deployer import UniswapDeployer
from mixologist_fixture.deployers.yieldbox_deployer import YieldBoxDeployer
from mixologist_fixture.encoding import ModuleDispatchEncoder
from mixologist_fixture.errors import NotFound
from mixologist_fixture.fixture_utils import FixtureUtilityFactory
from mixologist_fixture.liquidity import PriceRatioCalculator

LOGGER = logging.getLogger(__name__)

COLLATERAL_SWAP_PATH = ["usdc", "weth"]
TAP_SWAP_PATH = ["weth", "tap"]


class Fixture:
    """Everything a test scenario needs from a provisioned run"""

    def __init__(self, artifacts, **values) -> None:
        self.artifacts = artifacts
        self._names = []
        for artifact in artifacts.all():
            self._set(artifact.name, artifact)
        for (name, value) in values.items():
            self._set(name, value)

    def _set(self, name, value):
        setattr(self, name, value)
        self._names.append(name)

    def __getitem__(self, name):
        if name not in self._names:
            raise NotFound("{} is not part of the fixture".format(name))
        return getattr(self, name)

    def __contains__(self, name):
        return name in self._names

    def keys(self):
        return list(self._names)

    def deployments(self):
        return self.artifacts.toDeployments()


class ProvisioningOrchestrator:
    """
    Provisions the whole Mixologist test environment in dependency order.
    Every step blocks on its receipts and reads what it needs from earlier
    steps through the artifact registry, so running a step before its
    prerequisites raises NotFound instead of deploying against missing state.
    """

    def __init__(self, ledger, modules=None, config=None, calculator=None, encoder=None) -> None:
        self.ledger = ledger
        self.modules = modules if modules is not None else ModuleRegistry()
        self.config = deepcopy(FixtureDefaults)
        if config is not None:
            self.config.update(config)
        self.calculator = calculator
        if self.calculator is None:
            self.calculator = PriceRatioCalculator(maxAmount=UNISWAP_V2_MAX_RESERVE)
        self.encoder = encoder if encoder is not None else ModuleDispatchEncoder(self.modules)

        self.staging = False
        self.deployer = None
        self._reset()

    def _reset(self):
        # Fixtures from earlier runs keep their own registry
        self.artifacts = ArtifactRegistry()
        self.assetIds = {}
        self.generated = {}
        self.plans = {}
        self.lqMeta = None
        self.contracts = ContractDeployer(self.ledger, self.artifacts, self.deployer, self.staging)
        self.tokens = TokenDeployer(self.contracts)
        self.yieldBoxes = YieldBoxDeployer(self.contracts)
        self.uniswap = UniswapDeployer(self.contracts, self.tokens, self.calculator)
        self.bar = BarDeployer(self.contracts, self.encoder)
        self.liq = LiqDeployer(self.contracts, self.encoder, self.bar)

    def log(self, message, *args):
        self.contracts.log(message, *args)

    def assetId(self, token):
        if token not in self.assetIds:
            raise NotFound("{} has not been registered in YieldBox".format(token))
        return self.assetIds[token]

    def begin(self, staging=False):
        self.staging = staging
        if not staging:
            self.ledger.reset()
        self.deployer = self.ledger.getSigners()[0]
        self._reset()

    def provision(self, staging=False):
        self.begin(staging)
        self.deployOracle()
        self.deployTokens()
        self.deployYieldBox()
        self.deployBeachBar()
        self.registerAssets()
        self.setupUniswap()
        self.registerMultiSwapper()
        self.deployMasterContract()
        self.deployModules()
        self.registerMixologist()
        self.setFees()
        self.registerLiquidationQueue()
        self.deployHelpers()
        fixture = self.assemble()
        LOGGER.info(
            "Provisioned fixture with %d contracts on chain %s", len(self.artifacts), self.ledger.chainId()
        )
        return fixture

    def deployOracle(self):
        self.log("Deploying OracleMock")
        return self.tokens.deployOracle(self.config["wethUsdcPrice"])

    def deployTokens(self):
        self.log("Deploying Tokens")
        return [self.tokens.deployERC20(symbol) for symbol in ["USDC", "WETH", "TAP"]]

    def deployYieldBox(self):
        self.log("Deploying YieldBox")
        return self.yieldBoxes.deployYieldBox()

    def deployBeachBar(self):
        self.log("Deploying BeachBar")
        return self.bar.deployBeachBar(
            self.artifacts.address("yieldBox"), self.artifacts.address("tap")
        )

    def registerAssets(self):
        self.log("Registering YieldBox assets")
        self.assetIds = self.yieldBoxes.registerAssets(["weth", "usdc"])
        return self.assetIds

    def setupUniswap(self):
        self.log("Deploying UniFactory")
        self.generated["uniFactoryFee"] = self.ledger.createAccount()
        self.uniswap.deployUniswapV2(self.generated["uniFactoryFee"])

        (_, self.plans["wethUsdc"]) = self.uniswap.seedPair(
            "weth",
            "usdc",
            self.config["wethUsdcPrice"],
            self.config["wethPairAmount"],
            "wethUsdcPair",
            self.deployer,
        )
        (_, self.plans["wethTap"]) = self.uniswap.seedPair(
            "weth",
            "tap",
            self.config["wethTapPrice"],
            self.config["wethPairAmount"],
            "wethTapPair",
            self.deployer,
        )
        return self.plans

    def registerMultiSwapper(self):
        self.log("Registering MultiSwapper")
        return self.bar.registerMultiSwapper(
            self.artifacts.address("uniFactory"), self.uniswap.pairCodeHash()
        )

    def deployMasterContract(self):
        self.log("Deploying MediumRiskMC")
        self.artifacts.get("bar")
        return self.bar.deployMasterContract(self.config["riskTier"])

    def deployModules(self):
        self.log("Deploying Mixologist modules")
        return self.bar.deployModules()

    def registerMixologist(self):
        self.log("Registering Mixologist")
        return self.bar.registerMixologist(
            "mediumRiskMC",
            "weth",
            self.assetId("weth"),
            "usdc",
            self.assetId("usdc"),
            "wethUsdcOracle",
            COLLATERAL_SWAP_PATH,
            TAP_SWAP_PATH,
        )

    def setFees(self):
        self.generated["mixologistFeeTo"] = self.ledger.createAccount()
        self.generated["mixologistFeeVeTap"] = self.ledger.createAccount()
        self.bar.setFees(self.generated["mixologistFeeTo"], self.generated["mixologistFeeVeTap"])

    def registerLiquidationQueue(self):
        self.log("Registering LiquidationQueue")
        self.artifacts.get("wethUsdcMixologist")
        self.generated["feeCollector"] = self.ledger.createAccount()
        self.lqMeta = LiquidationQueueConfig.fromConfig(
            self.config["liquidationQueue"], self.generated["feeCollector"]
        )
        return self.liq.registerLiquidationQueue("wethUsdcMixologist", self.lqMeta)

    def deployHelpers(self):
        self.log("Deploying helpers")
        self.artifacts.get("multiSwapper")
        self.artifacts.get("wethUsdcMixologist")
        self.generated["eoa1"] = self.ledger.createAccount()
        if not self.staging:
            self.ledger.setBalance(self.generated["eoa1"], self.config["eoaBalance"])
        return self.liq.deployHelpers("wethUsdcMixologist")

    def assemble(self):
        self.artifacts.get("usdoToWethBidder")
        utils = FixtureUtilityFactory(
            self.contracts, self.encoder, self.calculator, self.config
        ).build()

        return Fixture(
            self.artifacts,
            wethUsdcPrice=self.config["wethUsdcPrice"],
            deployer=self.deployer,
            wethAssetId=self.assetId("weth"),
            usdcAssetId=self.assetId("usdc"),
            collateralSwapPath=[self.artifacts.address(t) for t in COLLATERAL_SWAP_PATH],
            tapSwapPath=[self.artifacts.address(t) for t in TAP_SWAP_PATH],
            modules=self.modules,
            moduleAddresses={
                name: self.artifacts.address(moduleArtifact(name))
                for (name, moduleId) in self.modules
                if moduleArtifact(name) in self.artifacts
            },
            lqMeta=self.lqMeta,
            plans=dict(self.plans),
            utils=utils,
            **self.generated
        )
