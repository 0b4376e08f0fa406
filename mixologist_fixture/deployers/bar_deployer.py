from mixologist_fixture.common import ZERO_ADDRESS, RiskTier
from mixologist_fixture.encoding import EXECUTE_MODULE
from mixologist_fixture.errors import ProvisioningError

# Pluggable logic modules, keyed by their name in the module registry
ModuleContracts = {
    "LendingBorrowing": "MixologistLendingBorrowing",
    "Liquidation": "MixologistLiquidation",
    "Setter": "MixologistSetter",
}


def moduleArtifact(module):
    return "mixologist{}Module".format(module)


class BarDeployer:
    def __init__(self, contracts, encoder) -> None:
        self.contracts = contracts
        self.encoder = encoder

    def deployBeachBar(self, yieldBox, tapAddress):
        return self.contracts.deploy("BeachBar", [yieldBox, tapAddress], "bar")

    def registerMultiSwapper(self, factory, pairCodeHash):
        bar = self.contracts.artifacts.address("bar")
        multiSwapper = self.contracts.deploy(
            "MultiSwapper", [factory, bar, pairCodeHash], "multiSwapper"
        )
        self.contracts.call("bar", "setSwapper(address,bool)", [multiSwapper.address, True])
        return multiSwapper

    def deployMasterContract(self, riskTier, name="mediumRiskMC"):
        if riskTier not in RiskTier:
            raise ProvisioningError("Unknown risk tier {}".format(riskTier))
        masterContract = self.contracts.deploy("BaseMixologist", [], name)
        self.contracts.call(
            "bar", "registerMasterContract(address,uint8)", [masterContract.address, RiskTier[riskTier]]
        )
        return masterContract

    def deployModule(self, module):
        if module not in ModuleContracts:
            raise ProvisioningError("{} is not a deployable module".format(module))
        return self.contracts.deploy(ModuleContracts[module], [], moduleArtifact(module))

    def deployModules(self):
        return {module: self.deployModule(module) for module in ModuleContracts.keys()}

    def _clonesOfCount(self, masterContract):
        return self.contracts.view("yieldBox", "clonesOfCount(address)", [masterContract])

    def registerMixologist(
        self,
        masterContract,
        asset,
        assetId,
        collateral,
        collateralId,
        oracle,
        collateralSwapPath,
        tapSwapPath,
        name="wethUsdcMixologist",
    ):
        artifacts = self.contracts.artifacts
        mc = artifacts.address(masterContract)
        data = self.encoder.encodeMixologistInitData(
            artifacts.address("bar"),
            artifacts.address(asset),
            assetId,
            artifacts.address(collateral),
            collateralId,
            artifacts.address(oracle),
            [artifacts.address(t) for t in collateralSwapPath],
            [artifacts.address(t) for t in tapSwapPath],
            artifacts.address(moduleArtifact("LendingBorrowing")),
            artifacts.address(moduleArtifact("Liquidation")),
            artifacts.address(moduleArtifact("Setter")),
        )

        countBefore = self._clonesOfCount(mc)
        receipt = self.contracts.call("bar", "registerMixologist(address,bytes,bool)", [mc, data, True])
        countAfter = self._clonesOfCount(mc)
        if countAfter != countBefore + 1:
            raise ProvisioningError(
                "Expected exactly one new {} clone, found {}".format(
                    masterContract, countAfter - countBefore
                )
            )

        clone = receipt.returnValue
        if not clone:
            # The newest clone is the one we just registered
            clone = self.contracts.view("yieldBox", "clonesOf(address,uint256)", [mc, countAfter - 1])
        if clone == ZERO_ADDRESS or str(clone).lower() == str(mc).lower():
            raise ProvisioningError("Invalid {} clone address {}".format(masterContract, clone))

        return self.contracts.attach("BaseMixologist", clone, name)

    def setFees(self, feeTo, feeVeTap):
        self.contracts.call("bar", "setFeeTo(address)", [feeTo])
        self.contracts.call("bar", "setFeeVeTap(address)", [feeVeTap])

    def executeMixologistFn(self, markets, calls):
        """Submits already encoded market calls through the BeachBar batch executor"""
        targets = [self.contracts.artifacts.address(m) for m in markets]
        return self.contracts.send("bar", self.encoder.wrapForBatch(targets, calls))

    def executeModule(self, market, module, signature, args, sender=None):
        """Calls a module function directly on the market as sender"""
        payload = self.encoder.encodeModuleCall(module, signature, args)
        return self.contracts.call(market, EXECUTE_MODULE, [payload], sender=sender)
