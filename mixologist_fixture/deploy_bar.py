import json
import logging

from mixologist_fixture.brownie_ledger import BrownieLedger
from mixologist_fixture.common import ModuleRegistry
from mixologist_fixture.config import getNetworkConstants
from mixologist_fixture.deployers.bar_deployer import BarDeployer
from mixologist_fixture.deployers.contract_deployer import ArtifactRegistry, ContractDeployer
from mixologist_fixture.encoding import ModuleDispatchEncoder


def deployBeachBar(ledger, yieldBox, chainId=None):
    """Deploys a standalone BeachBar against an existing YieldBox and sets its fee receivers"""
    if chainId is None:
        chainId = ledger.chainId()
    constants = getNetworkConstants(chainId)
    contracts = ContractDeployer(ledger, ArtifactRegistry(), ledger.defaultSender(), verbose=True)
    bar = BarDeployer(contracts, ModuleDispatchEncoder(ModuleRegistry()))

    print("Deploying BeachBar")
    args = [yieldBox, constants["tapAddress"]]
    artifact = bar.deployBeachBar(*args)
    print("Done. Deployed on {} with args {}".format(artifact.address, json.dumps(args)))

    print("Setting feeTo & feeVeTo")
    bar.setFees(constants["feeTo"], constants["feeVeTo"])
    print("Done")

    return contracts.artifacts


def main(yieldBox):
    logging.basicConfig(level=logging.INFO)
    artifacts = deployBeachBar(BrownieLedger(), yieldBox)
    print(json.dumps(artifacts.toDeployments(), indent=4, default=str))
    return artifacts
