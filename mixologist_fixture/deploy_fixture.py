import json
import logging

from brownie import network

from mixologist_fixture.brownie_ledger import BrownieLedger
from mixologist_fixture.common import isStaging
from mixologist_fixture.deployment import ProvisioningOrchestrator


def main(staging=None):
    if staging is None:
        staging = isStaging(network.show_active())
    elif isinstance(staging, str):
        staging = staging.lower() in ["true", "1", "yes"]

    logging.basicConfig(level=logging.INFO)
    print("Provisioning Mixologist fixture on {} (staging: {})".format(network.show_active(), staging))
    fixture = ProvisioningOrchestrator(BrownieLedger()).provision(staging)
    print(json.dumps(fixture.deployments(), indent=4, default=str))

    return fixture
