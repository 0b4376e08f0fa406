import logging
from collections import OrderedDict, namedtuple

from mixologist_fixture.errors import NotFound, ProvisioningError

LOGGER = logging.getLogger(__name__)

Artifact = namedtuple("Artifact", ["name", "address", "constructorArgs"])


class ArtifactRegistry:
    """Append only record of everything deployed during the current run"""

    def __init__(self) -> None:
        self._artifacts = OrderedDict()

    def record(self, name, address, args=None):
        if name in self._artifacts:
            raise ProvisioningError(
                "{} already recorded at {}".format(name, self._artifacts[name].address)
            )
        if not address:
            raise ProvisioningError("Cannot record {} without an address".format(name))
        artifact = Artifact(name, address, tuple(args or []))
        self._artifacts[name] = artifact
        return artifact

    def get(self, name):
        if name not in self._artifacts:
            raise NotFound("{} has not been deployed in this run".format(name))
        return self._artifacts[name]

    def address(self, name):
        return self.get(name).address

    def all(self):
        return list(self._artifacts.values())

    def clear(self):
        self._artifacts = OrderedDict()

    def __contains__(self, name):
        return name in self._artifacts

    def __len__(self):
        return len(self._artifacts)

    def toDeployments(self):
        return [
            {
                "name": a.name,
                "address": a.address,
                "meta": {"constructorArguments": list(a.constructorArgs)},
            }
            for a in self._artifacts.values()
        ]


class ContractDeployer:
    def __init__(self, ledger, artifacts, deployer=None, verbose=False) -> None:
        self.ledger = ledger
        self.artifacts = artifacts
        self.deployer = deployer
        self.verbose = verbose

    def log(self, message, *args):
        LOGGER.log(logging.INFO if self.verbose else logging.DEBUG, message, *args)

    def deploy(self, contract, args=None, name=""):
        if name == "":
            name = contract
        if args is None:
            args = []

        self.log("Deploying %s", name)
        receipt = self.ledger.deploy(contract, args, sender=self.deployer).confirm()
        artifact = self.artifacts.record(name, receipt.address, args)
        self.log("Deployed %s at %s with args %s", name, artifact.address, list(args))
        return artifact

    def attach(self, contract, address, name):
        """Records a contract created by another contract, e.g. a clone or a pair"""
        self.ledger.attach(contract, address)
        artifact = self.artifacts.record(name, address)
        self.log("Attached %s (%s) at %s", name, contract, address)
        return artifact

    def call(self, name, signature, args, sender=None):
        address = self.artifacts.address(name)
        return self.ledger.call(address, signature, args, sender=sender or self.deployer).confirm()

    def send(self, name, calldata, sender=None):
        address = self.artifacts.address(name)
        return self.ledger.send(address, calldata, sender=sender or self.deployer).confirm()

    def view(self, name, signature, args=None):
        return self.ledger.view(self.artifacts.address(name), signature, args or [])
