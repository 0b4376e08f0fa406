import logging

from brownie import Contract, accounts, chain, project, web3
from brownie.exceptions import RPCRequestError, VirtualMachineError
from brownie.network.contract import OverloadedMethod

from mixologist_fixture.encoding import argumentTypes
from mixologist_fixture.errors import ConfirmationFailure, NotFound
from mixologist_fixture.ledger import Ledger, Receipt

LOGGER = logging.getLogger(__name__)


def _revertReason(error):
    return getattr(error, "revert_msg", None) or str(error)


def _traced(tx, attribute):
    # Trace properties need debug_traceTransaction on the node
    try:
        return getattr(tx, attribute)
    except RPCRequestError:
        LOGGER.debug("%s unavailable for %s", attribute, tx.txid)
        return None


class BrownieReceipt(Receipt):
    def __init__(self, operation, tx, address=None) -> None:
        error = None
        if tx.status != 1:
            error = _traced(tx, "revert_msg") or "reverted"
        super().__init__(operation, address=address, txid=tx.txid, error=error)
        self.tx = tx

    @property
    def returnValue(self):
        # None when the node cannot trace, callers fall back to reading state
        return _traced(self.tx, "return_value")


class BrownieLedger(Ledger):
    """Ledger backed by the active brownie network and a loaded project"""

    def __init__(self, contractsProject=None, signers=None, chainState=None, provider=None) -> None:
        self.project = contractsProject
        if self.project is None:
            self.project = project.get_loaded_projects()[0]
        self.accounts = signers if signers is not None else accounts
        self.chain = chainState if chainState is not None else chain
        self.web3 = provider if provider is not None else web3
        self._contracts = {}

    def _account(self, sender):
        if sender is None:
            return self.accounts[0]
        return self.accounts.at(sender, force=True)

    def _container(self, contractName):
        containers = self.project.dict()
        if contractName not in containers:
            raise NotFound("{} is not part of project {}".format(contractName, self.project._name))
        return containers[contractName]

    def _contract(self, address):
        key = str(address).lower()
        if key not in self._contracts:
            raise NotFound("No contract attached at {}".format(address))
        return self._contracts[key]

    def _method(self, address, signature):
        contract = self._contract(address)
        method = getattr(contract, signature.partition("(")[0])
        if isinstance(method, OverloadedMethod):
            method = method[",".join(argumentTypes(signature))]
        return method

    def reset(self):
        LOGGER.info("Resetting chain")
        self.chain.reset()
        self._contracts = {}

    def getSigners(self):
        return [a.address for a in self.accounts]

    def chainId(self):
        return self.chain.id

    def time(self):
        return self.chain.time()

    def setBalance(self, address, amount):
        response = self.web3.provider.make_request(
            "hardhat_setBalance", [str(address), hex(int(amount))]
        )
        error = response.get("error") if isinstance(response, dict) else None
        if error:
            if isinstance(error, dict):
                error = error.get("message", error)
            raise ConfirmationFailure("hardhat_setBalance", error)

    def advanceTime(self, seconds):
        if seconds < 0:
            raise ValueError("Cannot move time backwards")
        self.chain.sleep(int(seconds))
        self.chain.mine()

    def createAccount(self):
        return self.accounts.add().address

    def deploy(self, contractName, args, sender=None):
        container = self._container(contractName)
        operation = "deploy {}".format(contractName)
        try:
            contract = container.deploy(*args, {"from": self._account(sender)})
        except VirtualMachineError as e:
            return Receipt(operation, error=_revertReason(e))

        self._contracts[contract.address.lower()] = contract
        return BrownieReceipt(operation, contract.tx, address=contract.address)

    def attach(self, contractName, address):
        container = self._container(contractName)
        contract = Contract.from_abi(contractName, address, abi=container.abi)
        self._contracts[str(address).lower()] = contract
        return contract

    def call(self, address, signature, args, sender=None):
        method = self._method(address, signature)
        operation = "{} on {}".format(signature, address)
        try:
            tx = method(*args, {"from": self._account(sender)})
        except VirtualMachineError as e:
            return Receipt(operation, error=_revertReason(e))
        return BrownieReceipt(operation, tx)

    def send(self, address, calldata, sender=None):
        operation = "0x{} on {}".format(bytes(calldata[:4]).hex(), address)
        try:
            tx = self._account(sender).transfer(address, 0, data="0x" + bytes(calldata).hex())
        except VirtualMachineError as e:
            return Receipt(operation, error=_revertReason(e))
        return BrownieReceipt(operation, tx)

    def view(self, address, signature, args):
        return self._method(address, signature).call(*args)
