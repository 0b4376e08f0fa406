from mixologist_fixture.errors import ConfirmationFailure


class Receipt:
    """
    Result of a single ledger effect. Nothing downstream may use a receipt
    until confirm() has returned it.
    """

    def __init__(self, operation, address=None, returnValue=None, txid=None, error=None) -> None:
        self.operation = operation
        self.address = address
        self.txid = txid
        self.error = error
        self._returnValue = returnValue

    @property
    def returnValue(self):
        return self._returnValue

    @property
    def reverted(self):
        return self.error is not None

    def confirm(self):
        if self.error is not None:
            raise ConfirmationFailure(self.operation, self.error)
        return self

    def __repr__(self):
        if self.error is not None:
            return "<Receipt {} reverted: {}>".format(self.operation, self.error)
        return "<Receipt {} {}>".format(self.operation, self.address or self.txid or "")


class Ledger:
    """
    The chain runtime the fixture is provisioned against. Every state
    changing method blocks until the effect is mined and returns a Receipt.

    sender=None means the default deployer, the first of getSigners().
    """

    def reset(self):
        raise NotImplementedError

    def getSigners(self):
        raise NotImplementedError

    def defaultSender(self):
        return self.getSigners()[0]

    def chainId(self):
        raise NotImplementedError

    def time(self):
        raise NotImplementedError

    def setBalance(self, address, amount):
        raise NotImplementedError

    def advanceTime(self, seconds):
        raise NotImplementedError

    def createAccount(self):
        raise NotImplementedError

    def deploy(self, contractName, args, sender=None):
        raise NotImplementedError

    def attach(self, contractName, address):
        raise NotImplementedError

    def call(self, address, signature, args, sender=None):
        raise NotImplementedError

    def send(self, address, calldata, sender=None):
        raise NotImplementedError

    def view(self, address, signature, args):
        raise NotImplementedError
