class ProvisioningError(Exception):
    pass


class ConfirmationFailure(ProvisioningError):
    """An external operation was reverted or rejected by the ledger"""

    def __init__(self, operation, reason=None):
        self.operation = operation
        self.reason = reason
        if reason:
            super().__init__("{} failed: {}".format(operation, reason))
        else:
            super().__init__("{} failed".format(operation))


class EncodingMismatch(ProvisioningError):
    pass


class NotFound(ProvisioningError, LookupError):
    pass


class RatioOverflow(ProvisioningError, OverflowError):
    pass
