from mixologist_fixture.config import TokenConfig
from mixologist_fixture.errors import NotFound


class TokenDeployer:
    def __init__(self, contracts, tokenConfig=None) -> None:
        self.contracts = contracts
        self.tokenConfig = tokenConfig
        if self.tokenConfig is None:
            self.tokenConfig = TokenConfig

    @staticmethod
    def tokenName(symbol):
        return symbol.lower()

    def deployOracle(self, price, name="wethUsdcOracle"):
        oracle = self.contracts.deploy("OracleMock", [], name)
        self.contracts.call(name, "set(uint256)", [price])
        self.contracts.log("%s price set to %s", name, price)
        return oracle

    def deployERC20(self, symbol, name=None):
        if symbol not in self.tokenConfig:
            raise NotFound("{} not found in token config".format(symbol))
        config = self.tokenConfig[symbol]
        args = [config["initialSupply"]] if "initialSupply" in config else []
        return self.contracts.deploy(config["contract"], args, name or self.tokenName(symbol))

    def freeMint(self, name, amount, sender=None):
        return self.contracts.call(name, "freeMint(uint256)", [amount], sender=sender)

    def approve(self, name, spender, amount, sender=None):
        return self.contracts.call(name, "approve(address,uint256)", [spender, amount], sender=sender)

    def balanceOf(self, name, account):
        return self.contracts.view(name, "balanceOf(address)", [account])
