from mixologist_fixture.common import ZERO_ADDRESS, AssetStandard
from mixologist_fixture.errors import ProvisioningError


class YieldBoxDeployer:
    def __init__(self, contracts) -> None:
        self.contracts = contracts

    def deployYieldBox(self):
        uriBuilder = self.contracts.deploy("YieldBoxURIBuilder", [], "uriBuilder")
        # No wrapped native token in the fixture
        return self.contracts.deploy("YieldBox", [ZERO_ADDRESS, uriBuilder.address], "yieldBox")

    def registerAsset(self, token):
        tokenAddress = self.contracts.artifacts.address(token)
        args = [AssetStandard["ERC20"], tokenAddress, ZERO_ADDRESS, 0]
        self.contracts.call("yieldBox", "registerAsset(uint8,address,address,uint256)", args)
        assetId = self.contracts.view("yieldBox", "ids(uint8,address,address,uint256)", args)
        if assetId == 0:
            raise ProvisioningError("YieldBox did not assign an asset id to {}".format(token))

        self.contracts.log("Registered %s as YieldBox asset %s", token, assetId)
        return assetId

    def registerAssets(self, tokens):
        assetIds = {}
        for token in tokens:
            assetIds[token] = self.registerAsset(token)

        if len(set(assetIds.values())) != len(assetIds):
            raise ProvisioningError("YieldBox asset ids are not distinct: {}".format(assetIds))
        return assetIds

    def toShare(self, assetId, amount, roundUp=False):
        return self.contracts.view("yieldBox", "toShare(uint256,uint256,bool)", [assetId, amount, roundUp])

    def balanceOf(self, account, assetId):
        return self.contracts.view("yieldBox", "balanceOf(address,uint256)", [account, assetId])

    def depositAsset(self, assetId, account, amount, share, sender=None):
        return self.contracts.call(
            "yieldBox",
            "depositAsset(uint256,address,address,uint256,uint256)",
            [assetId, account, account, amount, share],
            sender=sender,
        )

    def setApprovalForAll(self, operator, approved=True, sender=None):
        return self.contracts.call(
            "yieldBox", "setApprovalForAll(address,bool)", [operator, approved], sender=sender
        )
