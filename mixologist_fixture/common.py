from types import MappingProxyType

from mixologist_fixture.errors import NotFound

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
MAX_UINT256 = 2 ** 256 - 1

# YieldBox TokenType
AssetStandard = MappingProxyType({
    "Native": 0,
    "ERC20": 1,
    "ERC721": 2,
    "ERC1155": 3,
})

# BeachBar ContractType used when registering master contracts
RiskTier = MappingProxyType({
    "lowRisk": 0,
    "mediumRisk": 1,
    "highRisk": 2,
})

MixologistModules = (
    ("Base", 0),
    ("LendingBorrowing", 1),
    ("Liquidation", 2),
    ("Setter", 3),
)


class ModuleRegistry:
    """
    Fixed mapping of Mixologist module names to the slot ids used by
    executeModule. Built once and handed to whoever needs to encode
    module calls.
    """

    def __init__(self, modules=MixologistModules) -> None:
        ids = {}
        for (name, moduleId) in modules:
            if name in ids:
                raise ValueError("Duplicate module name {}".format(name))
            if moduleId in ids.values():
                raise ValueError("Duplicate module id {}".format(moduleId))
            ids[name] = int(moduleId)
        self._ids = MappingProxyType(ids)
        self._names = MappingProxyType({v: k for (k, v) in ids.items()})

    def __getitem__(self, name):
        return self.moduleId(name)

    def __contains__(self, name):
        return name in self._ids

    def __iter__(self):
        return iter(self._ids.items())

    def __len__(self):
        return len(self._ids)

    def moduleId(self, name):
        if name not in self._ids:
            raise NotFound("Unknown Mixologist module {}".format(name))
        return self._ids[name]

    def moduleName(self, moduleId):
        if moduleId not in self._names:
            raise NotFound("Unknown Mixologist module id {}".format(moduleId))
        return self._names[moduleId]

    def isModuleId(self, moduleId):
        return moduleId in self._names


def isStaging(network):
    return network not in ["development", "hardhat", "anvil"] and not network.endswith("-fork")
