import pytest
from eth_utils import to_checksum_address
from mixologist_fixture.deployers.contract_deployer import Artifact, ArtifactRegistry
from mixologist_fixture.errors import NotFound, ProvisioningError

ADDRESS_A = to_checksum_address("0x5FbDB2315678afecb367f032d93F642f64180aa3")
ADDRESS_B = to_checksum_address("0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512")


def test_record_and_lookup():
    artifacts = ArtifactRegistry()
    artifact = artifacts.record("yieldBox", ADDRESS_A, [ADDRESS_B])

    assert artifact == Artifact("yieldBox", ADDRESS_A, (ADDRESS_B,))
    assert artifacts.get("yieldBox") == artifact
    assert artifacts.address("yieldBox") == ADDRESS_A
    assert "yieldBox" in artifacts
    assert len(artifacts) == 1


def test_lookup_before_record_raises():
    artifacts = ArtifactRegistry()
    with pytest.raises(NotFound):
        artifacts.get("bar")

    with pytest.raises(NotFound):
        artifacts.address("bar")


def test_duplicate_name_rejected():
    artifacts = ArtifactRegistry()
    artifacts.record("bar", ADDRESS_A)
    with pytest.raises(ProvisioningError):
        artifacts.record("bar", ADDRESS_B)

    assert artifacts.address("bar") == ADDRESS_A


def test_empty_address_rejected():
    with pytest.raises(ProvisioningError):
        ArtifactRegistry().record("bar", None)


def test_insertion_order_and_clear():
    artifacts = ArtifactRegistry()
    artifacts.record("usdc", ADDRESS_A)
    artifacts.record("weth", ADDRESS_B)

    assert [a.name for a in artifacts.all()] == ["usdc", "weth"]
    assert artifacts.toDeployments() == [
        {"name": "usdc", "address": ADDRESS_A, "meta": {"constructorArguments": []}},
        {"name": "weth", "address": ADDRESS_B, "meta": {"constructorArguments": []}},
    ]

    artifacts.clear()
    assert len(artifacts) == 0
    assert artifacts.all() == []
    artifacts.record("usdc", ADDRESS_B)
    assert artifacts.address("usdc") == ADDRESS_B
