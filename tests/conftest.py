from pathlib import Path
from unittest.mock import patch

import pulumi
import pytest

from infra_storage.lib.config import HierarchicalConfig, core
from infra_storage.modules.azure.storage_account import StorageAccountConfig

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"


class StorageMocks(pulumi.runtime.Mocks):
    """Records every registered resource and answers the invokes the storage module makes"""

    def __init__(self):
        self.resources: list[pulumi.runtime.MockResourceArgs] = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources.append(args)
        return [f"{args.name}_id", dict(args.inputs)]

    def call(self, args: pulumi.runtime.MockCallArgs):
        if args.token == "azure-native:resources:getResourceGroup":
            name = args.args["resourceGroupName"]
            return {
                "id": f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{name}",
                "name": name,
                "location": "westeurope",
            }
        if args.token == "azure-native:authorization:getClientConfig":
            return {
                "clientId": "client",
                "objectId": "object",
                "subscriptionId": SUBSCRIPTION_ID,
                "tenantId": "tenant",
            }
        return {}

    def of_type(self, typ: str) -> list[pulumi.runtime.MockResourceArgs]:
        return [r for r in self.resources if r.typ == typ]


mocks = StorageMocks()
pulumi.runtime.set_mocks(mocks, project="storage", stack="test", preview=False)


@pytest.fixture(autouse=True)
def storage_env(monkeypatch):
    """Project defaults from the ``Storage.common.yaml`` next to the tests"""
    env = HierarchicalConfig(limit=0, entrypoint=Path(__file__).parent)
    monkeypatch.setattr(core, "get_storage_env", lambda: env)
    return env


@pytest.fixture(autouse=True)
def role_definitions():
    with patch(
        "infra_storage.modules.azure.storage_account.access.get_role_definition_id",
        side_effect=lambda name, scope=None: f"/providers/Microsoft.Authorization/roleDefinitions/{name}",
    ) as lookup:
        yield lookup


@pytest.fixture
def recorded():
    mocks.resources.clear()
    return mocks


@pytest.fixture
def make_config():
    def _make_config(**kwargs) -> StorageAccountConfig:
        kwargs.setdefault("resource_group_name", "rg-data")
        kwargs.setdefault("name", "stdata")
        return StorageAccountConfig(**kwargs)

    return _make_config
