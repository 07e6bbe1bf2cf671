from abc import ABC
from typing import Optional

from pulumi import ResourceOptions

from infra_storage.lib.azure.resources import get_resourcegroup
from infra_storage.lib.base import BaseModule, ConfigType


class AzureModule(BaseModule, ABC):
    """
    Base class for modules using the Azure native provider

    Subclass configs are expected to carry a ``resource_group_name`` and an optional ``location``.
    """

    provider: str = "azure"

    def __init__(self, name: str, config: ConfigType, opts: ResourceOptions = None):
        super().__init__(name, config, opts)

        self.resourcegroup = get_resourcegroup(config.resource_group_name)

        # fall back to the resource group's region when the stack doesn't pin one
        self.location: Optional[str] = getattr(config, "location", None) or self.resourcegroup.location

        # common arguments can be used on most azure resources
        self.common_args = {
            "resource_group_name": self.resourcegroup.name,
            "location": self.location,
        }

    def build_resource_id(
        self,
        resource_provider_namespace: str,
        parent_resource_type: str,
        parent_resource_name: str,
        resource_type: str = "",
        resource_name: str = "",
    ) -> str:
        # /subscriptions/subid/resourceGroups/rg1/providers/Microsoft.Storage/storageAccounts/st1/blobServices/default
        # passing only a parent type and name yields the parent id without trailing slashes
        return "/".join(
            part
            for part in (
                self.resourcegroup.id,
                "providers",
                resource_provider_namespace,
                parent_resource_type,
                parent_resource_name,
                resource_type,
                resource_name,
            )
            if part
        )
