from functools import cache

from pulumi_azure_native import resources


@cache
def get_resourcegroup(resource_group_name: str) -> resources.AwaitableGetResourceGroupResult:
    """Look up an existing resource group

    :param resource_group_name: Name of the resource group
    :return: The resource group, including its id and location
    """
    return resources.get_resource_group(resource_group_name=resource_group_name)
