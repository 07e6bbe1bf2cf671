from pulumi import Resource, ResourceOptions
from pulumi_azure_native import storage

from .composer import StoragePlan


def create_children(cls, account: storage.StorageAccount, plan: StoragePlan) -> list[Resource]:
    """Create one container, queue, table or file share per planned name

    Each child is keyed by its own name, so adding or removing a name only touches that child.

    :param cls: The module creating the resources
    :param account: The storage account
    :param plan: Storage plan
    :return: All children created
    """
    opts = ResourceOptions(parent=account)
    common = {
        "account_name": account.name,
        "resource_group_name": cls.resourcegroup.name,
    }

    containers = [
        storage.BlobContainer(
            f"{plan.account_name}-container-{name}",
            container_name=name,
            public_access=plan.container_access_type.value,
            **common,
            opts=opts,
        )
        for name in plan.containers
    ]

    queues = [
        storage.Queue(
            f"{plan.account_name}-queue-{name}",
            queue_name=name,
            **common,
            opts=opts,
        )
        for name in plan.queues
    ]

    tables = [
        storage.Table(
            f"{plan.account_name}-table-{name}",
            table_name=name,
            **common,
            opts=opts,
        )
        for name in plan.tables
    ]

    shares = [
        storage.FileShare(
            f"{plan.account_name}-share-{name}",
            share_name=name,
            share_quota=plan.share_quota_gb,
            **common,
            opts=opts,
        )
        for name in plan.shares
    ]

    return containers + queues + tables + shares
