from pulumi import ResourceOptions
from pulumi_azure_native import storage

from .composer import LifecyclePlan


def create_lifecycle_policy(
    cls, account: storage.StorageAccount, name: str, lifecycle: LifecyclePlan
) -> storage.ManagementPolicy:
    """Clean up previous blob versions, and optionally snapshots, once they are old enough

    :param cls: The module creating the resource
    :param account: The storage account
    :param name: Name of the storage account
    :param lifecycle: Lifecycle plan
    :return: The management policy
    """
    snapshot = None
    if lifecycle.snapshot_retention_days is not None:
        snapshot = storage.ManagementPolicySnapShotArgs(
            delete=storage.DateAfterCreationArgs(
                days_after_creation_greater_than=lifecycle.snapshot_retention_days,
            ),
        )

    return storage.ManagementPolicy(
        f"{name}-lifecycle",
        management_policy_name="default",
        account_name=account.name,
        resource_group_name=cls.resourcegroup.name,
        policy=storage.ManagementPolicySchemaArgs(
            rules=[
                storage.ManagementPolicyRuleArgs(
                    enabled=True,
                    name="version-cleanup",
                    type="Lifecycle",
                    definition=storage.ManagementPolicyDefinitionArgs(
                        actions=storage.ManagementPolicyActionArgs(
                            version=storage.ManagementPolicyVersionArgs(
                                delete=storage.DateAfterCreationArgs(
                                    days_after_creation_greater_than=lifecycle.version_retention_days,
                                ),
                            ),
                            snapshot=snapshot,
                        ),
                        filters=storage.ManagementPolicyFilterArgs(
                            blob_types=["blockBlob"],
                        ),
                    ),
                ),
            ],
        ),
        opts=ResourceOptions(parent=account),
    )
