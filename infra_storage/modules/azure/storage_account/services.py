from typing import Optional

from pulumi import Resource, ResourceOptions
from pulumi_azure_native import storage

from .composer import BlobServicePlan, FileServicePlan, QueueServicePlan, StoragePlan
from .config import CorsRuleConfig


def _cors(rules: tuple[CorsRuleConfig, ...]) -> Optional[storage.CorsRulesArgs]:
    if not rules:
        return None

    return storage.CorsRulesArgs(
        cors_rules=[
            storage.CorsRuleArgs(
                allowed_origins=rule.allowed_origins,
                allowed_methods=rule.allowed_methods,
                allowed_headers=rule.allowed_headers,
                exposed_headers=rule.exposed_headers,
                max_age_in_seconds=rule.max_age_in_seconds,
            )
            for rule in rules
        ]
    )


def _retention(days: Optional[int]) -> storage.DeleteRetentionPolicyArgs:
    if days is None:
        return storage.DeleteRetentionPolicyArgs(enabled=False)

    return storage.DeleteRetentionPolicyArgs(enabled=True, days=days)


def create_blob_service(
    cls, account: storage.StorageAccount, name: str, blob: BlobServicePlan
) -> storage.BlobServiceProperties:
    """Configure the blob service of the account

    The restore policy is only sent when the plan carries a restore window.

    :param cls: The module creating the resource
    :param account: The storage account
    :param name: Name of the storage account
    :param blob: Blob service plan
    :return: The blob service properties
    """
    restore_policy = None
    if blob.restore_days is not None:
        restore_policy = storage.RestorePolicyPropertiesArgs(enabled=True, days=blob.restore_days)

    last_access_time_tracking = None
    if blob.last_access_time_enabled:
        last_access_time_tracking = storage.LastAccessTimeTrackingPolicyArgs(
            enable=True,
            name="AccessTimeTracking",
            tracking_granularity_in_days=1,
            blob_type=["blockBlob"],
        )

    return storage.BlobServiceProperties(
        f"{name}-blob-service",
        blob_services_name="default",
        account_name=account.name,
        resource_group_name=cls.resourcegroup.name,
        is_versioning_enabled=blob.versioning_enabled,
        change_feed=storage.ChangeFeedArgs(
            enabled=blob.change_feed_enabled,
            retention_in_days=blob.change_feed_retention_days,
        ),
        delete_retention_policy=_retention(blob.delete_retention_days),
        container_delete_retention_policy=_retention(blob.container_delete_retention_days),
        restore_policy=restore_policy,
        last_access_time_tracking_policy=last_access_time_tracking,
        default_service_version=blob.default_service_version,
        cors=_cors(blob.cors_rules),
        opts=ResourceOptions(parent=account),
    )


def create_queue_service(
    cls, account: storage.StorageAccount, name: str, queue: QueueServicePlan
) -> storage.QueueServiceProperties:
    return storage.QueueServiceProperties(
        f"{name}-queue-service",
        queue_service_name="default",
        account_name=account.name,
        resource_group_name=cls.resourcegroup.name,
        cors=_cors(queue.cors_rules),
        opts=ResourceOptions(parent=account),
    )


def create_file_service(
    cls, account: storage.StorageAccount, name: str, file: FileServicePlan
) -> storage.FileServiceProperties:
    protocol_settings = None
    if file.smb_multichannel_enabled is not None:
        protocol_settings = storage.ProtocolSettingsArgs(
            smb=storage.SmbSettingArgs(
                multichannel=storage.MultichannelArgs(enabled=file.smb_multichannel_enabled),
            ),
        )

    return storage.FileServiceProperties(
        f"{name}-file-service",
        file_services_name="default",
        account_name=account.name,
        resource_group_name=cls.resourcegroup.name,
        share_delete_retention_policy=_retention(file.delete_retention_days),
        protocol_settings=protocol_settings,
        cors=_cors(file.cors_rules),
        opts=ResourceOptions(parent=account),
    )


def create_services(cls, account: storage.StorageAccount, plan: StoragePlan) -> list[Resource]:
    """Configure every sub-service the plan has properties for

    :param cls: The module creating the resources
    :param account: The storage account
    :param plan: Storage plan
    :return: The service properties resources created
    """
    services = []

    if plan.blob_service is not None:
        services.append(create_blob_service(cls, account, plan.account_name, plan.blob_service))

    if plan.queue_service is not None:
        services.append(create_queue_service(cls, account, plan.account_name, plan.queue_service))

    if plan.file_service is not None:
        services.append(create_file_service(cls, account, plan.account_name, plan.file_service))

    return services
