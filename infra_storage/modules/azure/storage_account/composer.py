"""
Resolve a ``StorageAccountConfig`` into a ``StoragePlan``.

The plan is what gets created: every optional block the account kind can't hold is already left out, every
compatibility rule is already applied, and every name is final. Composing is free of cloud calls, so the same
config always gives an equal plan.
"""
import uuid
from dataclasses import dataclass, replace
from typing import Optional

from pulumi import log

from infra_storage.lib.azure.storage import (
    AccountKind,
    StorageService,
    generate_account_name,
    supported_services,
    supports,
)
from infra_storage.lib.config import StorageConfigException
from infra_storage.lib.utils import unique
from .config import (
    AccessConfig,
    BlobPropertiesConfig,
    CorsRuleConfig,
    CustomDomainConfig,
    IdentityConfig,
    NetworkRulesConfig,
    StorageAccountConfig,
)
from .types import (
    AccessTier,
    ContainerAccess,
    LockLevel,
    LogCategory,
    MetricCategory,
    NetworkAction,
    NetworkBypass,
    RoleCategory,
    TlsVersion,
)

PITR_RETENTION_DAYS = 30
"""Point-in-time restore window used by ``point_in_time_restore``"""

DELETE_RETENTION_BUFFER_DAYS = 5
"""Days soft-deleted blobs outlive the restore window"""

_ACCESS_TIER_KINDS = (AccountKind.STORAGE_V2, AccountKind.BLOB_STORAGE)

_ROLE_ASSIGNMENT_NAMESPACE = uuid.UUID("2b7a1c64-5f0e-4d8a-9a53-3c6b0f1d9e27")


@dataclass(frozen=True)
class NetworkPlan:
    default_action: NetworkAction
    bypass: str
    ip_rules: tuple[str, ...]
    subnet_ids: tuple[str, ...]


@dataclass(frozen=True)
class BlobServicePlan:
    versioning_enabled: bool
    change_feed_enabled: bool
    change_feed_retention_days: Optional[int]
    last_access_time_enabled: bool
    default_service_version: Optional[str]
    delete_retention_days: Optional[int]
    container_delete_retention_days: Optional[int]
    restore_days: Optional[int]
    """Set only when a restore policy is created"""
    cors_rules: tuple[CorsRuleConfig, ...]


@dataclass(frozen=True)
class QueueServicePlan:
    cors_rules: tuple[CorsRuleConfig, ...]


@dataclass(frozen=True)
class FileServicePlan:
    delete_retention_days: Optional[int]
    smb_multichannel_enabled: Optional[bool]
    cors_rules: tuple[CorsRuleConfig, ...]


@dataclass(frozen=True)
class LifecyclePlan:
    version_retention_days: int
    snapshot_retention_days: Optional[int]


@dataclass(frozen=True)
class DiagnosticPlan:
    name: str
    service: Optional[StorageService]
    """Sub-service the setting is attached to, ``None`` for the account itself"""
    logs: tuple[tuple[LogCategory, bool], ...]
    metrics: tuple[tuple[MetricCategory, bool], ...]
    log_analytics_workspace_id: Optional[str]
    storage_account_id: Optional[str]
    event_hub_authorization_rule_id: Optional[str]
    event_hub_name: Optional[str]


@dataclass(frozen=True)
class RoleGrant:
    category: RoleCategory
    principal_id: str
    assignment_name: str
    """Deterministic GUID of the role assignment"""

    @property
    def role_name(self) -> str:
        return self.category.value


@dataclass(frozen=True)
class LockPlan:
    level: LockLevel
    notes: str
    settling_seconds: int


@dataclass(frozen=True)
class StoragePlan:
    account_name: str
    resource_group_name: str
    location: Optional[str]
    kind: AccountKind
    sku_name: str
    access_tier: Optional[AccessTier]
    min_tls_version: TlsVersion
    https_traffic_only: bool
    shared_access_key_enabled: bool
    allow_blob_public_access: bool
    hns_enabled: bool
    nfsv3_enabled: bool
    large_file_shares_enabled: bool
    network: NetworkPlan
    custom_domain: Optional[CustomDomainConfig]
    identity: Optional[IdentityConfig]
    blob_service: Optional[BlobServicePlan]
    queue_service: Optional[QueueServicePlan]
    file_service: Optional[FileServicePlan]
    containers: tuple[str, ...]
    container_access_type: ContainerAccess
    queues: tuple[str, ...]
    tables: tuple[str, ...]
    shares: tuple[str, ...]
    share_quota_gb: int
    lifecycle: Optional[LifecyclePlan]
    diagnostics: tuple[DiagnosticPlan, ...]
    grants: tuple[RoleGrant, ...]
    lock: Optional[LockPlan]
    tags: tuple[tuple[str, str], ...]


def delete_retention_days_for(restore_days: int) -> int:
    """Blob soft delete window needed by a point-in-time restore window

    Azure requires deleted blobs to outlive the restore window, so they are kept a fixed 5 days longer.

    :param restore_days: Restore window in days
    :return: Delete retention window in days
    """
    return restore_days + DELETE_RETENTION_BUFFER_DAYS


def resolve_account_name(config: StorageAccountConfig) -> str:
    if config.name:
        return config.name

    if config.name_prefix and config.environment:
        return generate_account_name(config.name_prefix, config.environment)

    raise StorageConfigException("name")


def resolve_network(rules: NetworkRulesConfig) -> NetworkPlan:
    """Resolve the network rule set

    Without an explicit default action, an IP allow list means everything else is denied, and no allow list means
    the account stays open.

    :param rules: Network rules config
    :return: The network plan
    """
    if rules.default_action is not None:
        default_action = rules.default_action
    elif rules.ip_rules:
        default_action = NetworkAction.DENY
    else:
        default_action = NetworkAction.ALLOW

    bypass = unique(rules.bypass) or [NetworkBypass.NONE]

    return NetworkPlan(
        default_action=default_action,
        bypass=", ".join(b.value for b in bypass),
        ip_rules=tuple(unique(rules.ip_rules)),
        subnet_ids=tuple(unique(rules.virtual_network_subnet_ids)),
    )


def resolve_blob_service(config: StorageAccountConfig) -> Optional[BlobServicePlan]:
    """Resolve the blob service properties

    ``point_in_time_restore`` overrides the requested properties with the fixed restore setup. Hierarchical
    namespace accounts can't have versioning, change feed or restore, whatever was asked for.

    :param config: Storage account config
    :return: The blob service plan, ``None`` when no blob properties apply
    """
    props = config.blob_properties

    if config.point_in_time_restore:
        props = replace(
            props or BlobPropertiesConfig(),
            versioning_enabled=True,
            change_feed_enabled=True,
            restore_days=PITR_RETENTION_DAYS,
            delete_retention_days=delete_retention_days_for(PITR_RETENTION_DAYS),
        )

    if props is None or not supports(config.kind, StorageService.BLOB):
        return None

    versioning = props.versioning_enabled and not config.hns_enabled
    change_feed = props.change_feed_enabled and not config.hns_enabled

    restore_days = props.restore_days
    if config.hns_enabled or not restore_days or restore_days <= 0:
        restore_days = None

    return BlobServicePlan(
        versioning_enabled=versioning,
        change_feed_enabled=change_feed,
        change_feed_retention_days=props.change_feed_retention_days if change_feed else None,
        last_access_time_enabled=props.last_access_time_enabled,
        default_service_version=props.default_service_version,
        delete_retention_days=props.delete_retention_days,
        container_delete_retention_days=props.container_delete_retention_days,
        restore_days=restore_days,
        cors_rules=tuple(props.cors_rules),
    )


def resolve_queue_service(config: StorageAccountConfig) -> Optional[QueueServicePlan]:
    if config.queue_properties is None or not supports(config.kind, StorageService.QUEUE):
        return None

    return QueueServicePlan(cors_rules=tuple(config.queue_properties.cors_rules))


def resolve_file_service(config: StorageAccountConfig) -> Optional[FileServicePlan]:
    props = config.share_properties
    if props is None or not supports(config.kind, StorageService.FILE):
        return None

    return FileServicePlan(
        delete_retention_days=props.delete_retention_days,
        smb_multichannel_enabled=props.smb_multichannel_enabled,
        cors_rules=tuple(props.cors_rules),
    )


def _resolve_children(kind: AccountKind, service: StorageService, names: list[str], label: str) -> tuple[str, ...]:
    names = unique(names)

    if names and not supports(kind, service):
        log.warn(f"account kind `{kind.value}` has no {service.short_name} service, skipping {label} {names}")
        return ()

    return tuple(names)


def expand_grants(account_name: str, resource_group_name: str, access: AccessConfig) -> tuple[RoleGrant, ...]:
    """Expand the principal lists into one grant per distinct principal and role

    :param account_name: Storage account name
    :param resource_group_name: Resource group of the account
    :param access: Principal lists per role category
    :return: Grants, grouped by category in declaration order
    """
    return tuple(
        RoleGrant(
            category=category,
            principal_id=principal_id,
            assignment_name=str(
                uuid.uuid5(
                    _ROLE_ASSIGNMENT_NAMESPACE,
                    f"{resource_group_name}/{account_name}/{category.value}/{principal_id}",
                )
            ),
        )
        for category in RoleCategory
        for principal_id in unique(getattr(access, category.field_name))
    )


def resolve_diagnostics(config: StorageAccountConfig, account_name: str) -> tuple[DiagnosticPlan, ...]:
    diagnostics = config.diagnostics
    if diagnostics is None:
        return ()

    sinks = {
        "log_analytics_workspace_id": diagnostics.log_analytics_workspace_id,
        "storage_account_id": diagnostics.storage_account_id,
        "event_hub_authorization_rule_id": diagnostics.event_hub_authorization_rule_id,
        "event_hub_name": diagnostics.event_hub_name,
    }
    metrics = tuple((category, category in diagnostics.metric_categories) for category in MetricCategory)
    logs = tuple((category, category in diagnostics.log_categories) for category in LogCategory)

    account_setting = DiagnosticPlan(name=f"{account_name}-diagnostics", service=None, logs=(), metrics=metrics, **sinks)

    return (account_setting,) + tuple(
        DiagnosticPlan(
            name=f"{account_name}-{service.short_name}-diagnostics",
            service=service,
            logs=logs,
            metrics=metrics,
            **sinks,
        )
        for service in supported_services(config.kind)
    )


def compose_plan(config: StorageAccountConfig) -> StoragePlan:
    """Resolve everything that will be created for a storage account

    :param config: Storage account config
    :return: The storage plan
    """
    kind = config.kind
    account_name = resolve_account_name(config)

    lifecycle = None
    if config.lifecycle is not None and supports(kind, StorageService.BLOB):
        lifecycle = LifecyclePlan(
            version_retention_days=config.lifecycle.version_retention_days,
            snapshot_retention_days=config.lifecycle.snapshot_retention_days,
        )

    lock = None
    if config.lock.enabled:
        lock = LockPlan(
            level=config.lock.level,
            notes=config.lock.notes,
            settling_seconds=config.lock.settling_seconds,
        )

    return StoragePlan(
        account_name=account_name,
        resource_group_name=config.resource_group_name,
        location=config.location,
        kind=kind,
        sku_name=f"{config.tier.value}_{config.replication_type.value}",
        access_tier=config.access_tier if kind in _ACCESS_TIER_KINDS else None,
        min_tls_version=config.min_tls_version,
        https_traffic_only=config.https_traffic_only,
        shared_access_key_enabled=config.shared_access_key_enabled,
        allow_blob_public_access=config.allow_blob_public_access,
        hns_enabled=config.hns_enabled,
        nfsv3_enabled=config.nfsv3_enabled,
        large_file_shares_enabled=config.large_file_shares_enabled,
        network=resolve_network(config.network_rules),
        custom_domain=config.custom_domain,
        identity=config.identity,
        blob_service=resolve_blob_service(config),
        queue_service=resolve_queue_service(config),
        file_service=resolve_file_service(config),
        containers=_resolve_children(kind, StorageService.BLOB, config.containers, "containers"),
        container_access_type=config.container_access_type,
        queues=_resolve_children(kind, StorageService.QUEUE, config.queues, "queues"),
        tables=_resolve_children(kind, StorageService.TABLE, config.tables, "tables"),
        shares=_resolve_children(kind, StorageService.FILE, config.shares, "shares"),
        share_quota_gb=config.share_quota_gb,
        lifecycle=lifecycle,
        diagnostics=resolve_diagnostics(config, account_name),
        grants=expand_grants(account_name, config.resource_group_name, config.access),
        lock=lock,
        tags=tuple(sorted(config.tags.items())),
    )
