from dataclasses import dataclass, field
from typing import Optional

from pulumi import Output

from infra_storage.lib.azure.storage import AccountKind
from .types import (
    AccessTier,
    AccountTier,
    ContainerAccess,
    IdentityType,
    LockLevel,
    LogCategory,
    MetricCategory,
    NetworkAction,
    NetworkBypass,
    ReplicationType,
    TlsVersion,
)


@dataclass
class NetworkRulesConfig:
    ip_rules: list[str] = field(default_factory=list)
    """Public IP addresses or CIDR ranges allowed to reach the account"""

    virtual_network_subnet_ids: list[str] = field(default_factory=list)
    """Resource IDs of subnets allowed to reach the account"""

    bypass: list[NetworkBypass] = field(default_factory=lambda: [NetworkBypass.AZURE_SERVICES])
    """Traffic that skips the rules"""

    default_action: Optional[NetworkAction] = None
    """
    Action for traffic no rule matches.
    Leave unset to deny when ``ip_rules`` is non-empty and allow otherwise.
    """


@dataclass
class CustomDomainConfig:
    name: str
    """The custom domain name, e.g. ``files.example.com``"""

    use_subdomain: bool = False
    """Validate the domain through an ``asverify`` CNAME"""


@dataclass
class IdentityConfig:
    type: IdentityType = IdentityType.SYSTEM_ASSIGNED

    identity_ids: list[str] = field(default_factory=list)
    """Resource IDs of user-assigned identities, used with the ``UserAssigned`` types"""


@dataclass
class CorsRuleConfig:
    allowed_origins: list[str]

    allowed_methods: list[str]

    allowed_headers: list[str] = field(default_factory=lambda: ["*"])

    exposed_headers: list[str] = field(default_factory=lambda: ["*"])

    max_age_in_seconds: int = 3600


@dataclass
class BlobPropertiesConfig:
    versioning_enabled: bool = False
    """Keep previous versions of blobs on overwrite and delete"""

    change_feed_enabled: bool = False
    """Record blob changes in the change feed"""

    change_feed_retention_days: Optional[int] = None
    """Days to keep change feed entries. Unset keeps them forever"""

    last_access_time_enabled: bool = False
    """Track last access time, for lifecycle rules based on it"""

    default_service_version: Optional[str] = None
    """API version used for requests that don't specify one"""

    delete_retention_days: Optional[int] = 7
    """Soft delete window of blobs. Unset disables blob soft delete"""

    container_delete_retention_days: Optional[int] = 7
    """Soft delete window of containers. Unset disables container soft delete"""

    restore_days: Optional[int] = None
    """
    Point-in-time restore window.
    Only used when strictly positive, and must be lower than ``delete_retention_days``.
    """

    cors_rules: list[CorsRuleConfig] = field(default_factory=list)


@dataclass
class QueuePropertiesConfig:
    cors_rules: list[CorsRuleConfig] = field(default_factory=list)


@dataclass
class SharePropertiesConfig:
    delete_retention_days: Optional[int] = 7
    """Soft delete window of file shares. Unset disables share soft delete"""

    smb_multichannel_enabled: Optional[bool] = None
    """SMB multichannel, premium file accounts only"""

    cors_rules: list[CorsRuleConfig] = field(default_factory=list)


@dataclass
class LifecycleConfig:
    version_retention_days: int = 30
    """Days after which previous blob versions are deleted"""

    snapshot_retention_days: Optional[int] = None
    """Days after which blob snapshots are deleted. Unset keeps them"""


@dataclass
class DiagnosticsConfig:
    log_analytics_workspace_id: Optional[str] = None
    """Resource ID of the Log Analytics workspace receiving the logs and metrics"""

    storage_account_id: Optional[str] = None
    """Resource ID of a storage account archiving the logs and metrics"""

    event_hub_authorization_rule_id: Optional[str] = None
    """Resource ID of the Event Hub namespace authorization rule to stream with"""

    event_hub_name: Optional[str] = None
    """Event Hub to stream to. Unset lets Azure create one per category"""

    log_categories: list[LogCategory] = field(default_factory=lambda: list(LogCategory))
    """Log categories to enable. The others are sent as disabled"""

    metric_categories: list[MetricCategory] = field(default_factory=lambda: list(MetricCategory))
    """Metric categories to enable. The others are sent as disabled"""


@dataclass
class AccessConfig:
    """Principal IDs (users, groups, service principals, managed identities) per granted role"""

    account_contributors: list[str] = field(default_factory=list)

    blob_contributors: list[str] = field(default_factory=list)

    blob_readers: list[str] = field(default_factory=list)

    queue_contributors: list[str] = field(default_factory=list)

    queue_readers: list[str] = field(default_factory=list)

    table_contributors: list[str] = field(default_factory=list)

    table_readers: list[str] = field(default_factory=list)

    file_contributors: list[str] = field(default_factory=list)


@dataclass
class LockConfig:
    enabled: bool = True
    """Protect the account with a management lock"""

    level: LockLevel = LockLevel.CAN_NOT_DELETE

    notes: str = "Protects the storage account from accidental deletion"

    settling_seconds: int = 30
    """Seconds to wait after removing the lock before deleting what it protected"""


@dataclass
class StorageAccountConfig:
    resource_group_name: str
    """Existing resource group to create the account in"""

    name: Optional[str] = None
    """
    The name of the storage account.
    Storage account names must be between 3 and 24 characters in length and use numbers and lower-case letters only.
    Leave unset to derive one from ``name_prefix`` and ``environment``.
    """

    name_prefix: Optional[str] = None
    """Prefix of the derived account name"""

    environment: Optional[str] = None
    """Environment part of the derived account name"""

    location: Optional[str] = None
    """Azure region. Defaults to the region of the resource group"""

    kind: AccountKind = AccountKind.STORAGE_V2

    tier: AccountTier = AccountTier.STANDARD

    replication_type: ReplicationType = ReplicationType.ZRS

    access_tier: AccessTier = AccessTier.HOT
    """Default access tier of blobs. Only used by kinds storing blobs"""

    min_tls_version: TlsVersion = TlsVersion.TLS1_2

    https_traffic_only: bool = True

    shared_access_key_enabled: bool = True
    """Allow requests authorized with the account access key"""

    allow_blob_public_access: bool = False

    hns_enabled: bool = False
    """
    Hierarchical namespace (Data Lake Storage Gen2).
    Forces blob versioning, change feed and point-in-time restore off.
    """

    nfsv3_enabled: bool = False

    large_file_shares_enabled: bool = False

    network_rules: NetworkRulesConfig = field(default_factory=NetworkRulesConfig)

    custom_domain: Optional[CustomDomainConfig] = None

    identity: Optional[IdentityConfig] = None

    blob_properties: Optional[BlobPropertiesConfig] = None

    queue_properties: Optional[QueuePropertiesConfig] = None

    share_properties: Optional[SharePropertiesConfig] = None

    point_in_time_restore: bool = False
    """
    Enable blob point-in-time restore with a fixed 30 day window.
    Turns on versioning and change feed and keeps deleted blobs for 35 days.
    """

    containers: list[str] = field(default_factory=list)
    """Blob containers to create"""

    container_access_type: ContainerAccess = ContainerAccess.PRIVATE

    queues: list[str] = field(default_factory=list)

    tables: list[str] = field(default_factory=list)

    shares: list[str] = field(default_factory=list)
    """File shares to create"""

    share_quota_gb: int = 100
    """Size limit of each file share"""

    lifecycle: Optional[LifecycleConfig] = None

    diagnostics: Optional[DiagnosticsConfig] = None

    access: AccessConfig = field(default_factory=AccessConfig)

    lock: LockConfig = field(default_factory=LockConfig)

    tags: dict[str, str] = field(default_factory=dict)
    """Tags added to every resource, on top of the standard ones"""


@dataclass
class StorageAccountExports:
    name: str
    """Name of the storage account"""

    id: Output[str]
    """Resource ID of the storage account"""

    resource_group_name: str

    containers: list[str]
    """Containers created, after dropping the ones the account kind can't hold"""

    queues: list[str]

    tables: list[str]

    shares: list[str]

    diagnostic_settings: list[str]
    """Names of the diagnostic settings created"""

    role_assignments: int
    """Number of role assignments created"""

    lock_id: Optional[Output[str]] = None
