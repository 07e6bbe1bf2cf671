from enum import Enum


class AccountTier(Enum):
    STANDARD = "Standard"
    PREMIUM = "Premium"


class ReplicationType(Enum):
    """
    Redundancy of the account's data.
    Combined with the tier into the SKU name, e.g. ``Standard_ZRS``.
    """

    LRS = "LRS"
    GRS = "GRS"
    RAGRS = "RAGRS"
    ZRS = "ZRS"
    GZRS = "GZRS"
    RAGZRS = "RAGZRS"


class AccessTier(Enum):
    HOT = "Hot"
    COOL = "Cool"


class TlsVersion(Enum):
    TLS1_0 = "TLS1_0"
    TLS1_1 = "TLS1_1"
    TLS1_2 = "TLS1_2"


class NetworkAction(Enum):
    ALLOW = "Allow"
    DENY = "Deny"


class NetworkBypass(Enum):
    """Traffic allowed past the network rules regardless of the default action"""

    NONE = "None"
    LOGGING = "Logging"
    METRICS = "Metrics"
    AZURE_SERVICES = "AzureServices"


class IdentityType(Enum):
    SYSTEM_ASSIGNED = "SystemAssigned"
    USER_ASSIGNED = "UserAssigned"
    SYSTEM_AND_USER_ASSIGNED = "SystemAssigned,UserAssigned"


class ContainerAccess(Enum):
    """Anonymous read access level of blob containers"""

    PRIVATE = "None"
    BLOB = "Blob"
    CONTAINER = "Container"


class LockLevel(Enum):
    CAN_NOT_DELETE = "CanNotDelete"
    READ_ONLY = "ReadOnly"


class LogCategory(Enum):
    STORAGE_READ = "StorageRead"
    STORAGE_WRITE = "StorageWrite"
    STORAGE_DELETE = "StorageDelete"


class MetricCategory(Enum):
    TRANSACTION = "Transaction"
    CAPACITY = "Capacity"


class RoleCategory(Enum):
    """
    Principal list categories of the access config.
    The value is the Azure built-in role granted to the principals of the category.
    """

    ACCOUNT_CONTRIBUTORS = "Storage Account Contributor"
    BLOB_CONTRIBUTORS = "Storage Blob Data Contributor"
    BLOB_READERS = "Storage Blob Data Reader"
    QUEUE_CONTRIBUTORS = "Storage Queue Data Contributor"
    QUEUE_READERS = "Storage Queue Data Reader"
    TABLE_CONTRIBUTORS = "Storage Table Data Contributor"
    TABLE_READERS = "Storage Table Data Reader"
    FILE_CONTRIBUTORS = "Storage File Data SMB Share Contributor"

    @property
    def field_name(self) -> str:
        """Name of the ``AccessConfig`` field listing the principals of this category"""
        return self.name.lower()
