from enum import Enum

ACCOUNT_NAME_MAX_LENGTH = 24
"""Storage account names are 3 to 24 lower-case letters and digits"""


class AccountKind(Enum):
    """
    Enum of storage account kinds.
    The kind decides which of the storage sub-services an account offers.
    """

    STORAGE = "Storage"
    """ General-purpose v1 """

    STORAGE_V2 = "StorageV2"
    """ General-purpose v2, every sub-service """

    BLOB_STORAGE = "BlobStorage"
    """ Legacy blob-only account """

    BLOCK_BLOB_STORAGE = "BlockBlobStorage"
    """ Premium block blob account """

    FILE_STORAGE = "FileStorage"
    """ Premium file share account """


class StorageService(Enum):
    """
    Enum of storage sub-services.
    The value is the name of the service's child resource type under ``Microsoft.Storage/storageAccounts``.
    """

    BLOB = "blobServices"
    QUEUE = "queueServices"
    TABLE = "tableServices"
    FILE = "fileServices"

    @property
    def short_name(self) -> str:
        return self.name.lower()


_ALL_SERVICES = frozenset(StorageService)

_KIND_SERVICES: dict[AccountKind, frozenset[StorageService]] = {
    AccountKind.STORAGE: _ALL_SERVICES,
    AccountKind.STORAGE_V2: _ALL_SERVICES,
    AccountKind.BLOB_STORAGE: frozenset({StorageService.BLOB}),
    AccountKind.BLOCK_BLOB_STORAGE: frozenset({StorageService.BLOB}),
    AccountKind.FILE_STORAGE: frozenset({StorageService.FILE}),
}


def supported_services(kind: AccountKind) -> list[StorageService]:
    """Sub-services an account kind offers, in declaration order

    :param kind: Account kind
    :return: List of services
    """
    return [service for service in StorageService if service in _KIND_SERVICES[kind]]


def supports(kind: AccountKind, service: StorageService) -> bool:
    return service in _KIND_SERVICES[kind]
