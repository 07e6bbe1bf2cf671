from .composer import compose_plan
from .config import StorageAccountConfig, StorageAccountExports
from .storage_account import StorageAccount
