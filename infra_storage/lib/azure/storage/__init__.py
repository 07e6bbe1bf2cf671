from .constants import (
    ACCOUNT_NAME_MAX_LENGTH,
    AccountKind,
    StorageService,
    supported_services,
    supports,
)
from .generate_account_name import generate_account_name
