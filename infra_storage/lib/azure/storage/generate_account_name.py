import hashlib
import re

from .constants import ACCOUNT_NAME_MAX_LENGTH

_HASH_LENGTH = 5


def generate_account_name(prefix: str, environment: str) -> str:
    """Derive a storage account name from a prefix and an environment

    The result is the lower-cased alphanumerics of both inputs, cut short to leave room for a 5 character hash of
    the untouched inputs, e.g. ``("app-data", "prod")`` gives ``appdataprod`` followed by the hash.
    The same inputs always give the same name.

    :param prefix: Name prefix, usually the application
    :param environment: Environment, e.g. ``dev`` or ``prod``
    :return: Account name of at most 24 characters
    """
    slug = re.sub(r"[^a-z0-9]", "", f"{prefix}{environment}".lower())
    digest = hashlib.md5(f"{prefix}-{environment}".encode("utf-8")).hexdigest()

    return f"{slug[: ACCOUNT_NAME_MAX_LENGTH - _HASH_LENGTH]}{digest[-_HASH_LENGTH:]}"
