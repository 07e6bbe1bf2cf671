from typing import Sequence

from pulumi import Resource, ResourceOptions
from pulumi_azure_native import authorization, storage

from .composer import LockPlan
from .settling_delay import SettlingDelay, SettlingDelayArgs


def create_delete_lock(
    cls, account: storage.StorageAccount, name: str, lock: LockPlan, protected: Sequence[Resource]
) -> authorization.ManagementLockByScope:
    """Lock the storage account, behind a settling delay

    The lock depends on the delay, which depends on the account and everything created in or for it. On teardown
    the lock goes first, then the delay holds back every other deletion for ``settling_seconds``.

    :param cls: The module creating the resources
    :param account: The storage account
    :param name: Name of the storage account
    :param lock: Lock plan
    :param protected: Resources that can't be deleted while the lock is enforced
    :return: The management lock
    """
    delay = SettlingDelay(
        f"{name}-lock-settling-delay",
        SettlingDelayArgs(
            create_seconds=0,
            destroy_seconds=lock.settling_seconds,
        ),
        opts=ResourceOptions(parent=cls, depends_on=[account, *protected]),
    )

    return authorization.ManagementLockByScope(
        f"{name}-lock",
        lock_name=f"{name}-lock",
        scope=account.id,
        level=lock.level.value,
        notes=lock.notes,
        opts=ResourceOptions(parent=cls, depends_on=[delay]),
    )
