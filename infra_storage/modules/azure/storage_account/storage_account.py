from pulumi import log

from infra_storage.lib.azure.base import AzureModule
from .access import AccessManager
from .account import create_storage_account
from .children import create_children
from .composer import compose_plan
from .config import StorageAccountConfig, StorageAccountExports
from .diagnostics import create_diagnostic_setting
from .lifecycle import create_lifecycle_policy
from .protection import create_delete_lock
from .services import create_services


class StorageAccount(AzureModule):
    def build(self, config: StorageAccountConfig) -> StorageAccountExports:
        plan = compose_plan(config)
        name = plan.account_name

        log.debug(f"composed plan for storage account `{name}`: {plan}")

        account = create_storage_account(self, plan)

        services = create_services(self, account, plan)
        children = create_children(self, account, plan)

        policies = []
        if plan.lifecycle is not None:
            policies.append(create_lifecycle_policy(self, account, name, plan.lifecycle))

        diagnostics = [create_diagnostic_setting(self, account, name, d) for d in plan.diagnostics]

        access = AccessManager(
            account=account,
            name=name,
            scope=self.build_resource_id("Microsoft.Storage", "storageAccounts", name),
        )
        assignments = access.grant(plan.grants)

        lock = None
        if plan.lock is not None:
            lock = create_delete_lock(
                self,
                account,
                name,
                plan.lock,
                protected=[*services, *children, *policies, *diagnostics, *assignments],
            )
        else:
            log.warn(f"storage account `{name}` is not protected by a delete lock")

        return StorageAccountExports(
            name=name,
            id=account.id,
            resource_group_name=plan.resource_group_name,
            containers=list(plan.containers),
            queues=list(plan.queues),
            tables=list(plan.tables),
            shares=list(plan.shares),
            diagnostic_settings=[d.name for d in plan.diagnostics],
            role_assignments=len(assignments),
            lock_id=lock.id if lock else None,
        )
