import logging
import os

from pulumi import export, get_stack, log

from infra_storage.lib.config import CONFIG_NAMESPACE, get_stack_config
from infra_storage.lib.utils import to_serializable
from infra_storage.modules.azure.storage_account import StorageAccount, StorageAccountExports


def run_stack(stack_name: str, namespace: str = CONFIG_NAMESPACE) -> StorageAccountExports:
    """Build the storage account of a stack from its configuration

    :param stack_name: The stack name, used as the name of the module
    :param namespace: Pulumi config namespace holding the storage account inputs
    :return: The module exports
    """
    config = get_stack_config(namespace, StorageAccount.get_config_type())

    log.debug(f"running storage account module for stack `{stack_name}`")

    exports = StorageAccount(stack_name, config).run()

    export(stack_name, to_serializable(exports))

    return exports


def run_active_stack() -> StorageAccountExports:
    """Build the storage account of the active stack

    :return: The module exports
    """
    stack = get_stack()

    log.debug(f"active stack is `{stack}`")

    return run_stack(stack)


# configure logging before any library module does work on import
if os.getenv("STORAGE_DEBUG"):
    logging.basicConfig(level=logging.DEBUG)
    msg = "infra-storage logging enabled"
    log.debug(msg)
    logging.debug(msg)
