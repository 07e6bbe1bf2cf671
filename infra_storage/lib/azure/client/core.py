from pulumi_azure_native import authorization

from infra_storage.lib.utils import run_once


@run_once
def get_client_config() -> authorization.AwaitableGetClientConfigResult:
    """Access the current configuration of the native Azure provider.

    :return: Client configuration including client, subscription and tenant IDs
    """
    return authorization.get_client_config()


def get_subscription_id() -> str:
    return get_client_config().subscription_id
