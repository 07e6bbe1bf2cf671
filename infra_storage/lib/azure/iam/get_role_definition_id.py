from functools import lru_cache
from typing import Optional, Union

from azure.core.credentials import AccessToken
from azure.mgmt.authorization import AuthorizationManagementClient
from pulumi import Output
from pulumi_azure_native import authorization

from infra_storage.lib.azure.client import get_subscription_id
from infra_storage.lib.utils import run_once


class _ProviderTokenCredential:
    """Hands the native provider's access token to the Azure SDK clients"""

    def __init__(self, token: str):
        self.token = token

    def get_token(self, *scopes, **kwargs) -> AccessToken:
        # noinspection PyArgumentList
        return AccessToken(token=self.token, expires_on=-1)


@run_once
def _get_auth_manager_client() -> AuthorizationManagementClient:
    client_token = authorization.get_client_token()
    return AuthorizationManagementClient(_ProviderTokenCredential(client_token.token), get_subscription_id())


@lru_cache
def get_role_definition_id(name: str, scope: Optional[Union[str, Output[str]]] = None) -> Output[str]:
    """Get an Azure role definition ID by role name

    Built-in storage roles: https://learn.microsoft.com/en-us/azure/role-based-access-control/built-in-roles/storage

    :param name: Role definition name like "Storage Blob Data Reader"
    :param scope: Scope the role has to be assignable at. Defaults to the subscription.
    :return: ID of the named role definition
    """
    filter_ = f"roleName eq '{name}'"

    def _lookup(optional_scope: Optional[str] = None) -> str:
        scope_ = optional_scope or f"/subscriptions/{get_subscription_id()}"
        roles = _get_auth_manager_client().role_definitions.list(scope=scope_, filter=filter_)

        role = next(iter(roles), None)
        if role is None:
            raise Exception(f"role '{name}' not found at scope '{scope_}'")

        return role.id

    if scope is not None:
        return Output.from_input(scope).apply(_lookup)
    else:
        return Output.from_input(_lookup())
