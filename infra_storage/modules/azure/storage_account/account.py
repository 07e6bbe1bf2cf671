from typing import Optional

from pulumi import ResourceOptions
from pulumi_azure_native import storage

from infra_storage.lib.tags import get_tags
from .composer import NetworkPlan, StoragePlan
from .config import CustomDomainConfig, IdentityConfig


def _network_rule_set(network: NetworkPlan) -> storage.NetworkRuleSetArgs:
    return storage.NetworkRuleSetArgs(
        default_action=network.default_action.value,
        bypass=network.bypass,
        ip_rules=[
            storage.IPRuleArgs(i_p_address_or_range=ip, action=storage.Action.ALLOW) for ip in network.ip_rules
        ],
        virtual_network_rules=[
            storage.VirtualNetworkRuleArgs(virtual_network_resource_id=subnet_id, action=storage.Action.ALLOW)
            for subnet_id in network.subnet_ids
        ],
    )


def _custom_domain(custom_domain: Optional[CustomDomainConfig]) -> Optional[storage.CustomDomainArgs]:
    if custom_domain is None:
        return None

    return storage.CustomDomainArgs(
        name=custom_domain.name,
        use_sub_domain_name=custom_domain.use_subdomain,
    )


def _identity(identity: Optional[IdentityConfig]) -> Optional[storage.IdentityArgs]:
    if identity is None:
        return None

    return storage.IdentityArgs(
        type=identity.type.value,
        user_assigned_identities=identity.identity_ids or None,
    )


def create_storage_account(cls, plan: StoragePlan) -> storage.StorageAccount:
    """Create the storage account

    Optional blocks missing from the plan are left out of the resource entirely.

    :param cls: The module creating the account
    :param plan: Storage plan
    :return: The storage account
    """
    return storage.StorageAccount(
        plan.account_name,
        account_name=plan.account_name,
        kind=plan.kind.value,
        sku=storage.SkuArgs(
            name=plan.sku_name,
        ),
        access_tier=plan.access_tier.value if plan.access_tier else None,
        minimum_tls_version=plan.min_tls_version.value,
        enable_https_traffic_only=plan.https_traffic_only,
        allow_shared_key_access=plan.shared_access_key_enabled,
        allow_blob_public_access=plan.allow_blob_public_access,
        is_hns_enabled=plan.hns_enabled,
        enable_nfs_v3=plan.nfsv3_enabled,
        large_file_shares_state=storage.LargeFileSharesState.ENABLED if plan.large_file_shares_enabled else None,
        network_rule_set=_network_rule_set(plan.network),
        custom_domain=_custom_domain(plan.custom_domain),
        identity=_identity(plan.identity),
        **cls.common_args,
        tags=get_tags(service="storage", role="account", group=plan.account_name, extra=dict(plan.tags)),
        opts=ResourceOptions(parent=cls),
    )
