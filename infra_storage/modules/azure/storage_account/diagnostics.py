from pulumi import ResourceOptions
from pulumi_azure_native import insights, storage

from .composer import DiagnosticPlan


def create_diagnostic_setting(
    cls, account: storage.StorageAccount, name: str, diagnostic: DiagnosticPlan
) -> insights.DiagnosticSetting:
    """Route the logs and metrics of the account, or one of its sub-services, to the configured sinks

    Every known category is listed so that turning one off is an in-place update.

    :param cls: The module creating the resource
    :param account: The storage account
    :param name: Name of the storage account
    :param diagnostic: Diagnostic setting plan
    :return: The diagnostic setting
    """
    if diagnostic.service is None:
        resource_uri = cls.build_resource_id("Microsoft.Storage", "storageAccounts", name)
    else:
        resource_uri = cls.build_resource_id(
            "Microsoft.Storage", "storageAccounts", name, diagnostic.service.value, "default"
        )

    logs = [insights.LogSettingsArgs(category=category.value, enabled=enabled) for category, enabled in diagnostic.logs]
    metrics = [
        insights.MetricSettingsArgs(category=category.value, enabled=enabled) for category, enabled in diagnostic.metrics
    ]

    return insights.DiagnosticSetting(
        diagnostic.name,
        name=diagnostic.name,
        resource_uri=resource_uri,
        workspace_id=diagnostic.log_analytics_workspace_id,
        storage_account_id=diagnostic.storage_account_id,
        event_hub_authorization_rule_id=diagnostic.event_hub_authorization_rule_id,
        event_hub_name=diagnostic.event_hub_name,
        logs=logs or None,
        metrics=metrics,
        # the uri is built from names, the account has to exist first
        opts=ResourceOptions(parent=account, depends_on=[account]),
    )
