from infra_storage.lib.utils import run_once

from .storage_env import HierarchicalConfig

CONFIG_NAMESPACE = "storage"
"""Pulumi config namespace holding the storage account inputs (``pulumi config set storage:kind StorageV2``)"""


@run_once
def get_storage_env() -> HierarchicalConfig:
    """
    Project-wide defaults merged from ``Storage.common.yaml`` files, loaded on first use

    :return: The merged configuration
    """
    return HierarchicalConfig()


def get_tag_namespace() -> str:
    """Prefix namespace of the standard tags, ``infra`` unless overridden"""
    return get_storage_env().get("tag_namespace", "infra")


def get_tag_prefix() -> str:
    return f"{get_tag_namespace()}{get_storage_env().get('tag_separator', ':')}"


def get_team() -> str:
    return get_storage_env().get("team")


def get_default_tags() -> dict[str, str]:
    """Tags every resource carries, before per-stack ``tags`` are applied"""
    return dict(get_storage_env().get("default_tags") or {})
