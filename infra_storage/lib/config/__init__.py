from .core import (
    CONFIG_NAMESPACE,
    get_default_tags,
    get_storage_env,
    get_tag_namespace,
    get_tag_prefix,
    get_team,
)
from .mapper import config_from_dict, get_raw_stack_config, get_stack_config, namespace_config
from .storage_env import HierarchicalConfig, StorageConfigException
