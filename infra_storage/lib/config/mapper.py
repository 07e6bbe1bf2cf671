import json
from enum import Enum
from typing import Any, Type

from dacite import Config, from_dict
from pulumi import log, runtime

from infra_storage.lib.base import ConfigType


def _parse_args_value(value: Any) -> Any:
    """Parse and return json values if valid json, else return original value

    :param value: A potential json string
    :return: Parsed json object or raw arg
    """
    try:
        return json.loads(value)
    except (json.decoder.JSONDecodeError, TypeError):
        return value


def namespace_config(values: dict, namespace: str) -> dict:
    """Keep the keys of a namespace, without their prefix, and decode their json values

    Pulumi stores scalars set from the command line as strings and objects set without ``--path`` as json strings,
    both in stack files and in the runtime config.

    :param values: Namespaced config, e.g. the ``config`` block of a ``Pulumi.<stack>.yaml``
    :param namespace: Config namespace, e.g. ``storage``
    :return: dict
    """
    prefix = namespace + ":"

    return {k.removeprefix(prefix): _parse_args_value(v) for k, v in values.items() if k.startswith(prefix)}


def get_raw_stack_config(namespace: str) -> dict:
    """Pull the config of a namespace from Pulumi internals, clean it and return in dict form

    This method may break when upgrading the ``pulumi`` python dependency.

    :param namespace: Config namespace, e.g. ``storage``
    :return: dict
    """
    config = namespace_config(runtime.config.CONFIG, namespace)

    log.debug(f"config dict for namespace `{namespace}` is {config}")

    return config


def config_from_dict(config_cls: Type[ConfigType], data: dict) -> ConfigType:
    """Map a raw dict onto a config dataclass

    Uses `dacite <https://github.com/konradhalas/dacite>`_. Enum fields are cast from their values and unknown keys
    are rejected.

    :param config_cls: The dataclass for the config
    :param data: Raw configuration
    :return: The configuration expressed in ``config_cls``
    """
    return from_dict(
        data_class=config_cls,
        data=data,
        config=Config(
            cast=[Enum],
            strict=True,
        ),
    )


def get_stack_config(namespace: str, config_cls: Type[ConfigType]) -> ConfigType:
    """Get a namespace's stack config in dataclass form

    :param namespace: Config namespace
    :param config_cls: The dataclass for the config
    :return: The stack config expressed in the module's config dataclass
    """
    config = config_from_dict(config_cls, get_raw_stack_config(namespace))

    log.debug(f"config for namespace `{namespace}` is {config}")

    return config
