from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from pulumi import Output, get_stack


def _map(val: Any) -> Any:
    if isinstance(val, (list, tuple)):
        return [_map(v) for v in val]
    elif isinstance(val, dict):
        return {k: _map(v) for k, v in val.items()}
    elif is_dataclass(val) and not isinstance(val, type):
        return {f.name: _map(getattr(val, f.name)) for f in fields(val)}
    elif isinstance(val, Enum):
        return val.value
    elif isinstance(val, Output):
        return val
    elif isinstance(val, type):
        raise TypeError(f"Unexpected value '{val}' of type '{type(val)}'")
    else:
        return val


def to_serializable(val: Any) -> Any:
    """Recursively convert dataclasses and enums into plain dicts, lists and values

    :param val: A dataclass instance, or a container of them
    :return: The plain representation
    """
    return _map(val)


def outputs_from_exports(exports: object) -> dict:
    """Generate a serializable output from a module exports object

    Recursively converts dataclasses to dict, keyed by the current stack name.

    :param exports: A module exports object and a dataclass instance
    :return: The output for the module
    """
    return {
        get_stack(): _map(exports),
    }
