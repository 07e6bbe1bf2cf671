from typing import TypeVar

ConfigType = TypeVar("ConfigType")
"""Dataclass describing the stack configuration of a module"""

ExportsType = TypeVar("ExportsType")
"""Dataclass describing what a module exports"""
