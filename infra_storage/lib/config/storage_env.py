import logging
import sys
from collections import UserDict
from pathlib import Path
from typing import Any, Optional

import hiyapyco

logger = logging.getLogger(__name__)


class StorageConfigException(Exception):
    def __init__(self, key):
        super().__init__(f"Missing required configuration variable '{key}'")


class HierarchicalConfig(UserDict):
    """
    HierarchicalConfig is a UserDict that loads project-wide defaults from a tiered set of config files.

    ``Storage.common.yaml`` is looked up next to the entrypoint of the program, then in each parent directory up to
    ``limit`` levels or the git project root, whichever comes first. Files closer to the entrypoint win.

    The discovered files are merged using a YAML object merger (HiYaPyCo) that supports Jinja2 syntax.

    Example usage:
        from infra_storage.lib.config import get_storage_env

        get_storage_env().get("team", "platform")
        get_storage_env().require("tag_namespace")
    """

    def __init__(self, limit=5, filename="Storage.common.yaml", entrypoint: Optional[Path] = None):
        """
        Create a HierarchicalConfig UserDict

        :param limit: Max parent directories to walk
        :param filename: Filename to find and merge
        :param entrypoint: Path to start the search from, defaults to the ``__main__`` module
        """
        super().__init__()
        self.filename = filename
        configs = list(reversed(self._discover_configs(limit, entrypoint or self._find_entrypoint())))
        logger.debug("Found configs in %s", configs)

        if configs:
            # expose the data from the loader as our UserDict backing store
            self.data = dict(hiyapyco.load([str(path) for path in configs], method=hiyapyco.METHOD_MERGE))

    def require(self, key: str) -> Any:
        """
        Require a key from the configuration and return it. If not found, throw a `StorageConfigException`

        :param key: Key string to require from the configuration
        :return: Object
        """
        if v := self.get(key):
            return v
        else:
            raise StorageConfigException(key)

    @staticmethod
    def _find_entrypoint() -> Path:
        main_module = sys.modules["__main__"]
        if not hasattr(main_module, "__file__"):
            raise Exception(
                "Can't find __file__ for __main__. HINT: Don't use HierarchicalConfig from a REPL if you are."
            )

        return Path(main_module.__file__).absolute()

    def _discover_configs(self, limit: int, entrypoint: Path) -> list[Path]:
        """
        Walk upwards from ``entrypoint`` and collect the config files found on the way

        :param limit: Max parent directories to walk
        :param entrypoint: File or directory to start from
        :return: Paths ordered from closest to furthest
        """
        config_paths = []

        logger.debug("Entrypoint: %s", entrypoint)

        if entrypoint.is_dir():
            local_config = entrypoint / self.filename
            if local_config.exists():
                logger.debug("Detected local config [%s]", local_config)
                config_paths.append(local_config)

        for path in list(entrypoint.parents)[:limit]:
            logger.debug("Looking in [%s] for [%s]", path, self.filename)
            maybe_config = path / self.filename
            if maybe_config.exists():
                logger.debug("Detected parent config [%s]", maybe_config)
                config_paths.append(maybe_config)

            # a config at the project root is allowed, nothing above it
            if (path / ".git").is_dir():
                logger.debug("Found project root, breaking")
                break

        return config_paths
