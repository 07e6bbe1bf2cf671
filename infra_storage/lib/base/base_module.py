from abc import ABC, abstractmethod
from typing import Type, get_type_hints

from pulumi import ComponentResource, ResourceOptions

from infra_storage.lib.base.types import ConfigType, ExportsType
from infra_storage.lib.utils import outputs_from_exports


class BaseModule(ComponentResource, ABC):
    """
    The base class for an infra-storage module
    """

    @property
    @abstractmethod
    def provider(self):
        """Name of the provider"""

    def __init__(self, name: str, config: ConfigType, opts: ResourceOptions = None):
        super().__init__(
            f"pkg:infra:{self.provider}:{self.__class__.__name__.lower()}",
            name,
            None,
            opts,
        )

        self._config = config

    @classmethod
    def get_config_type(cls) -> Type[ConfigType]:
        """The dataclass the module's ``build`` method takes as its ``config``"""
        try:
            return get_type_hints(cls.build)["config"]
        except KeyError:
            raise TypeError(f"`{cls.__name__}.build` does not have a type hint for the `config` param")

    def run(self) -> ExportsType:
        """Execute the module

        :return: An exports object
        """
        exports = self.build(self._config)

        self.register_outputs(outputs_from_exports(exports))

        return exports

    @abstractmethod
    def build(self, config) -> ExportsType:
        """Create cloud resources

        :return: An exports object
        """
