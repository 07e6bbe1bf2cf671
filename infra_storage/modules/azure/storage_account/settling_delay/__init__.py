import time
import uuid
from dataclasses import dataclass

from pulumi import Input, Output, ResourceOptions, dynamic


@dataclass
class SettlingDelayArgs:
    create_seconds: Input[int]
    """Seconds to wait after creation before dependents are created"""

    destroy_seconds: Input[int]
    """Seconds to wait after dependents are deleted before this resource's own dependencies are deleted"""


class SettlingDelayProvider(dynamic.ResourceProvider):
    def create(self, props: dict) -> dynamic.CreateResult:
        """
        Wait out the creation delay
        :param props:
        :return:
        """
        time.sleep(int(props["create_seconds"]))
        return dynamic.CreateResult(uuid.uuid4().hex, props)

    def update(self, _id: str, _olds: dict, props: dict) -> dynamic.UpdateResult:
        """
        Changing the delays only changes what gets waited for next time
        :param _id:
        :param _olds:
        :param props:
        :return:
        """
        return dynamic.UpdateResult(props)

    def delete(self, _id: str, props: dict) -> None:
        """
        Wait out the destroy delay, holding back the deletion of everything this resource depends on
        :param _id:
        :param props:
        :return:
        """
        time.sleep(int(props["destroy_seconds"]))


class SettlingDelay(dynamic.Resource):
    """
    Sits between a resource and what it depends on, so that the engine waits on teardown once the resource is gone.

    Azure acknowledges deleting a management lock before the lock stops being enforced. Placing the lock on top of
    a delay keeps the protected resources around until the removal has taken effect.
    """

    create_seconds: Output[int]
    destroy_seconds: Output[int]

    def __init__(self, name: str, args: SettlingDelayArgs, opts: ResourceOptions = None):
        super().__init__(SettlingDelayProvider(), name, vars(args), opts)
