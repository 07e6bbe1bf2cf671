from typing import Optional

from pulumi import get_project, get_stack

from ..config import get_default_tags, get_tag_prefix, get_team


def get_tags(service: str, role: str, group: Optional[str] = None, extra: Optional[dict[str, str]] = None) -> dict:
    """
    Generate tag dict for resources

    example tags:
      storage account `stdatadev` in stack `dev`:
        Name = storage-account-stdatadev
        infra:service = storage
        infra:role = account
        infra:group = stdatadev
        infra:createdby = pulumi
        infra:team = platform
        infra:project = data-storage
        infra:stack = dev

    Project-wide ``default_tags`` from ``Storage.common.yaml`` are applied on top of the standard tags, then
    ``extra``. Later sources win on key collisions.

    :param service: This resource's "namespace" (storage, monitoring, ...)
    :param role: The role this resource performs within the namespace (account, diagnostics, lock, ...)
    :param group: The group this resource belongs to. Leave unset to use "main".
    :param extra: Tags supplied by the stack configuration
    :return: Dict of tags
    """
    prefix = get_tag_prefix()
    group_suffix = f"-{group}" if group else ""

    tags = {
        "Name": f"{service}-{role}{group_suffix}",
        f"{prefix}service": service,
        f"{prefix}role": role,
        f"{prefix}group": group or "main",
        f"{prefix}createdby": "pulumi",
        f"{prefix}stack": get_stack(),
        f"{prefix}project": get_project(),
    }

    if team := get_team():
        tags[f"{prefix}team"] = team

    return {**tags, **get_default_tags(), **(extra or {})}
