from dataclasses import dataclass

from pulumi import ResourceOptions
from pulumi_azure_native import authorization, storage

from infra_storage.lib.azure.iam import get_role_definition_id
from infra_storage.lib.utils import kebab_from_snake
from .composer import RoleGrant


@dataclass
class AccessManager:
    account: storage.StorageAccount

    name: str
    """Name of the storage account"""

    scope: str
    """Resource ID of the storage account"""

    def grant(self, grants: tuple[RoleGrant, ...]) -> list[authorization.RoleAssignment]:
        """Assign the storage account roles of the grants to their principals

        :param grants: Grants, one per role and principal
        :return: The role assignments
        """
        return [self._create_role_assignment(grant) for grant in grants]

    def _create_role_assignment(self, grant: RoleGrant) -> authorization.RoleAssignment:
        return authorization.RoleAssignment(
            f"{self.name}-{kebab_from_snake(grant.category.field_name)}-{grant.principal_id}",
            role_assignment_name=grant.assignment_name,
            scope=self.scope,
            principal_id=grant.principal_id,
            role_definition_id=get_role_definition_id(grant.role_name, scope=self.scope),
            opts=ResourceOptions(parent=self.account, depends_on=[self.account]),
        )
