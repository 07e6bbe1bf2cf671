from .get_role_definition_id import get_role_definition_id
