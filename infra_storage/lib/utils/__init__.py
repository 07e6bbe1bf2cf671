from .kebab_from_snake import kebab_from_snake
from .outputs_from_exports import outputs_from_exports, to_serializable
from .run_once import run_once
from .unique import unique
