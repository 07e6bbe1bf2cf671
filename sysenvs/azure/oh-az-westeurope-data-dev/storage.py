# This file is boilerplate. Copy it to any new storage account project you create.
# It calls the launcher that ships with `infra_storage`, which reads the `storage:` config of the active stack.
from infra_storage.launcher import run_active_stack

run_active_stack()
