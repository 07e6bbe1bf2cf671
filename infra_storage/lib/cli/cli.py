import json
import logging
from pathlib import Path

import click
import yaml
from click_option_group import optgroup, MutuallyExclusiveOptionGroup

from infra_storage.lib.config import CONFIG_NAMESPACE, config_from_dict, namespace_config
from infra_storage.lib.utils import to_serializable
from infra_storage.modules.azure.storage_account import StorageAccountConfig, compose_plan

logger = logging.getLogger(__name__)


def _raw_config(data: dict) -> dict:
    """Accept either bare storage inputs or a whole ``Pulumi.<stack>.yaml`` file

    :param data: Loaded YAML document
    :return: The storage inputs
    """
    if "config" not in data:
        return data

    return namespace_config(data["config"], CONFIG_NAMESPACE)


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Enable DEBUG logging")
def cli(debug):
    logging.basicConfig(format="[%(asctime)s %(levelname)s %(name)s]: %(message)s")

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        click.echo("Enabled debug mode!", err=True)


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@optgroup.group("Output format", cls=MutuallyExclusiveOptionGroup, help="Format of the rendered plan, YAML by default")
@optgroup.option("--json", "as_json", is_flag=True, help="Render as JSON")
@optgroup.option("--yaml", "as_yaml", is_flag=True, help="Render as YAML")
def render(config_file, as_json, as_yaml):
    """Show what would be created for the storage inputs in CONFIG_FILE, without calling Azure"""
    data = yaml.safe_load(config_file.read_text()) or {}
    logger.debug("loaded %s", data)

    config = config_from_dict(StorageAccountConfig, _raw_config(data))
    plan = to_serializable(compose_plan(config))

    if as_json:
        click.echo(json.dumps(plan, indent=2))
    else:
        click.echo(yaml.safe_dump(plan, sort_keys=False), nl=False)


def run():
    exit(cli())


if __name__ == "__main__":
    run()
