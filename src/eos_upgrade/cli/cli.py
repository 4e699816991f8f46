import click

from eos_upgrade.cli.commands.config import config_group
from eos_upgrade.cli.commands.fix_config import fix_config_cmd
from eos_upgrade.cli.commands.migrate import migrate_cmd
from eos_upgrade.cli.debug import configure_logging

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="eos-upgrade")
def cli() -> None:
    """Migrate an Endless OS 2 computer to Endless OS 3."""


cli.add_command(config_group)
cli.add_command(fix_config_cmd)
cli.add_command(migrate_cmd)


def main() -> None:
    """CLI entry point used by the `eos-upgrade` console script."""
    configure_logging()
    cli()
