"""Repair command for repository configuration written by earlier migrations."""

import click

from eos_upgrade.cli.debug import configure_logging
from eos_upgrade.cli.ensure import Ensure, error_boundary
from eos_upgrade.core.config_patcher import patch_repository_configs
from eos_upgrade.core.context import UpgradeContext, create_context
from eos_upgrade.core.version_gate import check_target_version

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.command("fix-config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def fix_config_cmd(click_ctx: click.Context) -> None:
    """Remove the obsolete remote from EOS 3 repository configuration.

    Safe to run more than once.
    """
    if click_ctx.obj is None:
        with error_boundary(mid_run=False):
            click_ctx.obj = create_context()
    ctx: UpgradeContext = click_ctx.obj

    Ensure.superuser(ctx)

    with error_boundary(mid_run=False):
        check_target_version(ctx)
        changed = patch_repository_configs(ctx)

    if not changed:
        ctx.feedback.info("Repository configuration is already up to date.")
        return

    for path in changed:
        ctx.feedback.success(f"✓ Removed [{ctx.config.obsolete_section}] from {path}")


def main() -> None:
    """Entry point used by the `eos-fix-repo-config` console script."""
    configure_logging()
    fix_config_cmd()
