"""The EOS 2 to EOS 3 migration command."""

import click

from eos_upgrade.cli.debug import configure_logging
from eos_upgrade.cli.ensure import Ensure, error_boundary
from eos_upgrade.cli.output import user_output, warning_panel
from eos_upgrade.core.context import UpgradeContext, create_context
from eos_upgrade.core.errors import OperatorDeclined
from eos_upgrade.core.migration import run_migration
from eos_upgrade.core.repo_reconfigure import resolve_product
from eos_upgrade.core.version_gate import check_migration_version

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def _confirm_or_decline(title: str, body: str) -> None:
    warning_panel(title, body)
    if not click.confirm("Continue?", default=False, err=True):
        raise OperatorDeclined("Upgrade cancelled.")


def _confirm_migration(ctx: UpgradeContext, version: str) -> None:
    target = ctx.config.target_major
    _confirm_or_decline(
        "Upgrade to EOS 3",
        f"This will upgrade this computer from EOS {version} to EOS {target}.\n"
        "The upgrade cannot be undone and the computer must not be switched off\n"
        "until it has finished.",
    )
    _confirm_or_decline(
        "Data will be removed",
        "All apps installed on EOS 2 and their data will be removed.\n"
        "All configured printers and downloaded printer drivers will be removed.",
    )


@click.command("migrate", context_settings=CONTEXT_SETTINGS)
@click.option("-f", "--force", is_flag=True, help="Don't ask for confirmation.")
@click.option(
    "-s", "--skip", is_flag=True, help="Reconfigure only; don't download or deploy EOS 3."
)
@click.pass_context
def migrate_cmd(click_ctx: click.Context, force: bool, skip: bool) -> None:
    """Upgrade this computer from EOS 2 to EOS 3.

    Legacy apps, printers and printer drivers are removed, the OSTree
    repositories are switched to EOS 3 and the new OS is downloaded and
    deployed. Reboot afterwards to start EOS 3.
    """
    # Only create context if not already provided (e.g., by tests)
    if click_ctx.obj is None:
        with error_boundary(mid_run=False):
            click_ctx.obj = create_context()
    ctx: UpgradeContext = click_ctx.obj

    Ensure.superuser(ctx)

    with error_boundary(mid_run=False):
        identity = check_migration_version(ctx)
        product = resolve_product(ctx)
        if not force:
            _confirm_migration(ctx, identity.version)

    with error_boundary(mid_run=True):
        branch = run_migration(ctx, product, skip_upgrade=skip)

    if skip:
        ctx.feedback.success(f"✓ Repositories now track {branch}")
        user_output("Skipped downloading EOS 3. Run this command without --skip to finish.")
        return

    ctx.feedback.success("✓ Upgrade to EOS 3 complete")
    user_output("Reboot the computer to start EOS 3.")


def main() -> None:
    """Entry point used by the `eos-upgrade-2-to-3` console script."""
    configure_logging()
    migrate_cmd()
