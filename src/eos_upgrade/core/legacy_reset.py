"""Removal of EOS 2 state that cannot coexist with EOS 3.

Apps and legacy directories are removed best-effort: a failure is reported
and the run continues. Printer and boot partition steps are fatal on failure.
"""

import logging
import shutil
from pathlib import Path

from eos_upgrade.core.boot_partition import migrate_boot_partition
from eos_upgrade.core.context import UpgradeContext
from eos_upgrade.core.printer_drivers import remove_downloaded_drivers

logger = logging.getLogger(__name__)


def remove_legacy_apps(ctx: UpgradeContext) -> list[str]:
    """Uninstall every legacy app, continuing past individual failures.

    Returns:
        IDs of the apps that failed to uninstall
    """
    failed: list[str] = []
    for app_id in ctx.apps.list_apps():
        try:
            ctx.apps.uninstall(app_id)
        except RuntimeError as e:
            logger.debug("Uninstall of %s failed", app_id, exc_info=True)
            ctx.feedback.warning(f"Could not uninstall {app_id}: {e}")
            failed.append(app_id)
    return failed


def _remove_tree(ctx: UpgradeContext, path: Path) -> None:
    if not path.exists() and not path.is_symlink():
        return
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        ctx.feedback.warning(f"Could not remove {path}: {e}")


def user_app_data_dirs(home_root: Path, dir_name: str) -> list[Path]:
    """Return every user's copy of the legacy app data directory that exists."""
    if not home_root.is_dir():
        return []
    return [
        home / dir_name
        for home in sorted(home_root.iterdir())
        if home.is_dir() and (home / dir_name).exists()
    ]


def remove_legacy_data(ctx: UpgradeContext) -> None:
    """Delete legacy data directories, per-user app data and the version-check marker."""
    config = ctx.config
    for path in config.legacy_data_dirs:
        _remove_tree(ctx, path)

    for path in user_app_data_dirs(config.home_root, config.user_app_data_dir):
        _remove_tree(ctx, path)

    config.version_check_marker.unlink(missing_ok=True)


def reset_printers(ctx: UpgradeContext) -> None:
    """Cancel all jobs and remove every configured printer.

    CUPS is restarted first so it is in a known state, and again afterwards.
    """
    service = ctx.config.printing_service
    ctx.services.restart(service)

    printers = ctx.printing.list_printers()
    if printers:
        ctx.printing.cancel_all_jobs()
        for name in printers:
            ctx.printing.remove_printer(name)

    ctx.services.restart(service)


def reset_legacy_state(ctx: UpgradeContext) -> None:
    config = ctx.config

    ctx.feedback.info("Removing legacy apps...")
    remove_legacy_apps(ctx)
    remove_legacy_data(ctx)

    ctx.feedback.info("Removing printers...")
    reset_printers(ctx)
    if remove_downloaded_drivers(config.driver_ppd_dir, config.driver_root, ctx.feedback):
        ctx.services.restart(config.printing_service)

    migrate_boot_partition(ctx)
