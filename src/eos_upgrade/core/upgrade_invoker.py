"""Handing off to OSTree to fetch and stage the new OS image."""

from eos_upgrade.core.context import UpgradeContext


def refresh_keys(ctx: UpgradeContext) -> None:
    """Download each trusted keyring and import it for the main remote.

    Download and import failures are not handled here; they abort the run.
    """
    config = ctx.config
    for url in config.trusted_keys:
        key_data = ctx.keys.fetch(url)
        ctx.ostree.gpg_import(config.repo_path, config.main_remote, key_data)


def stop_background_updaters(ctx: UpgradeContext) -> None:
    """Stop the automatic updater so it can't race the repository rewrite."""
    ctx.services.stop(list(ctx.config.updater_units))


def pull_and_deploy(ctx: UpgradeContext, branch: str) -> None:
    """Pull the target branch and deploy it.

    Static deltas are disabled so a repository with missing objects still
    pulls. Downgrades are allowed because the first EOS 3 commit may carry an
    older timestamp than the last EOS 2 release.
    """
    config = ctx.config
    refresh_keys(ctx)

    ctx.feedback.info(f"Downloading {config.main_remote}:{branch}...")
    ctx.ostree.pull(config.repo_path, config.main_remote, branch, disable_static_deltas=True)

    ctx.feedback.info("Deploying the new OS version...")
    ctx.ostree.admin_upgrade(allow_downgrade=True)
