"""The EOS 2 to EOS 3 migration, from the point the gate has admitted the system.

There is no rollback. Any exception raised here leaves the system partially
migrated, e.g. repositories rewritten but the new OS not yet pulled.
"""

import logging

from eos_upgrade.core.context import UpgradeContext
from eos_upgrade.core.legacy_reset import reset_legacy_state
from eos_upgrade.core.repo_reconfigure import reconfigure_repositories
from eos_upgrade.core.upgrade_invoker import pull_and_deploy, stop_background_updaters

logger = logging.getLogger(__name__)


def run_migration(ctx: UpgradeContext, product: str, *, skip_upgrade: bool) -> str:
    """Reset legacy state, reconfigure repositories and optionally deploy EOS 3.

    Args:
        ctx: Upgrade context
        product: OS product resolved from the machine architecture
        skip_upgrade: Stop after reconfiguration without pulling or deploying

    Returns:
        The branch the system now tracks
    """
    stop_background_updaters(ctx)
    reset_legacy_state(ctx)
    branch = reconfigure_repositories(ctx, product)

    if skip_upgrade:
        logger.debug("Skipping pull and deploy of %s", branch)
        return branch

    pull_and_deploy(ctx, branch)
    return branch
