"""Admission checks run before the system is touched."""

import logging

from eos_upgrade.core.context import UpgradeContext
from eos_upgrade.core.errors import AlreadyUpgraded, UnsupportedVersion, VersionMismatch
from eos_upgrade.core.system_identity import SystemIdentity, read_system_identity
from eos_upgrade.core.upgrade_invoker import refresh_keys

logger = logging.getLogger(__name__)


def check_migration_version(ctx: UpgradeContext) -> SystemIdentity:
    """Admit only the single EOS 2 release the migration was built against.

    An older EOS 2 system is nudged towards updating: the signing keys are
    refreshed and the update checker restarted before the gate fails.

    Returns:
        The system identity when the version matches exactly

    Raises:
        VersionMismatch: Older or newer EOS 2 release
        AlreadyUpgraded: The system already runs the target major version
        UnsupportedVersion: Any other version
    """
    config = ctx.config
    identity = read_system_identity(config.os_release_path)
    logger.debug("System version: %s (major %d)", identity.version, identity.major_version)

    if identity.version == config.legacy_version:
        return identity

    if identity.major_version == config.legacy_major:
        ctx.feedback.info("Refreshing signing keys and checking for updates...")
        refresh_keys(ctx)
        ctx.services.restart(config.update_check_service)
        raise VersionMismatch(
            f"This system runs EOS {identity.version}. Update to EOS {config.legacy_version} "
            "using the regular updater first, then run this command again."
        )

    if identity.major_version == config.target_major:
        raise AlreadyUpgraded(f"This system already runs EOS {identity.version}.")

    raise UnsupportedVersion(f"Unsupported OS version {identity.version}.")


def check_target_version(ctx: UpgradeContext) -> SystemIdentity:
    """Admit only systems that already run the target major version.

    Raises:
        UnsupportedVersion: The system runs any other major version
    """
    identity = read_system_identity(ctx.config.os_release_path)
    if identity.major_version != ctx.config.target_major:
        raise UnsupportedVersion(f"Unsupported OS version {identity.version}.")
    return identity
