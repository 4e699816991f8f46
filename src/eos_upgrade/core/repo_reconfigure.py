"""Pointing the OSTree repositories and the booted deployment at EOS 3.

Descriptors are overwritten, not merged. Manual customizations are lost.
"""

import logging

from eos_upgrade.core.configuration import Configuration
from eos_upgrade.core.context import UpgradeContext
from eos_upgrade.core.descriptor import (
    RepositoryDescriptor,
    load_descriptor,
    remote_section,
    save_descriptor,
)
from eos_upgrade.core.errors import UnsupportedArchitecture

logger = logging.getLogger(__name__)


def resolve_product(ctx: UpgradeContext) -> str:
    """Map the machine architecture to the OS product name.

    Raises:
        UnsupportedArchitecture: If the architecture is not in the lookup table
    """
    machine = ctx.host.machine()
    product = ctx.config.arch_to_product.get(machine)
    if product is None:
        raise UnsupportedArchitecture(f"Unsupported architecture {machine}.")
    return product


def _verified_remotes(config: Configuration) -> list[tuple[str, dict[str, str]]]:
    return [
        (
            remote_section(config.runtimes_remote),
            {
                "url": f"{config.ostree_base_url}/eos-sdk",
                "gpg-verify": "true",
                "gpg-verify-summary": "true",
            },
        ),
        (
            remote_section(config.apps_remote),
            {
                "url": f"{config.ostree_base_url}/eos-apps",
                "gpg-verify": "true",
                "gpg-verify-summary": "true",
                "xa.default-branch": config.target_branch_name,
            },
        ),
    ]


def primary_descriptor(config: Configuration, product: str) -> RepositoryDescriptor:
    """Build the system repository descriptor for a product."""
    return RepositoryDescriptor.from_sections(
        [
            ("core", {"repo_version": "1", "mode": "bare"}),
            (
                remote_section(config.main_remote),
                {
                    "url": f"{config.ostree_base_url}/eos-{product}",
                    "branches": f"{config.target_branch(product)};",
                    "gpg-verify": "false",
                },
            ),
            *_verified_remotes(config),
        ]
    )


def secondary_descriptor(config: Configuration) -> RepositoryDescriptor:
    """Build the secondary storage descriptor: shared remotes only, no OS remote."""
    return RepositoryDescriptor.from_sections(
        [
            ("core", {"repo_version": "1", "mode": config.secondary_storage.repo_mode}),
            *_verified_remotes(config),
        ]
    )


def update_deployment_origin(ctx: UpgradeContext, refspec: str) -> None:
    """Point the booted deployment's origin at refspec.

    The next pull and deploy follow the new origin; nothing is pulled here.

    Raises:
        RuntimeError: If the booted deployment can't be determined
        FileNotFoundError: If the deployment has no origin file
    """
    deployment = ctx.ostree.get_booted_deployment()
    if deployment is None:
        raise RuntimeError("Could not determine the booted OSTree deployment")

    origin_path = deployment.origin_path(ctx.config.deploy_root)
    logger.debug("Updating origin %s to %s", origin_path, refspec)

    origin = load_descriptor(origin_path)
    origin.set_value("origin", "refspec", refspec)
    save_descriptor(origin_path, origin)


def reconfigure_repositories(ctx: UpgradeContext, product: str) -> str:
    """Rewrite repository descriptors and switch the deployment origin.

    Returns:
        The branch the main remote is now pinned to
    """
    config = ctx.config
    branch = config.target_branch(product)

    ctx.feedback.info("Configuring repositories...")
    save_descriptor(config.repo_config_path, primary_descriptor(config, product))

    storage = config.secondary_storage
    if storage.is_present():
        logger.debug("Secondary storage present at %s", storage.label_path)
        ctx.ostree.init_repo(storage.repo_path, storage.repo_mode)
        save_descriptor(storage.repo_config_path, secondary_descriptor(config))

    update_deployment_origin(ctx, f"{config.main_remote}:{branch}")
    return branch
