"""Tests for repository reconfiguration and origin switching."""

from pathlib import Path

import pytest

from eos_upgrade.core.descriptor import RepositoryDescriptor, load_descriptor, remote_section
from eos_upgrade.core.errors import UnsupportedArchitecture
from eos_upgrade.core.repo_reconfigure import (
    primary_descriptor,
    reconfigure_repositories,
    resolve_product,
    secondary_descriptor,
    update_deployment_origin,
)
from tests.fakes.host import FakeHost
from tests.fakes.ostree import FakeOstree
from tests.test_utils.env_helpers import BOOTED, upgrade_env

EXPECTED_PRIMARY = """[core]
repo_version=1
mode=bare

[remote "eos"]
url=https://ostree.endlessm.com/ostree/eos-amd64
branches=os/eos/amd64/eos3;
gpg-verify=false

[remote "eos-runtimes"]
url=https://ostree.endlessm.com/ostree/eos-sdk
gpg-verify=true
gpg-verify-summary=true

[remote "eos-apps"]
url=https://ostree.endlessm.com/ostree/eos-apps
gpg-verify=true
gpg-verify-summary=true
xa.default-branch=eos3
"""


def test_resolve_product_for_known_architectures(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)

    assert resolve_product(env.build_context(host=FakeHost(machine="x86_64"))) == "amd64"
    assert resolve_product(env.build_context(host=FakeHost(machine="armv7l"))) == "ec100"


def test_resolve_product_rejects_unknown_architecture(tmp_path: Path) -> None:
    ctx = upgrade_env(tmp_path).build_context(host=FakeHost(machine="aarch64"))

    with pytest.raises(UnsupportedArchitecture, match="aarch64"):
        resolve_product(ctx)


def test_primary_descriptor_layout(tmp_path: Path) -> None:
    config = upgrade_env(tmp_path).config

    assert primary_descriptor(config, "amd64").serialize() == EXPECTED_PRIMARY


def test_secondary_descriptor_shares_verified_remotes_with_primary(tmp_path: Path) -> None:
    config = upgrade_env(tmp_path).config
    primary = primary_descriptor(config, "ec100")
    secondary = secondary_descriptor(config)

    assert secondary.section_names() == ["core", 'remote "eos-runtimes"', 'remote "eos-apps"']
    assert secondary.entries("core") == {"repo_version": "1", "mode": "bare-user"}
    for name in ('remote "eos-runtimes"', 'remote "eos-apps"'):
        assert secondary.get(name).render() == primary.get(name).render()
    assert not secondary.has_section(remote_section("eos"))


def test_update_deployment_origin_rewrites_refspec(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    env.origin_path.write_text(
        "[origin]\nrefspec=eos:os/eos/amd64/eos2\nunlocked=none\n", encoding="utf-8"
    )

    update_deployment_origin(env.build_context(), "eos:os/eos/amd64/eos3")

    assert env.origin_path.read_text(encoding="utf-8") == (
        "[origin]\nrefspec=eos:os/eos/amd64/eos3\nunlocked=none\n"
    )


def test_update_deployment_origin_without_booted_deployment(tmp_path: Path) -> None:
    ctx = upgrade_env(tmp_path).build_context(ostree=FakeOstree(booted=None))

    with pytest.raises(RuntimeError, match="booted"):
        update_deployment_origin(ctx, "eos:os/eos/amd64/eos3")


def test_reconfigure_without_secondary_storage(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    ostree = FakeOstree(booted=BOOTED)
    ctx = env.build_context(ostree=ostree)

    branch = reconfigure_repositories(ctx, "amd64")

    assert branch == "os/eos/amd64/eos3"
    assert env.config.repo_config_path.read_text(encoding="utf-8") == EXPECTED_PRIMARY
    assert load_descriptor(env.origin_path).entries("origin") == {
        "refspec": "eos:os/eos/amd64/eos3"
    }
    assert not env.config.secondary_storage.repo_config_path.exists()
    assert ostree.init_calls == []


def test_reconfigure_with_secondary_storage(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    env.add_secondary_storage()
    ostree = FakeOstree(booted=BOOTED)
    ctx = env.build_context(ostree=ostree)

    assert reconfigure_repositories(ctx, "ec100") == "os/eos/ec100/eos3"

    storage = env.config.secondary_storage
    assert ostree.init_calls == [(storage.repo_path, "bare-user")]
    secondary = RepositoryDescriptor.parse(storage.repo_config_path.read_text(encoding="utf-8"))
    assert secondary.entries("core")["mode"] == "bare-user"
    assert not secondary.has_section(remote_section("eos"))
    primary = load_descriptor(env.config.repo_config_path)
    assert primary.entries(remote_section("eos"))["branches"] == "os/eos/ec100/eos3;"
