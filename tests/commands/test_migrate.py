"""Tests for the migrate command."""

from pathlib import Path

from click.testing import CliRunner

from eos_upgrade.cli.cli import cli
from eos_upgrade.cli.commands.migrate import migrate_cmd
from eos_upgrade.core.descriptor import load_descriptor, remote_section
from tests.fakes.apps import FakeLegacyApps
from tests.fakes.host import FakeHost
from tests.fakes.keys import FakeKeyFetcher
from tests.fakes.ostree import FakeOstree
from tests.fakes.printing import FakePrintSystem
from tests.fakes.services import FakeServices
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.env_helpers import BOOTED, LEGACY_ORIGIN, LEGACY_REPO_CONFIG, upgrade_env


def test_forced_skip_run_resets_and_reconfigures(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path, version="2.6.10")
    apps = FakeLegacyApps(apps=["com.example.Chess", "com.example.Paint"])
    printing = FakePrintSystem(printers=["Office"])
    ostree = FakeOstree(booted=BOOTED)
    feedback = FakeUserFeedback()
    ctx = env.build_context(apps=apps, printing=printing, ostree=ostree, feedback=feedback)

    result = CliRunner().invoke(migrate_cmd, ["--force", "--skip"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert apps.installed == []
    assert printing.printers == []
    primary = load_descriptor(env.config.repo_config_path)
    eos_remote = primary.entries(remote_section("eos"))
    assert eos_remote["url"] == "https://ostree.endlessm.com/ostree/eos-amd64"
    assert eos_remote["branches"] == "os/eos/amd64/eos3;"
    assert load_descriptor(env.origin_path).entries("origin") == {
        "refspec": "eos:os/eos/amd64/eos3"
    }
    assert ostree.pull_calls == []
    assert ostree.upgrade_calls == []
    assert feedback.successes == ["✓ Repositories now track os/eos/amd64/eos3"]
    assert "without --skip" in result.output


def test_forced_full_run_pulls_and_deploys(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path, version="2.6.10")
    ostree = FakeOstree(booted=BOOTED)
    keys = FakeKeyFetcher()
    feedback = FakeUserFeedback()
    ctx = env.build_context(
        host=FakeHost(machine="armv7l"), ostree=ostree, keys=keys, feedback=feedback
    )

    result = CliRunner().invoke(migrate_cmd, ["-f"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ostree.pull_calls == [(env.config.repo_path, "eos", "os/eos/ec100/eos3", True)]
    assert ostree.upgrade_calls == [True]
    assert keys.fetched == list(env.config.trusted_keys)
    assert feedback.successes == ["✓ Upgrade to EOS 3 complete"]
    assert "Reboot the computer" in result.output


def test_older_legacy_version_refreshes_keys_and_changes_nothing(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path, version="2.6.9")
    keys = FakeKeyFetcher()
    services = FakeServices()
    apps = FakeLegacyApps(apps=["com.example.Chess"])
    ctx = env.build_context(keys=keys, services=services, apps=apps)
    before = env.snapshot()

    result = CliRunner().invoke(migrate_cmd, ["--force"], obj=ctx)

    assert result.exit_code == 1
    assert "2.6.10" in result.output
    assert keys.fetched == list(env.config.trusted_keys)
    assert services.calls == [("restart", ("eos-autoupdater.service",))]
    assert apps.installed == ["com.example.Chess"]
    assert env.snapshot() == before
    assert "partially migrated" not in result.output


def test_already_upgraded_system_is_rejected(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path, version="3.0.2")
    before = env.snapshot()

    result = CliRunner().invoke(migrate_cmd, ["--force"], obj=env.build_context())

    assert result.exit_code == 1
    assert "already runs EOS 3.0.2" in result.output
    assert env.snapshot() == before


def test_non_root_is_rejected_before_reading_the_system(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path, version="2.6.9")
    keys = FakeKeyFetcher()
    ctx = env.build_context(host=FakeHost(superuser=False), keys=keys)

    result = CliRunner().invoke(migrate_cmd, ["--force"], obj=ctx)

    assert result.exit_code == 1
    assert "root privileges" in result.output
    assert keys.fetched == []


def test_unsupported_architecture_changes_nothing(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    apps = FakeLegacyApps(apps=["com.example.Chess"])
    services = FakeServices()
    ctx = env.build_context(host=FakeHost(machine="aarch64"), apps=apps, services=services)
    before = env.snapshot()

    result = CliRunner().invoke(migrate_cmd, ["--force"], obj=ctx)

    assert result.exit_code == 1
    assert "Unsupported architecture aarch64" in result.output
    assert apps.installed == ["com.example.Chess"]
    assert services.calls == []
    assert env.snapshot() == before


def test_declining_first_prompt_changes_nothing(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    apps = FakeLegacyApps(apps=["com.example.Chess"])
    ctx = env.build_context(apps=apps)

    result = CliRunner().invoke(migrate_cmd, [], obj=ctx, input="n\n")

    assert result.exit_code == 1
    assert "Upgrade to EOS 3" in result.output
    assert "Data will be removed" not in result.output
    assert "Upgrade cancelled." in result.output
    assert apps.installed == ["com.example.Chess"]
    assert env.config.repo_config_path.read_text(encoding="utf-8") == LEGACY_REPO_CONFIG


def test_declining_second_prompt_changes_nothing(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    ctx = env.build_context()

    result = CliRunner().invoke(migrate_cmd, [], obj=ctx, input="y\nn\n")

    assert result.exit_code == 1
    assert "Data will be removed" in result.output
    assert env.origin_path.read_text(encoding="utf-8") == LEGACY_ORIGIN


def test_accepting_both_prompts_runs_migration(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    ostree = FakeOstree(booted=BOOTED)
    ctx = env.build_context(ostree=ostree)

    result = CliRunner().invoke(migrate_cmd, ["--skip"], obj=ctx, input="y\ny\n")

    assert result.exit_code == 0, result.output
    assert "eos3" in env.origin_path.read_text(encoding="utf-8")


def test_failure_after_mutation_reports_partial_migration(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    ctx = env.build_context(ostree=FakeOstree(booted=None))

    result = CliRunner().invoke(migrate_cmd, ["--force", "--skip"], obj=ctx)

    assert result.exit_code == 1
    assert "Could not determine the booted OSTree deployment" in result.output
    assert "The system may be partially migrated." in result.output


def test_key_download_failure_during_pull_is_fatal(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    ostree = FakeOstree(booted=BOOTED)
    ctx = env.build_context(ostree=ostree, keys=FakeKeyFetcher(offline=True))

    result = CliRunner().invoke(migrate_cmd, ["--force"], obj=ctx)

    assert result.exit_code == 1
    assert "network unreachable" in result.output
    assert ostree.pull_calls == []


def test_help_exits_zero() -> None:
    result = CliRunner().invoke(migrate_cmd, ["-h"])

    assert result.exit_code == 0
    assert "--skip" in result.output
    assert "--force" in result.output


def test_migrate_is_registered_on_the_group(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    ctx = env.build_context(ostree=FakeOstree(booted=BOOTED))

    result = CliRunner().invoke(cli, ["migrate", "--force", "--skip"], obj=ctx)

    assert result.exit_code == 0, result.output
