"""Tests for removal of EOS 2 state."""

from pathlib import Path

from eos_upgrade.core.legacy_reset import (
    remove_legacy_apps,
    remove_legacy_data,
    reset_legacy_state,
    reset_printers,
    user_app_data_dirs,
)
from tests.fakes.apps import FakeLegacyApps
from tests.fakes.printing import FakePrintSystem
from tests.fakes.services import FakeServices
from tests.fakes.user_feedback import FakeUserFeedback
from tests.test_utils.env_helpers import upgrade_env


def test_remove_legacy_apps_uninstalls_everything(tmp_path: Path) -> None:
    apps = FakeLegacyApps(apps=["com.example.Chess", "com.example.Paint"])
    ctx = upgrade_env(tmp_path).build_context(apps=apps)

    assert remove_legacy_apps(ctx) == []
    assert apps.uninstalled == ["com.example.Chess", "com.example.Paint"]
    assert apps.installed == []


def test_remove_legacy_apps_continues_past_failures(tmp_path: Path) -> None:
    apps = FakeLegacyApps(
        apps=["com.example.Broken", "com.example.Paint"], failing={"com.example.Broken"}
    )
    feedback = FakeUserFeedback()
    ctx = upgrade_env(tmp_path).build_context(apps=apps, feedback=feedback)

    failed = remove_legacy_apps(ctx)

    assert failed == ["com.example.Broken"]
    assert apps.uninstalled == ["com.example.Paint"]
    assert len(feedback.warnings) == 1
    assert "com.example.Broken" in feedback.warnings[0]


def test_user_app_data_dirs_only_returns_existing(tmp_path: Path) -> None:
    (tmp_path / "alice" / ".endlessm").mkdir(parents=True)
    (tmp_path / "bob").mkdir()

    assert user_app_data_dirs(tmp_path, ".endlessm") == [tmp_path / "alice" / ".endlessm"]


def test_user_app_data_dirs_of_missing_home_root(tmp_path: Path) -> None:
    assert user_app_data_dirs(tmp_path / "home", ".endlessm") == []


def test_remove_legacy_data_deletes_dirs_and_marker(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    config = env.config
    for path in config.legacy_data_dirs:
        (path / "nested").mkdir(parents=True)
        (path / "nested" / "file").write_text("x", encoding="utf-8")
    user_dir = config.home_root / "alice" / config.user_app_data_dir
    user_dir.mkdir(parents=True)
    (config.home_root / "alice" / "Documents").mkdir()
    config.version_check_marker.parent.mkdir(parents=True)
    config.version_check_marker.touch()

    remove_legacy_data(env.build_context())

    assert not any(path.exists() for path in config.legacy_data_dirs)
    assert not user_dir.exists()
    assert (config.home_root / "alice" / "Documents").is_dir()
    assert not config.version_check_marker.exists()


def test_remove_legacy_data_tolerates_missing_paths(tmp_path: Path) -> None:
    feedback = FakeUserFeedback()
    ctx = upgrade_env(tmp_path).build_context(feedback=feedback)

    remove_legacy_data(ctx)

    assert feedback.warnings == []


def test_reset_printers_removes_every_printer(tmp_path: Path) -> None:
    printing = FakePrintSystem(printers=["Office", "Kitchen"])
    services = FakeServices()
    ctx = upgrade_env(tmp_path).build_context(printing=printing, services=services)

    reset_printers(ctx)

    assert printing.printers == []
    assert printing.removed == ["Office", "Kitchen"]
    assert printing.cancel_all_calls == 1
    assert services.restarts_of("cups.service") == 2


def test_reset_printers_without_printers_skips_cancel(tmp_path: Path) -> None:
    printing = FakePrintSystem()
    services = FakeServices()
    ctx = upgrade_env(tmp_path).build_context(printing=printing, services=services)

    reset_printers(ctx)

    assert printing.cancel_all_calls == 0
    assert services.restarts_of("cups.service") == 2


def test_reset_legacy_state_restarts_cups_again_after_driver_removal(tmp_path: Path) -> None:
    env = upgrade_env(tmp_path)
    config = env.config
    ppd = config.driver_root / "hp" / "hp.ppd"
    ppd.parent.mkdir(parents=True)
    ppd.write_text("*PPD-Adobe", encoding="utf-8")
    config.driver_ppd_dir.mkdir(parents=True)
    (config.driver_ppd_dir / "hp.ppd").symlink_to(ppd)
    services = FakeServices()

    reset_legacy_state(env.build_context(services=services))

    assert not (config.driver_root / "hp").exists()
    assert services.restarts_of("cups.service") == 3


def test_reset_legacy_state_without_drivers(tmp_path: Path) -> None:
    services = FakeServices()
    apps = FakeLegacyApps(apps=["com.example.Chess"])
    ctx = upgrade_env(tmp_path).build_context(services=services, apps=apps)

    reset_legacy_state(ctx)

    assert apps.installed == []
    assert services.restarts_of("cups.service") == 2
