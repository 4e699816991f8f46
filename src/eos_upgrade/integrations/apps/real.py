"""Production legacy app implementation using eamctl."""

from eos_upgrade.core.subprocess import run_subprocess_with_context
from eos_upgrade.integrations.apps.abc import LegacyApps


class RealLegacyApps(LegacyApps):
    def list_apps(self) -> list[str]:
        result = run_subprocess_with_context(
            ["eamctl", "list-apps"],
            operation_context="list legacy apps",
        )
        app_ids: list[str] = []
        for line in result.stdout.splitlines():
            fields = line.split()
            if fields:
                app_ids.append(fields[0])
        return app_ids

    def uninstall(self, app_id: str) -> None:
        run_subprocess_with_context(
            ["eamctl", "uninstall", app_id],
            operation_context=f"uninstall legacy app '{app_id}'",
        )
