"""Production service control using systemctl."""

from eos_upgrade.core.subprocess import run_subprocess_with_context
from eos_upgrade.integrations.services.abc import Services


class RealServices(Services):
    def stop(self, units: list[str]) -> None:
        if not units:
            return
        run_subprocess_with_context(
            ["systemctl", "stop", *units],
            operation_context=f"stop {', '.join(units)}",
        )

    def restart(self, unit: str) -> None:
        run_subprocess_with_context(
            ["systemctl", "restart", unit],
            operation_context=f"restart {unit}",
        )
