"""Production print system implementation using the CUPS command line tools."""

from eos_upgrade.core.subprocess import run_subprocess_with_context
from eos_upgrade.integrations.printing.abc import PrintSystem


def parse_lpstat_printers(output: str) -> list[str]:
    """Extract printer names from `lpstat -p` output.

    Example line: "printer HP_LaserJet is idle.  enabled since Mon 01 Jan"
    """
    names: list[str] = []
    for line in output.splitlines():
        fields = line.split()
        if len(fields) >= 2 and fields[0] == "printer":
            names.append(fields[1])
    return names


class RealPrintSystem(PrintSystem):
    def list_printers(self) -> list[str]:
        # lpstat exits non-zero when no destinations exist, so check manually
        result = run_subprocess_with_context(
            ["lpstat", "-p"],
            operation_context="list configured printers",
            check=False,
        )
        if result.returncode != 0:
            if "No destinations" in result.stderr or "No destinations" in result.stdout:
                return []
            raise RuntimeError(
                f"Failed to list configured printers\nExit code: {result.returncode}"
                f"\nstderr: {result.stderr.strip()}"
            )
        return parse_lpstat_printers(result.stdout)

    def cancel_all_jobs(self) -> None:
        run_subprocess_with_context(
            ["cancel", "-a"],
            operation_context="cancel all print jobs",
        )

    def remove_printer(self, name: str) -> None:
        run_subprocess_with_context(
            ["lpadmin", "-x", name],
            operation_context=f"remove printer '{name}'",
        )
