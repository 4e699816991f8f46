"""Production OSTree implementation using the ostree CLI."""

from pathlib import Path

from eos_upgrade.core.subprocess import run_subprocess_with_context
from eos_upgrade.integrations.ostree.abc import Deployment, Ostree, parse_booted_deployment


class RealOstree(Ostree):
    """Production implementation using subprocess.

    All operations execute actual ostree commands.
    """

    def get_booted_deployment(self) -> Deployment | None:
        result = run_subprocess_with_context(
            ["ostree", "admin", "status"],
            operation_context="query ostree deployment status",
        )
        return parse_booted_deployment(result.stdout)

    def init_repo(self, repo_path: Path, mode: str) -> None:
        run_subprocess_with_context(
            ["ostree", "init", f"--repo={repo_path}", f"--mode={mode}"],
            operation_context=f"initialize ostree repository at {repo_path}",
        )

    def gpg_import(self, repo_path: Path, remote: str, key_data: bytes) -> None:
        run_subprocess_with_context(
            ["ostree", f"--repo={repo_path}", "remote", "gpg-import", "--stdin", remote],
            operation_context=f"import GPG keys for remote '{remote}'",
            input=key_data,
            text=False,
            encoding=None,
        )

    def pull(self, repo_path: Path, remote: str, branch: str, disable_static_deltas: bool) -> None:
        cmd = ["ostree", "pull", f"--repo={repo_path}"]
        if disable_static_deltas:
            cmd.append("--disable-static-deltas")
        cmd.extend([remote, branch])

        # Pull progress is streamed straight to the operator's terminal
        run_subprocess_with_context(
            cmd,
            operation_context=f"pull {remote}:{branch}",
            capture_output=False,
        )

    def admin_upgrade(self, allow_downgrade: bool) -> None:
        cmd = ["ostree", "admin", "upgrade", "--deploy-only"]
        if allow_downgrade:
            cmd.append("--allow-downgrade")
        run_subprocess_with_context(
            cmd,
            operation_context="deploy the new OS version",
            capture_output=False,
        )
