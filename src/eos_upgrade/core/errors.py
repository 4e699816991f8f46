"""Error kinds raised by the migration.

Gate errors are raised before anything on disk has been touched. They carry
the operator-facing message and map to exit code 1 at the CLI boundary.

Failures after the gate has passed are not represented here: they surface as
RuntimeError (from run_subprocess_with_context) or OSError and abort the run.
"""


class UpgradeError(Exception):
    """Base class for errors raised by eos-upgrade."""


class GateError(UpgradeError):
    """An admission check failed; no state has been mutated."""

    exit_code = 1


class VersionMismatch(GateError):
    """The system runs an older EOS 2 release than the one migration supports."""


class AlreadyUpgraded(GateError):
    """The system already runs the target major version.

    Not a failure in the harmful sense, but the process still exits non-zero.
    """


class UnsupportedVersion(GateError):
    """The system version is neither the legacy nor the target major version."""


class UnsupportedArchitecture(GateError):
    """The machine architecture has no known product mapping."""


class OperatorDeclined(GateError):
    """The operator answered no to a confirmation prompt."""
