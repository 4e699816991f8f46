"""Production host facts from the running process."""

import os
import platform

from eos_upgrade.integrations.host.abc import Host


class RealHost(Host):
    def is_superuser(self) -> bool:
        return os.geteuid() == 0

    def machine(self) -> str:
        return platform.machine()
