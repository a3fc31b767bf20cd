from __future__ import annotations

import logging

from .command import CmdResult
from .host import Host

logger = logging.getLogger(__name__)


class ServiceManager:
    """systemd via systemctl."""

    def __init__(self, host: Host):
        self.host = host

    @property
    def available(self) -> bool:
        return self.host.has_tool("systemctl")

    def has_unit(self, prefix: str) -> bool:
        if not self.available:
            return False
        r = self.host.query(["systemctl", "list-unit-files", "--no-legend", "--no-pager"])
        return any(ln.startswith(prefix) for ln in r.stdout.splitlines())

    def daemon_reload(self) -> CmdResult:
        return self.host.run(["systemctl", "daemon-reload"], check=False)

    def restart(self, unit: str) -> CmdResult:
        return self.host.run(["systemctl", "restart", unit], check=False)
