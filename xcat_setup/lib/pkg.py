from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from .command import CmdResult
from .host import Host

logger = logging.getLogger(__name__)


class PackageManager:
    """rpm for queries, dnf or yum for changes."""

    def __init__(self, host: Host, pkg_cmd: str):
        self.host = host
        self.pkg_cmd = pkg_cmd

    def installed_names(self) -> List[str]:
        r = self.host.query(["rpm", "-qa", "--queryformat", "%{NAME}\\n"])
        return sorted({ln.strip() for ln in r.stdout.splitlines() if ln.strip()})

    def is_installed(self, package: str) -> bool:
        return self.host.query(["rpm", "-q", "--quiet", package]).returncode == 0

    def install(self, packages: Sequence[str], *, check: bool = True) -> CmdResult:
        return self.host.run([self.pkg_cmd, "install", "-y", *packages], check=check)

    def remove(self, packages: Sequence[str], *, check: bool = True) -> CmdResult:
        return self.host.run([self.pkg_cmd, "remove", "-y", *packages], check=check)

    def enable_repos(self, repos: Sequence[str]) -> CmdResult:
        return self.host.run([self.pkg_cmd, "config-manager", "--set-enabled", *repos])


def select_by_prefix(names: Sequence[str], prefix: str) -> List[str]:
    """Names whose lowercase form starts with prefix (case-insensitive)."""
    prefix = prefix.lower()
    return [n for n in names if n.lower().startswith(prefix)]


def ensure_package(pm: PackageManager, package: str) -> bool:
    """Install package if missing. Returns True when an install was issued."""

    if pm.is_installed(package):
        logger.info("Package already installed: %s", package)
        return False
    logger.info("Installing missing package: %s", package)
    pm.install([package])
    return True


def package_manager_for(state: Dict[str, Any], host: Host) -> PackageManager:
    pkg_cmd = ((state.get("execution") or {}).get("decisions") or {}).get("package_manager")
    if not pkg_cmd:
        raise RuntimeError("execution.decisions.package_manager missing (preflight not run?)")
    return PackageManager(host, str(pkg_cmd))
