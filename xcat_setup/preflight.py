from __future__ import annotations

import logging
from pathlib import Path

from .lib.env import PRODUCT
from .lib.host import Host

logger = logging.getLogger(__name__)

EXIT_NOT_ROOT = 2
EXIT_NO_PACKAGE_MANAGER = 3
EXIT_PAYLOAD_MISSING = 4


class PreflightError(RuntimeError):
    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code


def run_preflight(host: Host) -> str:
    """Check the host before touching anything. Returns the package manager to use."""

    if not host.is_root():
        raise PreflightError("This script must be run as root. Use sudo.", EXIT_NOT_ROOT)

    pkg_cmd = host.first_tool(PRODUCT.package_managers)
    if pkg_cmd is None:
        raise PreflightError("No dnf/yum package manager found. Aborting.", EXIT_NO_PACKAGE_MANAGER)

    logger.info("Using package manager: %s", pkg_cmd)
    return pkg_cmd


def check_payload(payload: str) -> None:
    """Only needed when the installer step is part of the run."""

    if not Path(payload).exists():
        raise PreflightError(f"go-xcat installer payload not found at {payload}. Aborting.", EXIT_PAYLOAD_MISSING)
