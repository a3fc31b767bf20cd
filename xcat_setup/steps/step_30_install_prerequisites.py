from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PRODUCT
from ..lib.host import Host
from ..lib.pkg import ensure_package, package_manager_for
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class InstallPrerequisitesStep:
    step_id = "30_install_prerequisites"

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        pm = package_manager_for(state, host)

        logger.info("Ensuring prerequisites (%s) are installed...", ", ".join(PRODUCT.prerequisites))
        installed = [pkg for pkg in PRODUCT.prerequisites if ensure_package(pm, pkg)]
        record_decision(state, "installed_prerequisites", installed)
        return state
