from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PRODUCT
from ..lib.host import Host
from ..lib.services import ServiceManager
from ..state_store import record_decision, record_warning

logger = logging.getLogger(__name__)


class RestartXcatdStep:
    step_id = "70_restart_xcatd"

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        unit = PRODUCT.daemon_unit
        services = ServiceManager(host)

        if host.has_tool("restartxcatd"):
            logger.info("Using restartxcatd to restart xCAT daemon")
            method = "restartxcatd"
            r = host.run(["restartxcatd"], check=False)
        elif services.has_unit(unit):
            logger.info("Using systemctl to restart %s", unit)
            method = "systemctl"
            services.daemon_reload()
            r = services.restart(unit)
        else:
            logger.warning("No known method to restart %s (no restartxcatd, %s service missing).", unit, unit)
            record_warning(state, self.step_id, "no restart method")
            record_decision(state, "restart_method", None)
            return state

        record_decision(state, "restart_method", method)
        if not r.ok:
            msg = f"{' '.join(r.argv)} returned non-zero exit code."
            logger.warning(msg)
            record_warning(state, self.step_id, msg)
        return state
