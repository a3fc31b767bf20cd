from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PATHS
from ..lib.host import Host
from ..state_store import record_decision, record_warning

logger = logging.getLogger(__name__)


class VerifyXcatdStep:
    step_id = "80_verify_xcatd"

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        logger.info("Verifying xCAT daemon connectivity (lsxcatd -a)")

        if not host.has_tool("lsxcatd"):
            logger.info("lsxcatd command not available for verification.")
            record_decision(state, "verify", "unavailable")
        else:
            r = host.run(["lsxcatd", "-a"], check=False, capture=False)
            if r.ok:
                logger.info("xcatd answered lsxcatd -a")
                record_decision(state, "verify", "ok")
            else:
                msg = f"lsxcatd -a failed. Check {PATHS.xcat_log} and SSL configuration."
                logger.warning(msg)
                record_warning(state, self.step_id, msg)
                record_decision(state, "verify", "failed")

        logger.info(
            "Done. If you still see xcatd errors, check %s and ensure SSL certs are present.",
            PATHS.xcat_log,
        )
        return state
