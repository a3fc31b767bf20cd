from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PATHS
from ..lib.host import Host
from ..lib.profile import source_profile
from ..state_store import record_decision, record_warning

logger = logging.getLogger(__name__)


class ReinitXcatStep:
    step_id = "60_reinit_xcat"

    def __init__(self, profile: str = PATHS.xcat_profile):
        self.profile = profile

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        # xcatconfig/restartxcatd/lsxcatd usually live on the profile's PATH.
        source_profile(host, self.profile)

        if not host.has_tool("xcatconfig"):
            logger.info("xcatconfig command not found. Skipping xcatconfig step.")
            record_decision(state, "xcatconfig", "missing")
            return state

        logger.info("Running xcatconfig -i -c -s to reinitialize xCAT configuration")
        r = host.run(["xcatconfig", "-i", "-c", "-s"], check=False, capture=False)
        if r.ok:
            record_decision(state, "xcatconfig", "ok")
        else:
            logger.warning("xcatconfig returned non-zero exit code.")
            record_warning(state, self.step_id, f"xcatconfig exited {r.returncode}")
            record_decision(state, "xcatconfig", "failed")
        return state
