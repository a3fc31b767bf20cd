from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.assets import stage_payload
from ..lib.env import PATHS
from ..lib.host import Host
from ..state_store import record_decision, record_warning

logger = logging.getLogger(__name__)


class RunInstallerStep:
    step_id = "40_run_installer"

    def __init__(self, tmp_path: str = PATHS.go_xcat_tmp):
        self.tmp_path = tmp_path

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        version = str(cfg.get("version") or "latest")
        payload = str(cfg.get("payload") or PATHS.go_xcat_payload)

        script = stage_payload(payload, self.tmp_path, dry_run=host.dry_run)

        logger.info("Running go-xcat installer (version: %s)", version)
        r = host.run(["/bin/bash", script, "-x", version, "install", "-y"], check=False, capture=False)
        record_decision(state, "installer_returncode", r.returncode)

        if not r.ok:
            msg = (
                "go-xcat install returned non-zero exit code. Continuing with the remaining fixes "
                "(some parts may have failed due to cert issues)."
            )
            logger.warning(msg)
            record_warning(state, self.step_id, msg)
        return state
