from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PATHS
from ..lib.host import Host
from ..lib.patching import matching_lines, patch_file, remove_flag_on_anchor_lines
from ..state_store import record_decision

logger = logging.getLogger(__name__)

# Only the dockerhost CSR line is touched.
ANCHOR = "openssl req -config ca/openssl.cnf -new -key ca/dockerhost-key.pem"
REQ_LINES = "openssl req -config ca/openssl.cnf"


class PatchDockerhostCertStep:
    """Drop '-extensions server' from the dockerhost openssl request."""

    step_id = "55_patch_dockerhost_cert"

    def __init__(
        self,
        path: str = PATHS.dockerhost_cert_script,
        backup_path: str = PATHS.dockerhost_cert_script_backup,
    ):
        self.path = path
        self.backup_path = backup_path

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        outcome = patch_file(
            self.path,
            self.backup_path,
            lambda text: remove_flag_on_anchor_lines(text, ANCHOR, "-extensions", "server"),
            dry_run=host.dry_run,
        )
        if not outcome.found:
            logger.info("File %s not found, skipping dockerhost cert script patch.", self.path)
            record_decision(state, "dockerhost_cert_patched", False)
            return state

        logger.info("Updated openssl req lines (matching file):")
        for lineno, line in matching_lines(outcome.text, REQ_LINES):
            logger.info("%d:%s", lineno, line)

        record_decision(state, "dockerhost_cert_patched", outcome.changed)
        return state
