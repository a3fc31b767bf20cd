from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PATHS
from ..lib.host import Host
from ..lib.patching import comment_out_identifier, patch_file
from ..state_store import record_decision

logger = logging.getLogger(__name__)

IDENTIFIER = "authorityKeyIdentifier"


class PatchOpensslTemplateStep:
    """Comment out authorityKeyIdentifier in the CA openssl template."""

    step_id = "50_patch_openssl_template"

    def __init__(
        self,
        path: str = PATHS.openssl_template,
        backup_path: str = PATHS.openssl_template_backup,
    ):
        self.path = path
        self.backup_path = backup_path

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        outcome = patch_file(
            self.path,
            self.backup_path,
            lambda text: comment_out_identifier(text, IDENTIFIER),
            dry_run=host.dry_run,
        )
        if not outcome.found:
            logger.info("OpenSSL template not found at %s, skipping OpenSSL patch.", self.path)
        elif outcome.changed:
            logger.info("Commented out lines starting with '%s' in %s", IDENTIFIER, self.path)

        record_decision(state, "openssl_template_patched", outcome.changed)
        return state
