from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PRODUCT
from ..lib.host import Host
from ..lib.pkg import package_manager_for, select_by_prefix
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class RemovePackagesStep:
    step_id = "20_remove_packages"

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        pm = package_manager_for(state, host)

        logger.info("Checking for installed xCAT packages...")
        found = select_by_prefix(pm.installed_names(), PRODUCT.package_prefix)

        if found:
            logger.info("Found existing xCAT packages, removing them:")
            for name in found:
                logger.info("  %s", name)
            # Not guarded: a failed batch removal stops the run.
            pm.remove(found)
        else:
            logger.info("No pre-existing xCAT RPM packages found.")
        record_decision(state, "removed_packages", found)

        if pm.is_installed(PRODUCT.legacy_package):
            logger.info("Removing package '%s'", PRODUCT.legacy_package)
            r = pm.remove([PRODUCT.legacy_package], check=False)
            if not r.ok:
                logger.debug("Removal of %s returned %s (ignored)", PRODUCT.legacy_package, r.returncode)

        return state
