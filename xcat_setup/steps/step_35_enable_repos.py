from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.env import PRODUCT
from ..lib.host import Host
from ..lib.pkg import package_manager_for

logger = logging.getLogger(__name__)


class EnableReposStep:
    step_id = "35_enable_repos"

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        pm = package_manager_for(state, host)
        logger.info("Enabling repositories: %s", " ".join(PRODUCT.repositories))
        pm.enable_repos(PRODUCT.repositories)
        return state
