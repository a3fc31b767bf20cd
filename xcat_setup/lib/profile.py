from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

from .host import Host

logger = logging.getLogger(__name__)


def parse_env_dump(dump: str) -> Dict[str, str]:
    """Parse the NUL-separated output of `env -0`."""

    out: Dict[str, str] = {}
    for entry in dump.split("\0"):
        if "=" not in entry:
            continue
        key, value = entry.split("=", 1)
        out[key] = value
    return out


def source_profile(host: Host, path: str) -> bool:
    """Source a shell profile with bash and merge its environment into host.env.

    Returns False if the profile is missing or could not be sourced.
    """

    if not Path(path).is_file():
        return False

    logger.info("Sourcing %s to add xCAT tools to PATH", path)
    r = host.query(["bash", "-c", 'source "$1" >/dev/null 2>&1; env -0', "bash", path])
    if r.returncode != 0:
        logger.warning("Sourcing %s returned non-zero exit code (%s)", path, r.returncode)
        return False

    host.update_env(parse_env_dump(r.stdout))
    return True
