from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
CONSOLE_FORMAT = "==> %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure console logging on stdout with the '==> ' marker.

    Safe to call repeatedly; only the level changes after the first call.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    if getattr(logger, "_xcat_setup_configured", False):
        return

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)
    setattr(logger, "_xcat_setup_configured", True)


def attach_log_file(log_path: str = DEFAULT_LOG_PATH) -> str:
    """Record the run to log_path as well.

    Called only once preflight passed, so a refused run leaves no file behind.
    If log_path is not writable, fall back to a file in the working directory.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    existing: Optional[str] = getattr(logger, "_xcat_setup_log_path", None)
    if existing:
        return existing

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    chosen_path = log_path
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / "xcat-setup.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    setattr(logger, "_xcat_setup_log_path", chosen_path)
    logging.getLogger(__name__).debug(
        "File logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
