from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

logger = logging.getLogger(__name__)

INSTALLER_SCRIPT = "go-xcat"


def _make_executable(p: Path) -> None:
    mode = p.stat().st_mode
    p.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def stage_payload(src: str, dst: str, *, dry_run: bool = False) -> str:
    """Copy the installer payload to dst, replacing any earlier copy.

    src may be the go-xcat script itself or a directory holding it.
    Returns the path of the script to execute.
    """

    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(src)

    script = d / INSTALLER_SCRIPT if s.is_dir() else d
    if dry_run:
        logger.info("Would copy %s -> %s", str(s), str(d))
        return str(script)

    if d.is_dir() and not d.is_symlink():
        shutil.rmtree(d)
    elif d.exists() or d.is_symlink():
        os.unlink(d)

    if s.is_dir():
        shutil.copytree(s, d, symlinks=True)
    else:
        shutil.copy2(s, d)

    if script.is_file():
        _make_executable(script)
    return str(script)
