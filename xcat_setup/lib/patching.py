"""Line-scoped text patches for files shipped by xCAT.

Every patch is a pure ``text -> text`` function; ``patch_file`` handles the
read/backup/write cycle around it.
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)


class PatchError(RuntimeError):
    pass


@dataclass(frozen=True)
class PatchOutcome:
    path: str
    found: bool
    backup_created: bool = False
    changed: bool = False
    text: str = ""


def comment_out_identifier(text: str, identifier: str) -> str:
    """Prefix '#' to lines whose first non-whitespace token starts with identifier.

    Leading whitespace is kept in front of the '#'.
    """

    pattern = re.compile(r"^([ \t]*)(" + re.escape(identifier) + r")", re.MULTILINE)
    return pattern.sub(r"\1#\2", text)


def remove_flag_on_anchor_lines(text: str, anchor: str, flag: str, value: str) -> str:
    """Delete '<flag> <value>' (and trailing whitespace) on lines containing anchor only."""

    pattern = re.compile(re.escape(flag) + r"[ \t]*" + re.escape(value) + r"[ \t]*")
    lines = text.splitlines(keepends=True)
    for i, line in enumerate(lines):
        if anchor in line:
            lines[i] = pattern.sub("", line)
    return "".join(lines)


def matching_lines(text: str, needle: str) -> List[Tuple[int, str]]:
    """(1-based line number, line) for each line containing needle."""
    return [(n, ln) for n, ln in enumerate(text.splitlines(), start=1) if needle in ln]


def read_target(p: Path) -> str:
    """Read a patch target keeping its line endings and any non-UTF-8 bytes."""
    with p.open("r", encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def write_target(p: Path, text: str) -> None:
    with p.open("w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(text)


def backup_once(src: Path, backup: Path, *, dry_run: bool = False) -> bool:
    """Copy src to backup unless backup already exists. Returns True if copied."""

    if backup.exists():
        logger.info("Backup already exists.")
        return False
    if dry_run:
        logger.info("Would back up %s -> %s", src, backup)
        return True
    shutil.copy2(src, backup)
    return True


def patch_file(
    path: str,
    backup_path: str,
    transform: Callable[[str], str],
    *,
    dry_run: bool = False,
) -> PatchOutcome:
    """Back up path (once) and rewrite it through transform.

    A missing target is not an error: the outcome reports found=False.
    """

    p = Path(path)
    if not p.is_file():
        return PatchOutcome(path=path, found=False)

    try:
        original = read_target(p)
    except OSError as e:
        raise PatchError(f"Cannot read {path}: {e}") from e

    logger.info("Backing up %s to %s (no overwrite)", path, backup_path)
    created = backup_once(p, Path(backup_path), dry_run=dry_run)

    patched = transform(original)
    if patched == original:
        logger.info("No changes needed in %s", path)
        return PatchOutcome(path=path, found=True, backup_created=created, changed=False, text=original)

    if dry_run:
        logger.info("Would rewrite %s", path)
    else:
        try:
            write_target(p, patched)
        except OSError as e:
            raise PatchError(f"Cannot write {path}: {e}") from e
    return PatchOutcome(path=path, found=True, backup_created=created, changed=True, text=patched)
