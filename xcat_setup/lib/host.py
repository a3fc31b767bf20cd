from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Protocol, Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


class Runner(Protocol):
    def __call__(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Optional[Dict[str, str]] = None,
        cwd: Optional[str] = None,
        capture: bool = True,
        dry_run: bool = False,
    ) -> CmdResult:
        ...


class ToolLocator:
    """Reports which external tools are reachable on the current search path."""

    def which(self, name: str, env: Dict[str, str]) -> Optional[str]:
        return shutil.which(name, path=env.get("PATH"))

    def has(self, name: str, env: Dict[str, str]) -> bool:
        return self.which(name, env) is not None


@dataclass
class Host:
    """Collaborators for everything the setup touches outside this process."""

    runner: Runner = run_cmd
    tools: ToolLocator = field(default_factory=ToolLocator)
    env: Dict[str, str] = field(default_factory=lambda: dict(os.environ))
    euid: Callable[[], int] = os.geteuid
    dry_run: bool = False

    def run(self, argv: Sequence[str], *, check: bool = True, capture: bool = True) -> CmdResult:
        return self.runner(argv, check=check, env=self.env, capture=capture, dry_run=self.dry_run)

    def query(self, argv: Sequence[str]) -> CmdResult:
        """Run a read-only command; executed even in dry-run mode."""
        return self.runner(argv, check=False, env=self.env, dry_run=False)

    def has_tool(self, name: str) -> bool:
        return self.tools.has(name, self.env)

    def first_tool(self, names: Iterable[str]) -> Optional[str]:
        for name in names:
            if self.has_tool(name):
                return name
        return None

    def is_root(self) -> bool:
        return self.euid() == 0

    def update_env(self, values: Dict[str, str]) -> None:
        changed = sorted(k for k, v in values.items() if self.env.get(k) != v)
        self.env.update(values)
        if changed:
            logger.debug("Environment updated: %s", ", ".join(changed))
