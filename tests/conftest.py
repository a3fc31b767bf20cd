"""Pytest fixtures: a scripted command runner and a fixed set of tools."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from xcat_setup.lib.command import CmdResult, CommandError
from xcat_setup.lib.host import Host, ToolLocator


class FakeRunner:
    """Records every command; answers from (argv prefix -> returncode, stdout) rules."""

    def __init__(self) -> None:
        self.rules: List[Tuple[Tuple[str, ...], int, str]] = []
        self.calls: List[List[str]] = []
        self.dry_calls: List[List[str]] = []

    def on(self, prefix: Sequence[str], returncode: int = 0, stdout: str = "") -> "FakeRunner":
        # Later rules win.
        self.rules.insert(0, (tuple(prefix), returncode, stdout))
        return self

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
        argv_list = list(argv)
        if dry_run:
            self.dry_calls.append(argv_list)
            return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

        self.calls.append(argv_list)
        returncode, stdout = 0, ""
        for prefix, rc, out in self.rules:
            if tuple(argv_list[: len(prefix)]) == prefix:
                returncode, stdout = rc, out
                break
        result = CmdResult(argv=argv_list, returncode=returncode, stdout=stdout, stderr="")
        if check and returncode != 0:
            raise CommandError(result)
        return result

    def called(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


class FakeTools(ToolLocator):
    """Tools that are always present, plus tools found only under a PATH entry."""

    def __init__(self, available: Sequence[str] = (), on_path: Optional[Dict[str, str]] = None):
        self.available = set(available)
        self.on_path = dict(on_path or {})

    def which(self, name: str, env: Dict[str, str]) -> Optional[str]:
        if name in self.available:
            return f"/usr/bin/{name}"
        d = self.on_path.get(name)
        if d and d in env.get("PATH", "").split(":"):
            return f"{d}/{name}"
        return None


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_host(runner):
    def _make(tools: Sequence[str] = ("dnf", "rpm", "systemctl"), *, euid: int = 0, dry_run: bool = False,
              on_path: Optional[Dict[str, str]] = None) -> Host:
        return Host(
            runner=runner,
            tools=FakeTools(tools, on_path),
            env={"PATH": "/usr/bin:/bin"},
            euid=lambda: euid,
            dry_run=dry_run,
        )

    return _make


@pytest.fixture
def state() -> dict:
    return {
        "config": {"version": "latest", "payload": "./go-xcat", "dry_run": False},
        "execution": {"decisions": {"package_manager": "dnf"}, "completed_steps": [], "warnings": []},
    }


@pytest.fixture(autouse=True)
def _reset_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_xcat_setup_configured", "_xcat_setup_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
