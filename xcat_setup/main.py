from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, NoReturn, Optional, Sequence

from .lib.env import PATHS
from .lib.host import Host
from .logging_utils import DEFAULT_LOG_PATH, attach_log_file, configure_logging
from .pipeline import Step, UnknownStepError, plan_steps, run_pipeline
from .preflight import PreflightError, check_payload, run_preflight
from .state_store import ensure_defaults, load_state, record_decision, reset_progress, save_state
from .steps import (
    EnableReposStep,
    InstallPrerequisitesStep,
    PatchDockerhostCertStep,
    PatchOpensslTemplateStep,
    ReinitXcatStep,
    RemovePackagesStep,
    RestartXcatdStep,
    RunInstallerStep,
    VerifyXcatdStep,
)

logger = logging.getLogger(__name__)

DEFAULT_STATE_PATH = PATHS.state_default
EXIT_FAILED = 1
EXIT_USAGE = 64


def build_steps() -> List[Step]:
    return [
        RemovePackagesStep(),
        InstallPrerequisitesStep(),
        EnableReposStep(),
        RunInstallerStep(),
        PatchOpensslTemplateStep(),
        PatchDockerhostCertStep(),
        ReinitXcatStep(),
        RestartXcatdStep(),
        VerifyXcatdStep(),
    ]


def run(
    *,
    host: Host,
    pkg_cmd: str,
    version: str = "latest",
    payload: str = PATHS.go_xcat_payload,
    state_path: str = DEFAULT_STATE_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    resume: bool = False,
    steps: Optional[Sequence[Step]] = None,
) -> Dict[str, Any]:
    """Run the setup pipeline on a host that passed preflight, persisting state."""

    state = load_state(state_path) if resume else {}
    if not resume:
        reset_progress(state)
    state = ensure_defaults(state)
    state["config"].update({"version": version, "payload": payload, "dry_run": host.dry_run})
    record_decision(state, "package_manager", pkg_cmd)

    try:
        result = run_pipeline(
            state=state,
            steps=build_steps() if steps is None else steps,
            host=host,
            start_at=start_at,
            stop_after=stop_after,
        )
        state = result.state
        state.setdefault("execution", {}).setdefault("summary", {})["ran_steps"] = result.ran_steps
        state.setdefault("execution", {}).setdefault("summary", {})["skipped_steps"] = result.skipped_steps
        return state
    except UnknownStepError:
        raise
    except Exception as e:
        logger.exception("xCAT setup failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        if not host.dry_run:
            save_state(state_path, state)


class ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit with EXIT_USAGE; 2 means not root."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def main(argv: Optional[list[str]] = None, host: Optional[Host] = None) -> int:
    p = ArgumentParser(
        prog="xcat-setup",
        description="Clean install/fix xCAT on EL9 (Rocky/Alma/RHEL 9).",
    )
    p.add_argument("version", nargs="?", default="latest", help="xCAT version passed to go-xcat (default: latest)")
    p.add_argument("--payload", default=PATHS.go_xcat_payload, help="Path to the bundled go-xcat installer")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to run state (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to setup log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 50_patch_openssl_template)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--resume", action="store_true", help="Skip steps the previous run recorded as completed")
    p.add_argument("--dry-run", action="store_true", help="Log mutating commands and file writes without doing them")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = p.parse_args(argv)

    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    if host is None:
        host = Host(dry_run=args.dry_run)

    steps = build_steps()
    try:
        pkg_cmd = run_preflight(host)
        previous = load_state(args.state) if args.resume else {}
        planned = plan_steps(state=previous, steps=steps, start_at=args.start_at, stop_after=args.stop_after)
        if RunInstallerStep.step_id in planned:
            check_payload(args.payload)
    except PreflightError as e:
        logger.error("%s", e)
        return e.exit_code
    except UnknownStepError as e:
        logger.error("%s", e)
        return EXIT_USAGE
    except Exception as e:
        logger.error("Cannot plan the run from %s: %s", args.state, e)
        return EXIT_FAILED

    if not host.dry_run:
        attach_log_file(args.log)

    try:
        run(
            host=host,
            pkg_cmd=pkg_cmd,
            version=args.version,
            payload=args.payload,
            state_path=args.state,
            start_at=args.start_at,
            stop_after=args.stop_after,
            resume=args.resume,
            steps=steps,
        )
    except Exception as e:
        logger.error("xCAT setup aborted: %s", e.__class__.__name__)
        return EXIT_FAILED
    return 0
