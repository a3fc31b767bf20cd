from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .lib.host import Host
from .state_store import is_step_completed, mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, state: Dict[str, Any], host: Host) -> Dict[str, Any]:
        ...


class UnknownStepError(ValueError):
    pass


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def _check_step_id(steps: Sequence[Step], step_id: Optional[str]) -> None:
    if step_id is None:
        return
    known = [s.step_id for s in steps]
    if step_id not in known:
        raise UnknownStepError(f"Unknown step id {step_id!r} (known: {', '.join(known)})")


def plan_steps(
    *,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> List[str]:
    """Step ids run_pipeline would execute for this state, in order."""

    _check_step_id(steps, start_at)
    _check_step_id(steps, stop_after)

    planned: List[str] = []
    started = start_at is None
    for step in steps:
        if not started:
            if step.step_id != start_at:
                continue
            started = True
        if not is_step_completed(state, step.step_id):
            planned.append(step.step_id)
        if stop_after is not None and step.step_id == stop_after:
            break
    return planned


def run_pipeline(
    *,
    state: Dict[str, Any],
    steps: Sequence[Step],
    host: Host,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order with resume/idempotency semantics."""

    _check_step_id(steps, start_at)
    _check_step_id(steps, stop_after)

    ran: List[str] = []
    skipped: List[str] = []

    started = start_at is None

    for step in steps:
        if not started:
            if step.step_id == start_at:
                started = True
            else:
                continue

        state.setdefault("execution", {})["current_step"] = step.step_id

        if is_step_completed(state, step.step_id):
            logger.info("Skipping step %s (already completed)", step.step_id)
            skipped.append(step.step_id)
        else:
            logger.info("Running step %s", step.step_id)
            state = step.run(state, host)
            mark_step_completed(state, step.step_id)
            ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
