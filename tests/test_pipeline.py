from __future__ import annotations

import pytest

from xcat_setup.pipeline import UnknownStepError, run_pipeline


class RecordingStep:
    def __init__(self, step_id, log):
        self.step_id = step_id
        self.log = log

    def run(self, state, host):
        self.log.append(self.step_id)
        return state


@pytest.fixture
def steps():
    log = []
    return log, [RecordingStep(s, log) for s in ("20_a", "30_b", "40_c", "50_d")]


def test_runs_all_in_order(make_host, steps):
    log, items = steps
    result = run_pipeline(state={}, steps=items, host=make_host())
    assert log == ["20_a", "30_b", "40_c", "50_d"]
    assert result.ran_steps == log
    assert result.state["execution"]["completed_steps"] == log
    assert result.state["execution"]["current_step"] is None


def test_start_and_stop(make_host, steps):
    log, items = steps
    result = run_pipeline(state={}, steps=items, host=make_host(), start_at="30_b", stop_after="40_c")
    assert log == ["30_b", "40_c"]
    assert result.skipped_steps == []


def test_completed_steps_are_skipped(make_host, steps):
    log, items = steps
    state = {"execution": {"completed_steps": ["20_a", "30_b"]}}
    result = run_pipeline(state=state, steps=items, host=make_host())
    assert log == ["40_c", "50_d"]
    assert result.skipped_steps == ["20_a", "30_b"]


def test_unknown_step_id(make_host, steps):
    log, items = steps
    with pytest.raises(UnknownStepError):
        run_pipeline(state={}, steps=items, host=make_host(), stop_after="99_nope")
    assert log == []
