from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .lib.env import PATHS

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except ImportError as e:  # pragma: no cover
        raise RuntimeError("YAML state requested but PyYAML is not available. Use a .json state path.") from e
    return yaml


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    if _detect_format(p) in {"yaml", "yml"}:
        data = _yaml().safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(_yaml().safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with defaults (without overriding values already set)."""

    state.setdefault("config", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("version", "latest")
    cfg.setdefault("payload", PATHS.go_xcat_payload)
    cfg.setdefault("dry_run", False)

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("decisions", {})
    exe.setdefault("warnings", [])
    exe.setdefault("errors", [])

    return state


def reset_progress(state: Dict[str, Any]) -> Dict[str, Any]:
    """Start a fresh run: forget completed steps and per-run findings."""

    exe = state.setdefault("execution", {})
    exe["current_step"] = None
    exe["completed_steps"] = []
    exe["decisions"] = {}
    exe["warnings"] = []
    exe["errors"] = []
    return state


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def record_warning(state: Dict[str, Any], step_id: str, message: str) -> None:
    state.setdefault("execution", {}).setdefault("warnings", []).append({"step": step_id, "message": message})


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def is_step_completed(state: Dict[str, Any], step_id: str) -> bool:
    exe = state.get("execution") or {}
    completed = exe.get("completed_steps") or []
    return step_id in completed
