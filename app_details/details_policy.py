from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Dict, Optional

POLICY_PATH = Path("data/roaming/app_details_policy.json")

DEFAULT_POLICY = {
    "log_decisions": True,
    "storage": {
        "decimals": 2,
    },
    "ui": {
        "show_storage_summary": True,
    },
}


def _policy_path(base_dir: Optional[Path]) -> Path:
    if base_dir is None:
        return POLICY_PATH
    return base_dir / "app_details_policy.json"


def get_default_policy() -> Dict[str, object]:
    return deepcopy(DEFAULT_POLICY)


def load_overrides(base_dir: Optional[Path] = None) -> Dict[str, object]:
    path = _policy_path(base_dir)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def resolve_policy(base_dir: Optional[Path] = None) -> Dict[str, object]:
    policy = get_default_policy()
    for key, value in load_overrides(base_dir).items():
        if isinstance(value, dict) and isinstance(policy.get(key), dict):
            merged = dict(policy[key])
            merged.update(value)
            policy[key] = merged
        else:
            policy[key] = value
    return policy


def storage_decimals(policy: Dict[str, object]) -> int:
    storage = policy.get("storage")
    if not isinstance(storage, dict):
        return 2
    try:
        return max(0, int(storage.get("decimals", 2)))
    except (TypeError, ValueError):
        return 2


def save_policy(policy: Dict[str, object], base_dir: Optional[Path] = None) -> None:
    path = _policy_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(policy, indent=2), encoding="utf-8")


__all__ = [
    "POLICY_PATH",
    "DEFAULT_POLICY",
    "get_default_policy",
    "load_overrides",
    "resolve_policy",
    "storage_decimals",
    "save_policy",
]
