# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config loading (defaults/roaming)
# [NAV-20] Public getters
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

CONFIG_PATH = Path("data/roaming/ui_config.json")
_DEFAULT_UI_CONFIG = {
    "fixture_path": "data/roaming/apps.json",
    "user_id": 0,
    "last_package": "",
}


# === [NAV-10] Config loading (defaults/roaming) ==============================
def load_ui_config() -> Dict:
    path = CONFIG_PATH
    if not path.exists():
        return _DEFAULT_UI_CONFIG.copy()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return _DEFAULT_UI_CONFIG.copy()
    if not isinstance(data, dict):
        return _DEFAULT_UI_CONFIG.copy()
    for key, value in _DEFAULT_UI_CONFIG.items():
        data.setdefault(key, value)
    return data


def save_ui_config(data: Dict) -> None:
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2), encoding="utf-8")


# === [NAV-20] Public getters ==================================================
def get_fixture_path() -> Path:
    return Path(str(load_ui_config().get("fixture_path") or _DEFAULT_UI_CONFIG["fixture_path"]))


def get_user_id() -> int:
    try:
        return int(load_ui_config().get("user_id", 0))
    except (TypeError, ValueError):
        return 0


def remember_package(package_name: str) -> None:
    config = load_ui_config()
    config["last_package"] = package_name
    save_ui_config(config)


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "load_ui_config",
    "save_ui_config",
    "get_fixture_path",
    "get_user_id",
    "remember_package",
]
