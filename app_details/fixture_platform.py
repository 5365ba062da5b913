"""Platform services answered from a JSON app list.

Lets the details screen run without a device. The file looks like::

    {
      "users": 2,
      "apps": [
        {"package_name": "com.example.notes", "installed_users": [10],
         "storage": {"total_bytes": 5242880, "is_external": false},
         "active_admins": false, "instant": false, "running": true,
         "battery_percent": 2.4}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from runtime_bus import topics

logger = logging.getLogger(__name__)


def load_fixture(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {"users": 1, "apps": []}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("fixture %s unreadable: %s", path, exc)
        return {"users": 1, "apps": []}
    if not isinstance(data, dict):
        return {"users": 1, "apps": []}
    if not isinstance(data.get("apps"), list):
        data["apps"] = []
    return data


class FixturePlatform:
    def __init__(self, data: Dict[str, Any]) -> None:
        self.data = data
        apps: List[Dict[str, Any]] = [app for app in data.get("apps", []) if isinstance(app, dict)]
        self._apps = {
            str(app.get("package_name")): app for app in apps if app.get("package_name")
        }

    @classmethod
    def from_path(cls, path: Path) -> "FixturePlatform":
        return cls(load_fixture(path))

    def app(self, package_name: Optional[str]) -> Optional[Dict[str, Any]]:
        if not package_name:
            return None
        return self._apps.get(package_name)

    def is_instant(self, package_name: str) -> bool:
        app = self.app(package_name)
        return bool(app and app.get("instant", False))

    def register(self, bus: Any) -> None:
        """Register request handlers for every platform topic on ``bus``."""
        if bus is None:
            return

        def _handle_resolve(envelope) -> Dict[str, object]:
            payload = envelope.payload or {}
            app = self.app(payload.get("package_name"))
            if app is None:
                return {"ok": False, "error": "package_not_found"}
            return {"ok": True, "app": dict(app)}

        def _handle_admins(envelope) -> Dict[str, object]:
            app = self.app((envelope.payload or {}).get("package_name"))
            return {"ok": True, "has_active_admins": bool(app and app.get("active_admins", False))}

        def _handle_users(envelope) -> Dict[str, object]:  # noqa: ARG001
            return {"ok": True, "count": int(self.data.get("users", 1) or 1)}

        def _handle_storage(envelope) -> Dict[str, object]:
            app = self.app((envelope.payload or {}).get("package_name"))
            storage = app.get("storage") if app else None
            if not isinstance(storage, dict):
                return {"ok": False, "error": "stats_unavailable"}
            return {
                "ok": True,
                "total_bytes": storage.get("total_bytes", 0),
                "is_external": bool(storage.get("is_external", False)),
            }

        def _handle_battery(envelope) -> Dict[str, object]:
            app = self.app((envelope.payload or {}).get("package_name"))
            if app is None or "battery_percent" not in app:
                return {"ok": False, "error": "usage_unavailable"}
            return {"ok": True, "percent": app.get("battery_percent")}

        def _handle_running(envelope) -> Dict[str, object]:
            app = self.app((envelope.payload or {}).get("package_name"))
            return {"ok": True, "running": bool(app and app.get("running", False))}

        bus.register_handler(topics.PLATFORM_PACKAGE_RESOLVE_REQUEST, _handle_resolve)
        bus.register_handler(topics.PLATFORM_ADMINS_GET_REQUEST, _handle_admins)
        bus.register_handler(topics.PLATFORM_USERS_COUNT_REQUEST, _handle_users)
        bus.register_handler(topics.PLATFORM_STORAGE_STATS_REQUEST, _handle_storage)
        bus.register_handler(topics.PLATFORM_BATTERY_USAGE_REQUEST, _handle_battery)
        bus.register_handler(topics.PLATFORM_RUNNING_GET_REQUEST, _handle_running)


__all__ = ["FixturePlatform", "load_fixture"]
