"""Collaborator interfaces backed by runtime bus requests.

Every adapter treats a failed or malformed response as the negative answer
("not found", "no admins", "single user", "no stats") and logs it once.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from runtime_bus import topics

from .facts import AppFacts, BatteryUsage, StorageStats, facts_from_record

logger = logging.getLogger(__name__)

SOURCE = "app_details"


class _BusAdapter:
    def __init__(self, bus: Any) -> None:
        self.bus = bus

    def _request(self, topic: str, payload: Dict[str, object]) -> Optional[Dict[str, Any]]:
        response = self.bus.request(topic, payload, source=SOURCE)
        if not response.get("ok"):
            logger.info("bus request %s failed: %s", topic, response.get("error") or "unknown")
            return None
        return response


class BusPackageRegistry(_BusAdapter):
    def resolve(self, package_name: str, user_id: int) -> Optional[AppFacts]:
        response = self._request(
            topics.PLATFORM_PACKAGE_RESOLVE_REQUEST,
            {"package_name": package_name, "user_id": user_id},
        )
        if response is None:
            return None
        record = response.get("app")
        if not isinstance(record, dict):
            return None
        return facts_from_record(record, user_id=user_id)


class BusAdminContext(_BusAdapter):
    def has_active_admins(self, package_name: str) -> bool:
        response = self._request(topics.PLATFORM_ADMINS_GET_REQUEST, {"package_name": package_name})
        if response is None:
            return False
        return bool(response.get("has_active_admins", False))


class BusUserContext(_BusAdapter):
    def user_count(self) -> int:
        response = self._request(topics.PLATFORM_USERS_COUNT_REQUEST, {})
        if response is None:
            return 1
        try:
            return max(1, int(response.get("count", 1)))
        except (TypeError, ValueError):
            return 1


class BusStorageSource(_BusAdapter):
    def get_stats(self, package_name: str, user_id: int) -> Optional[StorageStats]:
        response = self._request(
            topics.PLATFORM_STORAGE_STATS_REQUEST,
            {"package_name": package_name, "user_id": user_id},
        )
        if response is None:
            return None
        try:
            total = int(response.get("total_bytes"))
        except (TypeError, ValueError):
            return None
        if total < 0:
            return None
        return StorageStats(total_bytes=total, is_external=bool(response.get("is_external", False)))


class BusBatterySource(_BusAdapter):
    def get_usage(self, package_name: str, user_id: int) -> Optional[BatteryUsage]:
        response = self._request(
            topics.PLATFORM_BATTERY_USAGE_REQUEST,
            {"package_name": package_name, "user_id": user_id},
        )
        if response is None:
            return None
        try:
            percent = float(response.get("percent", 0.0))
        except (TypeError, ValueError):
            return None
        return BatteryUsage(package_name=package_name, percent_of_total=percent)


class BusProcessState(_BusAdapter):
    def is_running(self, package_name: str) -> bool:
        response = self._request(topics.PLATFORM_RUNNING_GET_REQUEST, {"package_name": package_name})
        if response is None:
            return False
        return bool(response.get("running", False))


__all__ = [
    "BusPackageRegistry",
    "BusAdminContext",
    "BusUserContext",
    "BusStorageSource",
    "BusBatterySource",
    "BusProcessState",
]
