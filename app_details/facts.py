from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class AppFacts:
    """Snapshot of one app as seen by the current user."""

    package_name: str
    enabled: bool = True
    installed_for_user: bool = False
    user_id: int = 0
    system_app: bool = False
    updated_system_app: bool = False


@dataclass(frozen=True)
class StorageStats:
    total_bytes: int
    is_external: bool = False


@dataclass(frozen=True)
class BatteryUsage:
    package_name: str
    percent_of_total: float = 0.0


class AdminContext(Protocol):
    def has_active_admins(self, package_name: str) -> bool:
        ...


class UserContext(Protocol):
    def user_count(self) -> int:
        ...


class StorageSource(Protocol):
    def get_stats(self, package_name: str, user_id: int) -> Optional[StorageStats]:
        ...


class PackageRegistry(Protocol):
    def resolve(self, package_name: str, user_id: int) -> Optional[AppFacts]:
        ...


class BatterySource(Protocol):
    def get_usage(self, package_name: str, user_id: int) -> Optional[BatteryUsage]:
        ...


class ProcessState(Protocol):
    def is_running(self, package_name: str) -> bool:
        ...


def facts_from_record(record: dict, *, user_id: int = 0) -> Optional[AppFacts]:
    """Build facts from a registry payload; None when the record has no package."""
    package_name = record.get("package_name") or record.get("package")
    if not package_name or not isinstance(package_name, str):
        return None
    installed_users = record.get("installed_users")
    if isinstance(installed_users, list):
        installed = user_id in installed_users
    else:
        installed = bool(record.get("installed_for_user", False))
    return AppFacts(
        package_name=package_name,
        enabled=bool(record.get("enabled", True)),
        installed_for_user=installed,
        user_id=user_id,
        system_app=bool(record.get("system_app", False)),
        updated_system_app=bool(record.get("updated_system_app", False)),
    )


__all__ = [
    "AppFacts",
    "StorageStats",
    "BatteryUsage",
    "AdminContext",
    "UserContext",
    "StorageSource",
    "PackageRegistry",
    "BatterySource",
    "ProcessState",
    "facts_from_record",
]
