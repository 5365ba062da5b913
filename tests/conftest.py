from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from app_details.facts import AppFacts, StorageStats  # noqa: E402


class FakeAdmin:
    def __init__(self, active: bool = False) -> None:
        self.active = active
        self.calls = 0

    def has_active_admins(self, package_name: str) -> bool:
        self.calls += 1
        return self.active


class FakeUsers:
    def __init__(self, count: int = 1) -> None:
        self.count = count

    def user_count(self) -> int:
        return self.count


class FakeStorage:
    def __init__(self, stats: Optional[StorageStats] = None) -> None:
        self.stats = stats

    def get_stats(self, package_name: str, user_id: int) -> Optional[StorageStats]:
        return self.stats


class FakeRegistry:
    def __init__(self, apps: Optional[Dict[str, AppFacts]] = None) -> None:
        self.apps = dict(apps or {})

    def resolve(self, package_name: str, user_id: int) -> Optional[AppFacts]:
        return self.apps.get(package_name)


@pytest.fixture()
def admin() -> FakeAdmin:
    return FakeAdmin()


@pytest.fixture()
def users() -> FakeUsers:
    return FakeUsers(2)
