import json

from app_details.bus_adapters import (
    BusAdminContext,
    BusBatterySource,
    BusPackageRegistry,
    BusProcessState,
    BusStorageSource,
    BusUserContext,
)
from app_details.facts import StorageStats, facts_from_record
from app_details.fixture_platform import FixturePlatform, load_fixture
from runtime_bus import RuntimeBus

FIXTURE = {
    "users": 2,
    "apps": [
        {
            "package_name": "com.example.notes",
            "installed_users": [10],
            "storage": {"total_bytes": 1, "is_external": True},
            "running": True,
            "battery_percent": 1.5,
        },
        {
            "package_name": "com.example.mdm",
            "installed_users": [0],
            "active_admins": True,
        },
        {"package_name": "instant.game", "installed_users": [0], "instant": True},
    ],
}


def _bus() -> RuntimeBus:
    bus = RuntimeBus()
    FixturePlatform(FIXTURE).register(bus)
    return bus


def test_registry_resolves_per_user_install_flag() -> None:
    registry = BusPackageRegistry(_bus())
    facts = registry.resolve("com.example.notes", 0)
    assert facts is not None
    assert facts.installed_for_user is False
    assert registry.resolve("com.example.notes", 10).installed_for_user is True
    assert registry.resolve("com.example.missing", 0) is None


def test_admins_users_storage_and_running() -> None:
    bus = _bus()
    assert BusAdminContext(bus).has_active_admins("com.example.mdm") is True
    assert BusAdminContext(bus).has_active_admins("com.example.notes") is False
    assert BusUserContext(bus).user_count() == 2
    assert BusStorageSource(bus).get_stats("com.example.notes", 0) == StorageStats(1, True)
    assert BusStorageSource(bus).get_stats("com.example.mdm", 0) is None
    assert BusProcessState(bus).is_running("com.example.notes") is True
    assert BusProcessState(bus).is_running("com.example.mdm") is False
    usage = BusBatterySource(bus).get_usage("com.example.notes", 0)
    assert usage is not None and usage.percent_of_total == 1.5
    assert BusBatterySource(bus).get_usage("com.example.mdm", 0) is None


def test_adapters_fall_back_without_handlers() -> None:
    bus = RuntimeBus()
    assert BusPackageRegistry(bus).resolve("com.example.notes", 0) is None
    assert BusAdminContext(bus).has_active_admins("com.example.notes") is False
    assert BusUserContext(bus).user_count() == 1
    assert BusStorageSource(bus).get_stats("com.example.notes", 0) is None


def test_storage_adapter_rejects_bad_totals() -> None:
    bus = RuntimeBus()
    bus.register_handler("platform.storage.stats.request", lambda env: {"ok": True, "total_bytes": -5})
    assert BusStorageSource(bus).get_stats("x", 0) is None
    bus.register_handler("platform.storage.stats.request", lambda env: {"ok": True, "total_bytes": "lots"})
    assert BusStorageSource(bus).get_stats("x", 0) is None


def test_instant_predicate_from_fixture() -> None:
    platform = FixturePlatform(FIXTURE)
    assert platform.is_instant("instant.game") is True
    assert platform.is_instant("com.example.notes") is False
    assert platform.is_instant("unknown") is False


def test_load_fixture_handles_missing_and_bad_files(tmp_path) -> None:
    assert load_fixture(tmp_path / "missing.json") == {"users": 1, "apps": []}
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_fixture(bad)["apps"] == []
    good = tmp_path / "apps.json"
    good.write_text(json.dumps(FIXTURE), encoding="utf-8")
    assert FixturePlatform.from_path(good).app("com.example.mdm")["active_admins"] is True


def test_facts_from_record() -> None:
    assert facts_from_record({}) is None
    facts = facts_from_record({"package": "p", "installed_for_user": True, "enabled": False})
    assert facts.package_name == "p"
    assert facts.installed_for_user is True
    assert facts.enabled is False
