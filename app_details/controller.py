from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol

from runtime_bus import topics

from .details_policy import resolve_policy, storage_decimals
from .disable_policy import disable_action_label
from .facts import (
    AdminContext,
    AppFacts,
    BatterySource,
    BatteryUsage,
    PackageRegistry,
    ProcessState,
    StorageSource,
    UserContext,
)
from .force_stop_policy import should_show_force_stop
from .instant_buttons import InstantAppButtons, InstantButtonsFactory
from .instant_gate import InstantAppGate, get_default_gate
from .storage_formatter import format_battery_summary, format_storage_summary
from .uninstall_policy import should_show_uninstall, should_show_uninstall_for_all

logger = logging.getLogger(__name__)

ELEMENT_UNINSTALL = "uninstall_button"
ELEMENT_UNINSTALL_ALL = "uninstall_all_button"
ELEMENT_FORCE_STOP = "force_stop_button"
ELEMENT_DISABLE = "disable_button"
ELEMENT_STORAGE_SUMMARY = "storage_summary"
ELEMENT_BATTERY_SUMMARY = "battery_summary"
ELEMENT_INSTANT_BUTTONS = "instant_app_buttons"

PREF_BATTERY = "battery"

BUS_SOURCE = "app_details"


class DetailsState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class ElementResolver(Protocol):
    """Looks up a named UI element owned by the rendering layer."""

    def find_element(self, key: str) -> Optional[Any]:
        ...


@dataclass(frozen=True)
class DetailsDecisions:
    package_name: str
    instant: bool
    show_uninstall: bool
    show_uninstall_for_all: bool
    show_force_stop: bool
    disable_label: Optional[str] = None
    storage_summary: Optional[str] = None
    battery_summary: Optional[str] = None

    def to_payload(self) -> Dict[str, object]:
        return asdict(self)


class DetailsController:
    """Holds the current app's facts and turns them into UI decisions.

    Every collaborator is passed in; nothing is looked up globally except the
    process-wide instant-app gate when no gate is given.
    """

    def __init__(
        self,
        *,
        registry: PackageRegistry,
        admin: AdminContext,
        users: UserContext,
        storage: StorageSource,
        gate: Optional[InstantAppGate] = None,
        instant_buttons_factory: Optional[InstantButtonsFactory] = None,
        element_resolver: Optional[ElementResolver] = None,
        bus: Any = None,
        on_abort: Optional[Callable[[], None]] = None,
        battery: Optional[BatterySource] = None,
        battery_launcher: Optional[Callable[[BatteryUsage], None]] = None,
        process_state: Optional[ProcessState] = None,
        policy: Optional[Dict[str, object]] = None,
    ) -> None:
        self.registry = registry
        self.admin = admin
        self.users = users
        self.storage = storage
        self.gate = gate or get_default_gate()
        self.instant_buttons_factory = instant_buttons_factory
        self.element_resolver = element_resolver
        self.bus = bus
        self.on_abort = on_abort
        self.battery = battery
        self.battery_launcher = battery_launcher
        self.process_state = process_state
        self.policy = policy if policy is not None else resolve_policy()

        self._state = DetailsState.UNRESOLVED
        self._package_name: Optional[str] = None
        self._user_id = 0
        self._facts: Optional[AppFacts] = None
        self._abort_signalled = False
        self._instant_buttons: Optional[InstantAppButtons] = None
        self._battery_usage: Optional[BatteryUsage] = None

    @property
    def state(self) -> DetailsState:
        return self._state

    @property
    def facts(self) -> Optional[AppFacts]:
        return self._facts

    @property
    def instant_buttons(self) -> Optional[InstantAppButtons]:
        return self._instant_buttons

    def resolve(self, package_name: str, user_id: int = 0) -> bool:
        # Forget the previous identity before looking up the new one.
        self._package_name = package_name
        self._user_id = user_id
        self._facts = None
        self._state = DetailsState.UNRESOLVED
        self._abort_signalled = False
        self._instant_buttons = None
        self._battery_usage = None
        facts = self.registry.resolve(package_name, user_id) if package_name else None
        if facts is None:
            logger.info("app details: no record for package=%s user=%s", package_name, user_id)
            return False
        self._facts = facts
        self._state = DetailsState.RESOLVED
        return True

    def ensure_facts_available(self) -> bool:
        """False (and a single close request) when no app record was resolved."""
        if self._facts is not None:
            return True
        if not self._abort_signalled:
            self._abort_signalled = True
            logger.info("app details: closing, package=%s unavailable", self._package_name)
            if self.on_abort:
                self.on_abort()
            if self.bus:
                self.bus.publish(
                    topics.APP_DETAILS_CLOSE_REQUEST,
                    {"package_name": self._package_name, "reason": "package_not_found"},
                    source=BUS_SOURCE,
                )
        return False

    def compute_decisions(self, running: Optional[bool] = None) -> DetailsDecisions:
        facts = self._facts
        if facts is None:
            raise RuntimeError("app facts not resolved; call ensure_facts_available() first")
        gate = self.gate.pinned()
        package_name = facts.package_name
        if running is None:
            running = self.process_state.is_running(package_name) if self.process_state else True

        decisions = DetailsDecisions(
            package_name=package_name,
            instant=gate.is_instant(package_name),
            show_uninstall=should_show_uninstall(facts, self.admin, gate),
            show_uninstall_for_all=should_show_uninstall_for_all(facts, self.admin, self.users, gate),
            show_force_stop=should_show_force_stop(facts, self.admin, gate, running=running),
            disable_label=disable_action_label(facts, self.admin, gate),
            storage_summary=self._storage_summary(facts),
            battery_summary=self._battery_summary(facts),
        )
        if self.policy.get("log_decisions", True):
            logger.debug("app details decisions: %s", decisions.to_payload())
        if self.bus:
            self.bus.publish(topics.APP_DETAILS_DECISIONS_READY, decisions.to_payload(), source=BUS_SOURCE)
        return decisions

    def apply_decisions(self, decisions: DetailsDecisions) -> None:
        self._set_visible(ELEMENT_UNINSTALL, decisions.show_uninstall)
        self._set_visible(ELEMENT_UNINSTALL_ALL, decisions.show_uninstall_for_all)
        self._set_visible(ELEMENT_FORCE_STOP, decisions.show_force_stop)
        self._set_text(ELEMENT_DISABLE, decisions.disable_label)
        self._set_text(ELEMENT_STORAGE_SUMMARY, decisions.storage_summary)
        self._set_text(ELEMENT_BATTERY_SUMMARY, decisions.battery_summary)

    def render(self, running: Optional[bool] = None) -> Optional[DetailsDecisions]:
        if not self.ensure_facts_available():
            return None
        decisions = self.compute_decisions(running)
        self.apply_decisions(decisions)
        if decisions.instant:
            self.maybe_add_instant_app_buttons(instant=True)
        return decisions

    def maybe_add_instant_app_buttons(self, instant: Optional[bool] = None) -> Optional[InstantAppButtons]:
        """Attach the instant-app buttons once.

        ``instant`` is the answer already read for this render; when omitted
        the gate is consulted here.
        """
        facts = self._facts
        if facts is None:
            return None
        if instant is None:
            instant = self.gate.is_instant(facts.package_name)
        if not instant:
            return None
        if self._instant_buttons is not None:
            return self._instant_buttons
        if self.instant_buttons_factory is None:
            return None
        element = self._find(ELEMENT_INSTANT_BUTTONS)
        buttons = self.instant_buttons_factory(element).set_package_name(facts.package_name)
        buttons.show()
        self._instant_buttons = buttons
        return buttons

    def create_dialog(self, dialog_id: str) -> Optional[Any]:
        """Forward to the instant-app buttons; None unless the current app is instant."""
        buttons = self._instant_buttons
        facts = self._facts
        if buttons is None or facts is None:
            return None
        if not self.gate.is_instant(facts.package_name):
            return None
        return buttons.create_dialog(dialog_id)

    delegate_instant_buttons = create_dialog

    def on_preference_click(self, key: str) -> bool:
        if key != PREF_BATTERY:
            return False
        usage = self._battery_usage
        if usage is None:
            return False
        if self.battery_launcher:
            self.battery_launcher(usage)
        if self.bus:
            self.bus.publish(
                topics.APP_DETAILS_BATTERY_OPEN_REQUEST,
                {"package_name": usage.package_name, "percent": usage.percent_of_total},
                source=BUS_SOURCE,
            )
        return True

    def _storage_summary(self, facts: AppFacts) -> Optional[str]:
        ui = self.policy.get("ui")
        if isinstance(ui, dict) and not ui.get("show_storage_summary", True):
            return None
        stats = self.storage.get_stats(facts.package_name, facts.user_id)
        if stats is None:
            return None
        return format_storage_summary(stats.total_bytes, stats.is_external, storage_decimals(self.policy))

    def _battery_summary(self, facts: AppFacts) -> Optional[str]:
        if self.battery is None:
            return None
        self._battery_usage = self.battery.get_usage(facts.package_name, facts.user_id)
        if self._battery_usage is None:
            return None
        return format_battery_summary(self._battery_usage.percent_of_total)

    def _find(self, key: str) -> Optional[Any]:
        if self.element_resolver is None:
            return None
        return self.element_resolver.find_element(key)

    def _set_visible(self, key: str, visible: bool) -> None:
        element = self._find(key)
        if element is not None:
            element.setVisible(visible)

    def _set_text(self, key: str, text: Optional[str]) -> None:
        element = self._find(key)
        if element is None:
            return
        if text:
            element.setText(text)
        element.setVisible(bool(text))


__all__ = [
    "DetailsController",
    "DetailsDecisions",
    "DetailsState",
    "ElementResolver",
    "ELEMENT_UNINSTALL",
    "ELEMENT_UNINSTALL_ALL",
    "ELEMENT_FORCE_STOP",
    "ELEMENT_DISABLE",
    "ELEMENT_STORAGE_SUMMARY",
    "ELEMENT_BATTERY_SUMMARY",
    "ELEMENT_INSTANT_BUTTONS",
    "PREF_BATTERY",
]
