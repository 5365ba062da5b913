from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from PyQt6 import QtCore, QtWidgets

from app_details.bus_adapters import (
    BusAdminContext,
    BusBatterySource,
    BusPackageRegistry,
    BusProcessState,
    BusStorageSource,
    BusUserContext,
)
from app_details.controller import (
    ELEMENT_BATTERY_SUMMARY,
    ELEMENT_DISABLE,
    ELEMENT_FORCE_STOP,
    ELEMENT_INSTANT_BUTTONS,
    ELEMENT_STORAGE_SUMMARY,
    ELEMENT_UNINSTALL,
    ELEMENT_UNINSTALL_ALL,
    PREF_BATTERY,
    DetailsController,
    DetailsDecisions,
)
from app_details.instant_buttons import DLG_CLEAR_APP, DLG_INSTALL_APP, INSTANT_DIALOG_IDS, InstantButtonsFactory
from app_details.instant_gate import InstantAppGate
from app_ui.widgets.app_header import AppHeader
from runtime_bus import topics as BUS_TOPICS


class InstantAppButtonsPanel:
    """Instant-app buttons living inside the screen's instant container."""

    def __init__(self, container: Optional[QtWidgets.QWidget]) -> None:
        self.container = container
        self.package_name: Optional[str] = None
        self.install_btn: Optional[QtWidgets.QPushButton] = None
        self.clear_btn: Optional[QtWidgets.QPushButton] = None
        if container is not None:
            layout = container.layout() or QtWidgets.QHBoxLayout(container)
            self.install_btn = QtWidgets.QPushButton("Install app")
            self.install_btn.clicked.connect(lambda: self._open(DLG_INSTALL_APP))
            self.clear_btn = QtWidgets.QPushButton("Clear app")
            self.clear_btn.clicked.connect(lambda: self._open(DLG_CLEAR_APP))
            layout.addWidget(self.install_btn)
            layout.addWidget(self.clear_btn)

    def set_package_name(self, package_name: str) -> "InstantAppButtonsPanel":
        self.package_name = package_name
        return self

    def show(self) -> "InstantAppButtonsPanel":
        if self.container is not None:
            self.container.setVisible(True)
        return self

    def create_dialog(self, dialog_id: str) -> Optional[QtWidgets.QMessageBox]:
        if dialog_id not in INSTANT_DIALOG_IDS:
            return None
        parent = self.container.window() if self.container is not None else None
        if dialog_id == DLG_CLEAR_APP:
            box = QtWidgets.QMessageBox(parent)
            box.setWindowTitle("Clear app")
            box.setText(f"Remove all data for {self.package_name or 'this app'}?")
            box.setStandardButtons(
                QtWidgets.QMessageBox.StandardButton.Ok | QtWidgets.QMessageBox.StandardButton.Cancel
            )
            return box
        box = QtWidgets.QMessageBox(parent)
        box.setWindowTitle("Install app")
        box.setText(f"Install the full version of {self.package_name or 'this app'}?")
        return box

    def _open(self, dialog_id: str) -> None:
        dialog = self.create_dialog(dialog_id)
        if dialog is not None:
            dialog.open()


class AppDetailsScreen(QtWidgets.QWidget):
    def __init__(
        self,
        on_back: Optional[Callable[[], None]],
        bus,
        *,
        package_name: str,
        user_id: int = 0,
        gate: Optional[InstantAppGate] = None,
        instant_buttons_factory: Optional[InstantButtonsFactory] = None,
        policy: Optional[Dict[str, object]] = None,
    ):
        super().__init__()
        self.on_back = on_back
        self.bus = bus
        self.package_name = package_name
        self.user_id = user_id
        self.closed = False
        self.decisions: Optional[DetailsDecisions] = None

        layout = QtWidgets.QVBoxLayout(self)
        self.header = AppHeader(title="App info", on_back=self.on_back, subtitle=package_name)
        refresh_btn = QtWidgets.QPushButton("Refresh")
        refresh_btn.clicked.connect(self.refresh)
        self.header.add_action_widget(refresh_btn)
        layout.addWidget(self.header)

        btn_row = QtWidgets.QHBoxLayout()
        self.uninstall_btn = QtWidgets.QPushButton("Uninstall")
        self.uninstall_btn.clicked.connect(lambda: self._request_action("uninstall"))
        self.uninstall_all_btn = QtWidgets.QPushButton("Uninstall for all users")
        self.uninstall_all_btn.clicked.connect(lambda: self._request_action("uninstall_all"))
        self.disable_btn = QtWidgets.QPushButton("Disable")
        self.disable_btn.clicked.connect(lambda: self._request_action(self.disable_btn.text().lower()))
        self.force_stop_btn = QtWidgets.QPushButton("Force stop")
        self.force_stop_btn.clicked.connect(lambda: self._request_action("force_stop"))
        for btn in (self.uninstall_btn, self.uninstall_all_btn, self.disable_btn, self.force_stop_btn):
            btn.setVisible(False)
            btn_row.addWidget(btn)
        btn_row.addStretch()
        layout.addLayout(btn_row)

        self.instant_container = QtWidgets.QFrame()
        QtWidgets.QHBoxLayout(self.instant_container)
        self.instant_container.setVisible(False)
        layout.addWidget(self.instant_container)

        self.storage_label = QtWidgets.QLabel("")
        self.storage_label.setVisible(False)
        layout.addWidget(self.storage_label)

        self.battery_btn = QtWidgets.QPushButton("")
        self.battery_btn.setFlat(True)
        self.battery_btn.setVisible(False)
        self.battery_btn.clicked.connect(lambda: self.controller.on_preference_click(PREF_BATTERY))
        layout.addWidget(self.battery_btn)
        layout.addStretch()

        self._elements: Dict[str, QtWidgets.QWidget] = {
            ELEMENT_UNINSTALL: self.uninstall_btn,
            ELEMENT_UNINSTALL_ALL: self.uninstall_all_btn,
            ELEMENT_FORCE_STOP: self.force_stop_btn,
            ELEMENT_DISABLE: self.disable_btn,
            ELEMENT_STORAGE_SUMMARY: self.storage_label,
            ELEMENT_BATTERY_SUMMARY: self.battery_btn,
            ELEMENT_INSTANT_BUTTONS: self.instant_container,
        }

        self.controller = DetailsController(
            registry=BusPackageRegistry(bus),
            admin=BusAdminContext(bus),
            users=BusUserContext(bus),
            storage=BusStorageSource(bus),
            gate=gate,
            instant_buttons_factory=instant_buttons_factory or InstantAppButtonsPanel,
            element_resolver=self,
            bus=bus,
            on_abort=self._close_screen,
            battery=BusBatterySource(bus),
            process_state=BusProcessState(bus),
            policy=policy,
        )

    def find_element(self, key: str) -> Optional[QtWidgets.QWidget]:
        return self._elements.get(key)

    def refresh(self) -> Optional[DetailsDecisions]:
        if self.closed:
            return None
        if self.controller.facts is None:
            self.controller.resolve(self.package_name, self.user_id)
        self.decisions = self.controller.render()
        return self.decisions

    def create_dialog(self, dialog_id: str) -> Optional[Any]:
        return self.controller.create_dialog(dialog_id)

    def _request_action(self, action: str) -> None:
        if not self.bus:
            return
        self.bus.publish(
            BUS_TOPICS.APP_DETAILS_ACTION_REQUEST,
            {"package_name": self.package_name, "user_id": self.user_id, "action": action},
            source="app_ui",
        )

    def _close_screen(self) -> None:
        self.closed = True
        if self.on_back:
            QtCore.QTimer.singleShot(0, self.on_back)
