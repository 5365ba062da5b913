from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

DLG_CLEAR_APP = "clear_app"
DLG_INSTALL_APP = "install_app"

INSTANT_DIALOG_IDS = (DLG_CLEAR_APP, DLG_INSTALL_APP)


class InstantAppButtons(Protocol):
    """Sub-controller owning the instant-app specific buttons and dialogs."""

    def set_package_name(self, package_name: str) -> "InstantAppButtons":
        ...

    def create_dialog(self, dialog_id: str) -> Optional[Any]:
        ...

    def show(self) -> "InstantAppButtons":
        ...


# Called with the resolved "instant_app_buttons" element.
InstantButtonsFactory = Callable[[Any], InstantAppButtons]


__all__ = [
    "DLG_CLEAR_APP",
    "DLG_INSTALL_APP",
    "INSTANT_DIALOG_IDS",
    "InstantAppButtons",
    "InstantButtonsFactory",
]
