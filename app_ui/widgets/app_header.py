from __future__ import annotations

from typing import Callable, Optional

from PyQt6 import QtWidgets


class AppHeader(QtWidgets.QWidget):
    """Shared header with Back + title + subtitle and trailing action widgets."""

    def __init__(
        self,
        *,
        title: str,
        on_back: Optional[Callable[[], None]],
        subtitle: str = "",
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        if on_back:
            back_btn = QtWidgets.QPushButton("Back")
            back_btn.clicked.connect(on_back)
            layout.addWidget(back_btn)

        titles = QtWidgets.QVBoxLayout()
        self.title_label = QtWidgets.QLabel(title)
        self.title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        titles.addWidget(self.title_label)
        self.subtitle_label = QtWidgets.QLabel(subtitle)
        self.subtitle_label.setStyleSheet("color: #7a7a7a;")
        self.subtitle_label.setVisible(bool(subtitle))
        titles.addWidget(self.subtitle_label)
        layout.addLayout(titles)
        layout.addStretch()

        self._actions_layout = QtWidgets.QHBoxLayout()
        self._actions_layout.setContentsMargins(0, 0, 0, 0)
        self._actions_layout.setSpacing(6)
        layout.addLayout(self._actions_layout)

    def set_subtitle(self, text: str) -> None:
        self.subtitle_label.setText(text)
        self.subtitle_label.setVisible(bool(text))

    def add_action_widget(self, widget: QtWidgets.QWidget) -> None:
        self._actions_layout.addWidget(widget)
