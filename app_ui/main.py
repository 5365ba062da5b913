from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from PyQt6 import QtWidgets

from app_details.fixture_platform import FixturePlatform
from app_details.instant_gate import install_default_gate
from diagnostics.logging_setup import configure_logging, get_logger
from runtime_bus import RuntimeBus

from . import config as ui_config
from .screens.app_details import AppDetailsScreen


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show the details screen for one installed app.")
    parser.add_argument("package", nargs="?", default=None, help="package name to open")
    parser.add_argument("--apps", type=Path, default=None, help="JSON app list served as the platform")
    parser.add_argument("--user", type=int, default=None, help="current user id")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    logger = get_logger()

    config = ui_config.load_ui_config()
    package_name = args.package or config.get("last_package") or ""
    user_id = args.user if args.user is not None else ui_config.get_user_id()
    fixture_path = args.apps or ui_config.get_fixture_path()

    bus = RuntimeBus()
    platform = FixturePlatform.from_path(fixture_path)
    platform.register(bus)
    install_default_gate(platform.is_instant)
    logger.info("opening app details package=%s user=%s fixture=%s", package_name, user_id, fixture_path)

    app = QtWidgets.QApplication(sys.argv[:1])
    window = QtWidgets.QMainWindow()
    window.setWindowTitle("App info")
    screen = AppDetailsScreen(window.close, bus, package_name=package_name, user_id=user_id)
    window.setCentralWidget(screen)
    if screen.refresh() is not None and package_name:
        ui_config.remember_package(package_name)
    window.resize(640, 360)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
