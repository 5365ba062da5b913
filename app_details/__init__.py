"""Decision layer for the installed-app details screen."""

from .controller import DetailsController, DetailsDecisions, DetailsState
from .facts import AppFacts, BatteryUsage, StorageStats
from .instant_gate import InstantAppGate, get_default_gate, install_default_gate
from .storage_formatter import format_file_size, format_storage_summary

__all__ = [
    "AppFacts",
    "BatteryUsage",
    "StorageStats",
    "DetailsController",
    "DetailsDecisions",
    "DetailsState",
    "InstantAppGate",
    "get_default_gate",
    "install_default_gate",
    "format_file_size",
    "format_storage_summary",
]
