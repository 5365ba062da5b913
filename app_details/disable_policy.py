from __future__ import annotations

from typing import Optional

from .facts import AdminContext, AppFacts
from .instant_gate import InstantAppGate

DISABLE_LABEL = "Disable"
ENABLE_LABEL = "Enable"


def disable_action_label(
    facts: AppFacts,
    admin: AdminContext,
    gate: InstantAppGate,
) -> Optional[str]:
    """Label for the disable/enable action, or None when it is not offered.

    Only system apps are disabled instead of uninstalled.
    """
    if gate.is_instant(facts.package_name):
        return None
    if not facts.system_app:
        return None
    if admin.has_active_admins(facts.package_name):
        return None
    return DISABLE_LABEL if facts.enabled else ENABLE_LABEL


__all__ = ["DISABLE_LABEL", "ENABLE_LABEL", "disable_action_label"]
