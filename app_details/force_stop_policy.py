from __future__ import annotations

from .facts import AdminContext, AppFacts
from .instant_gate import InstantAppGate


def should_show_force_stop(
    facts: AppFacts,
    admin: AdminContext,
    gate: InstantAppGate,
    *,
    running: bool = True,
) -> bool:
    """Instant apps only run in the foreground, so they never get force-stop.

    ``running`` comes from whoever tracks process state; ``facts.enabled`` is
    not consulted.
    """
    if gate.is_instant(facts.package_name):
        return False
    if admin.has_active_admins(facts.package_name):
        return False
    return bool(running)


__all__ = ["should_show_force_stop"]
