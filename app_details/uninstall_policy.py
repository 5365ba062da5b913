from __future__ import annotations

from .facts import AdminContext, AppFacts, UserContext
from .instant_gate import InstantAppGate


def should_show_uninstall_for_all(
    facts: AppFacts,
    admin: AdminContext,
    users: UserContext,
    gate: InstantAppGate,
) -> bool:
    """Offer "uninstall for all users" only to clean up an install left on other users."""
    if gate.is_instant(facts.package_name):
        return False
    if admin.has_active_admins(facts.package_name):
        return False
    if users.user_count() <= 1:
        return False
    # Installed for the current user too: the regular uninstall covers it.
    if facts.installed_for_user:
        return False
    return True


def should_show_uninstall(
    facts: AppFacts,
    admin: AdminContext,
    gate: InstantAppGate,
) -> bool:
    if gate.is_instant(facts.package_name):
        return False
    if admin.has_active_admins(facts.package_name):
        return False
    if not facts.installed_for_user:
        return False
    if facts.system_app and not facts.updated_system_app:
        return False
    return True


__all__ = ["should_show_uninstall_for_all", "should_show_uninstall"]
