from __future__ import annotations

import threading
from typing import Callable, Optional

InstantPredicate = Callable[[str], bool]


def _never_instant(_package_name: str) -> bool:
    return False


class InstantAppGate:
    """Answers "is this package an instant app?" through one swappable predicate.

    Replacement is a whole-value swap under a lock. Readers take a single
    snapshot of the predicate per call, so a decision already running keeps
    the predicate it started with.
    """

    def __init__(self, predicate: Optional[InstantPredicate] = None) -> None:
        self._lock = threading.Lock()
        self._predicate: InstantPredicate = predicate or _never_instant

    def replace(self, predicate: Optional[InstantPredicate]) -> None:
        new_predicate = predicate or _never_instant
        with self._lock:
            self._predicate = new_predicate

    def snapshot(self) -> InstantPredicate:
        with self._lock:
            return self._predicate

    def pinned(self) -> "InstantAppGate":
        """A gate frozen to the current predicate, for one multi-policy render."""
        return InstantAppGate(self.snapshot())

    def is_instant(self, package_name: str) -> bool:
        predicate = self.snapshot()
        return bool(predicate(package_name))


_DEFAULT_GATE: Optional[InstantAppGate] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_gate() -> InstantAppGate:
    global _DEFAULT_GATE
    with _DEFAULT_LOCK:
        if _DEFAULT_GATE is None:
            _DEFAULT_GATE = InstantAppGate()
    return _DEFAULT_GATE


def install_default_gate(predicate: Optional[InstantPredicate]) -> InstantAppGate:
    """Swap the predicate of the process-wide gate (platform start-up only)."""
    gate = get_default_gate()
    gate.replace(predicate)
    return gate


__all__ = ["InstantAppGate", "InstantPredicate", "get_default_gate", "install_default_gate"]
