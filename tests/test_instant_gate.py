import threading

from app_details import instant_gate
from app_details.instant_gate import InstantAppGate, get_default_gate, install_default_gate


def test_default_gate_is_never_instant() -> None:
    assert InstantAppGate().is_instant("com.example.any") is False


def test_replace_swaps_whole_predicate() -> None:
    gate = InstantAppGate()
    gate.replace(lambda pkg: pkg.startswith("instant."))
    assert gate.is_instant("instant.game") is True
    assert gate.is_instant("com.example.notes") is False
    gate.replace(None)
    assert gate.is_instant("instant.game") is False


def test_swap_only_affects_later_calls() -> None:
    gate = InstantAppGate()
    pinned = gate.pinned()
    before = gate.is_instant("com.example.notes")
    gate.replace(lambda _pkg: True)
    after = gate.is_instant("com.example.notes")
    assert before is False
    assert after is True
    assert pinned.is_instant("com.example.notes") is False


def test_swap_during_predicate_call_keeps_snapshot() -> None:
    gate = InstantAppGate()
    started = threading.Event()
    release = threading.Event()

    def slow_false(_pkg: str) -> bool:
        started.set()
        release.wait(2)
        return False

    gate.replace(slow_false)
    results = []
    worker = threading.Thread(target=lambda: results.append(gate.is_instant("com.example.notes")))
    worker.start()
    assert started.wait(2)
    gate.replace(lambda _pkg: True)
    release.set()
    worker.join(2)
    assert results == [False]
    assert gate.is_instant("com.example.notes") is True


def test_install_default_gate(monkeypatch) -> None:
    monkeypatch.setattr(instant_gate, "_DEFAULT_GATE", None)
    gate = install_default_gate(lambda _pkg: True)
    assert get_default_gate() is gate
    assert gate.is_instant("x") is True
