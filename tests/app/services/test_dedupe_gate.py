"""Testes do gate de dedupe com relógio injetado."""

from __future__ import annotations

import pytest

from app.infra.stores import MemoryDedupeStore
from app.services.dedupe_gate import DedupeGate


class _Clock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now


def _gate(ttl: int = 600) -> tuple[DedupeGate, _Clock, MemoryDedupeStore]:
    clock = _Clock()
    store = MemoryDedupeStore(clock=clock)
    return DedupeGate(store, ttl_seconds=ttl), clock, store


def test_same_id_within_ttl_processed_once() -> None:
    gate, clock, _ = _gate()

    assert gate.should_process("evt-1") is True
    clock.now += 599
    assert gate.should_process("evt-1") is False


def test_same_id_after_ttl_processed_again() -> None:
    gate, clock, _ = _gate()

    assert gate.should_process("evt-1") is True
    clock.now += 600
    assert gate.should_process("evt-1") is True


def test_duplicate_does_not_extend_window() -> None:
    gate, clock, _ = _gate()

    gate.should_process("evt-1")
    clock.now += 500
    assert gate.should_process("evt-1") is False
    clock.now += 100
    assert gate.should_process("evt-1") is True


@pytest.mark.parametrize("notification_id", [None, ""])
def test_missing_id_always_processed(notification_id: str | None) -> None:
    gate, _, store = _gate()

    assert gate.should_process(notification_id) is True
    assert gate.should_process(notification_id) is True
    assert len(store) == 0


def test_release_allows_reprocessing() -> None:
    gate, _, _ = _gate()

    gate.should_process("evt-1")
    gate.release("evt-1")

    assert gate.should_process("evt-1") is True


def test_rejects_non_positive_ttl() -> None:
    with pytest.raises(ValueError):
        DedupeGate(MemoryDedupeStore(), ttl_seconds=0)
