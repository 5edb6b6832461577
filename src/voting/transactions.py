"""
voting.transactions — атомарные state transitions.

Каждый state-changing вызов orchestrator-а выполняется внутри
``TransitionGuard.atomic()``:

1. Reentrancy guard: вложенный state-changing вызов → ReentrantCall
2. Snapshot всех mutable компонентов (host ledger, Multiplier Store, Vote Ledger)
3. При любом исключении — restore всех snapshot-ов и re-raise

Usage::

    guard = TransitionGuard(ledger, store, votes)
    with guard.atomic("transfer"):
        ledger.apply_transfer(...)
        hook.after_transfer(...)
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from src.core.errors import ReentrantCall

logger = logging.getLogger(__name__)


class Snapshottable(Protocol):
    def snapshot(self) -> dict:
        ...

    def restore(self, state: dict) -> None:
        ...


class TransitionGuard:
    """Полностью коммитит transition либо полностью откатывает его."""

    def __init__(self, *components: Snapshottable):
        self._components = components
        self._active: Optional[str] = None

    @property
    def active(self) -> Optional[str]:
        """Имя выполняющегося transition (None если нет)."""
        return self._active

    @contextmanager
    def atomic(self, label: str) -> Iterator[None]:
        if self._active is not None:
            raise ReentrantCall(f"{label!r} called while {self._active!r} is in progress")

        snapshots = [component.snapshot() for component in self._components]
        self._active = label
        try:
            yield
        except Exception as exc:
            for component, state in zip(self._components, snapshots):
                component.restore(state)
            logger.warning("transition %s rolled back: %s: %s", label, type(exc).__name__, exc)
            raise
        finally:
            self._active = None
