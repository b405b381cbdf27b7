# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compute-once access to the identity of a live runtime."""

from __future__ import annotations

from collections.abc import Callable
from threading import Lock

from ..models import LiveSignals, RuntimeIdentity
from .resolver import Resolver

SignalProvider = Callable[[], LiveSignals]


class IdentityCell:
    """Slot published at most once; the first stored value wins.

    Concurrent first callers may each compute a value, but only the first one
    stored is ever returned, and nothing is recomputed once a value exists.
    """

    def __init__(self) -> None:
        self._value: RuntimeIdentity | None = None
        self._lock = Lock()

    def peek(self) -> RuntimeIdentity | None:
        """Return the published value without computing one."""

        return self._value

    def compare_and_set(self, value: RuntimeIdentity) -> RuntimeIdentity:
        """Publish ``value`` unless a value exists; return the published value."""

        with self._lock:
            if self._value is None:
                self._value = value
            return self._value

    def get_or_compute(self, factory: Callable[[], RuntimeIdentity]) -> RuntimeIdentity:
        """Return the published value, computing and publishing it when absent."""

        existing = self._value
        if existing is not None:
            return existing
        return self.compare_and_set(factory())


class RuntimeDetector:
    """Resolve the identity of one process and cache it for later callers."""

    def __init__(self, signals: SignalProvider, resolver: Resolver | None = None) -> None:
        self._signals = signals
        self._resolver = resolver if resolver is not None else Resolver()
        self._cell = IdentityCell()

    def detect(self) -> RuntimeIdentity:
        """Return the cached identity, resolving it on first use."""

        return self._cell.get_or_compute(self._compute)

    def _compute(self) -> RuntimeIdentity:
        return self._resolver.resolve(self._signals())


__all__ = ["IdentityCell", "RuntimeDetector", "SignalProvider"]
