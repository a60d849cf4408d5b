"""Deferred-callback schedulers and randomness used by the study engines.

The flashcard navigator commits page transitions through a ``Scheduler`` so
the service can run them on the asyncio loop while tests advance a
``ManualScheduler`` by hand.
"""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from typing import Any, Callable, MutableSequence, Protocol, Sequence, TypeVar

T = TypeVar("T")


class Randomizer(Protocol):
    """Capability to sample and permute; ``random.Random`` satisfies it."""

    def sample(self, population: Sequence[T], k: int) -> list[T]: ...

    def shuffle(self, x: MutableSequence[Any]) -> None: ...


def default_randomizer() -> Randomizer:
    return random.Random()


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AsyncioScheduler:
    """Runs callbacks on the running event loop via ``loop.call_later``."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        loop = asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay), callback)


@dataclass
class _ManualTimer:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Virtual clock; callbacks only fire when ``advance`` passes their due time."""

    now: float = 0.0
    _timers: list[_ManualTimer] = field(default_factory=list, repr=False)

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        timer = _ManualTimer(due=self.now + max(0.0, delay), callback=callback)
        self._timers.append(timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire due callbacks in due order."""
        self.now += seconds
        fired = 0
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due <= self.now]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self._timers.remove(timer)
            timer.callback()
            fired += 1
        self._timers = [t for t in self._timers if not t.cancelled]
        return fired

    def run_all(self) -> int:
        """Fire every outstanding callback regardless of its due time."""
        if not self._timers:
            return 0
        latest = max(t.due for t in self._timers)
        return self.advance(max(0.0, latest - self.now))
