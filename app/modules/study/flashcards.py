"""Flashcard navigator: linear paging with a flip state.

Moving between cards is a two-phase transition. ``next``/``previous`` only
record the requested direction; the scheduler later commits it, and only
then do ``position`` and ``revealed`` change. While a transition is pending,
further navigation requests are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from app.core.logging import get_logger
from app.modules.study.events import CompleteCallback
from app.modules.study.scheduling import Cancellable, Scheduler
from app.modules.vocab.models import VocabularyRecord

logger = get_logger(__name__)

DEFAULT_TRANSITION_SECONDS = 0.3
DEFAULT_SWIPE_THRESHOLD = 50.0


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class GestureAction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    FLIP = "flip"


def classify_gesture(
    start_x: float,
    end_x: Optional[float],
    threshold: float = DEFAULT_SWIPE_THRESHOLD,
) -> GestureAction:
    """Map a horizontal touch gesture to a navigator action.

    Swiping left (start right of end) past the threshold goes forward,
    swiping right goes back; anything shorter, or a plain tap, flips.
    """
    if end_x is None:
        return GestureAction.FLIP
    distance = start_x - end_x
    if distance > threshold:
        return GestureAction.NEXT
    if distance < -threshold:
        return GestureAction.PREVIOUS
    return GestureAction.FLIP


@dataclass
class FlashcardSession:
    order: tuple[VocabularyRecord, ...]
    scheduler: Scheduler
    on_complete: Optional[CompleteCallback] = None
    transition_seconds: float = DEFAULT_TRANSITION_SECONDS
    swipe_threshold: float = DEFAULT_SWIPE_THRESHOLD
    position: int = 0
    revealed: bool = False
    completed: bool = False
    pending_direction: Optional[Direction] = None
    _timer: Optional[Cancellable] = field(default=None, repr=False)

    @classmethod
    def start(
        cls,
        vocabulary: Sequence[VocabularyRecord],
        *,
        scheduler: Scheduler,
        on_complete: Optional[CompleteCallback] = None,
        transition_seconds: float = DEFAULT_TRANSITION_SECONDS,
        swipe_threshold: float = DEFAULT_SWIPE_THRESHOLD,
    ) -> "FlashcardSession":
        return cls(
            order=tuple(vocabulary),
            scheduler=scheduler,
            on_complete=on_complete,
            transition_seconds=transition_seconds,
            swipe_threshold=swipe_threshold,
        )

    @property
    def is_empty(self) -> bool:
        return not self.order

    @property
    def current(self) -> Optional[VocabularyRecord]:
        if self.is_empty:
            return None
        return self.order[self.position]

    @property
    def in_transition(self) -> bool:
        return self.pending_direction is not None

    def flip(self) -> None:
        if self.is_empty:
            return
        self.revealed = not self.revealed

    def next(self) -> None:
        if self.is_empty or self.in_transition:
            return
        if self.position < len(self.order) - 1:
            self._request(Direction.FORWARD)
            return
        if not self.completed:
            self.completed = True
            logger.debug("Flashcard session completed at card %d", self.position)
            if self.on_complete is not None:
                self.on_complete()

    def previous(self) -> None:
        if self.is_empty or self.in_transition:
            return
        if self.position > 0:
            self._request(Direction.BACKWARD)

    def gesture(self, start_x: float, end_x: Optional[float] = None) -> GestureAction:
        action = classify_gesture(start_x, end_x, self.swipe_threshold)
        if action is GestureAction.NEXT:
            self.next()
        elif action is GestureAction.PREVIOUS:
            self.previous()
        else:
            self.flip()
        return action

    def commit_transition(self) -> None:
        """Apply the pending transition; called by the scheduler."""
        direction = self.pending_direction
        if direction is None:
            return
        step = 1 if direction is Direction.FORWARD else -1
        self.position = min(max(self.position + step, 0), len(self.order) - 1)
        self.revealed = False
        self.pending_direction = None
        self._timer = None

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self.pending_direction = None

    def _request(self, direction: Direction) -> None:
        self.pending_direction = direction
        self._timer = self.scheduler.call_later(
            self.transition_seconds, self.commit_transition
        )
