"""Multiple-choice quiz over a vocabulary sequence.

Each question shows a term and asks for its definition among the correct one
and up to ``option_count - 1`` distractors drawn from the other records. A
wrong answer must be retried: the question only advances once it has been
answered correctly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from app.core.logging import get_logger
from app.modules.study.events import (
    CompleteCallback,
    NotificationKind,
    NotifyCallback,
    emit,
)
from app.modules.study.scheduling import Randomizer, default_randomizer
from app.modules.vocab.models import VocabularyRecord

logger = get_logger(__name__)

DEFAULT_OPTION_COUNT = 4


def next_question(
    order: Sequence[VocabularyRecord],
    position: int,
    *,
    rng: Optional[Randomizer] = None,
    option_count: int = DEFAULT_OPTION_COUNT,
) -> list[str]:
    """Build the shuffled answer options for ``order[position]``."""
    rng = rng or default_randomizer()
    current = order[position]
    correct = current.definition

    # Unique definitions of the other records, first occurrence wins
    candidates: list[str] = []
    for record in order:
        if record.id == current.id or record.definition == correct:
            continue
        if record.definition not in candidates:
            candidates.append(record.definition)

    k = min(max(option_count - 1, 0), len(candidates))
    options = [correct] + rng.sample(candidates, k)
    rng.shuffle(options)
    return options


@dataclass
class QuizSession:
    order: tuple[VocabularyRecord, ...]
    rng: Randomizer = field(default_factory=default_randomizer, repr=False)
    notify: Optional[NotifyCallback] = None
    on_complete: Optional[CompleteCallback] = None
    option_count: int = DEFAULT_OPTION_COUNT
    position: int = 0
    current_options: list[str] = field(default_factory=list)
    selected: Optional[str] = None
    correct_count: int = 0
    completed: bool = False

    @classmethod
    def start(
        cls,
        vocabulary: Sequence[VocabularyRecord],
        *,
        rng: Optional[Randomizer] = None,
        notify: Optional[NotifyCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
        option_count: int = DEFAULT_OPTION_COUNT,
    ) -> "QuizSession":
        session = cls(
            order=tuple(vocabulary),
            rng=rng or default_randomizer(),
            notify=notify,
            on_complete=on_complete,
            option_count=option_count,
        )
        session._load_question()
        return session

    @property
    def is_empty(self) -> bool:
        return not self.order

    @property
    def current(self) -> Optional[VocabularyRecord]:
        if self.is_empty:
            return None
        return self.order[self.position]

    @property
    def is_correct(self) -> Optional[bool]:
        if self.selected is None or self.current is None:
            return None
        return self.selected == self.current.definition

    def select(self, option: str) -> Optional[bool]:
        """Record the first answer for the current question.

        Returns the correctness of the stored answer, or None when the
        selection was ignored.
        """
        if self.is_empty or self.completed or self.selected is not None:
            return None
        if option not in self.current_options:
            return None
        self.selected = option
        correct = self.is_correct
        emit(
            self.notify,
            NotificationKind.CORRECT_ANSWER
            if correct
            else NotificationKind.INCORRECT_ANSWER,
        )
        return correct

    def advance(self) -> None:
        if self.is_empty or self.completed or self.selected is None:
            return
        if not self.is_correct:
            self.selected = None
            return

        self.correct_count += 1
        if self.position < len(self.order) - 1:
            self.position += 1
            self._load_question()
            return

        self.completed = True
        logger.debug(
            "Quiz completed with %d/%d correct", self.correct_count, len(self.order)
        )
        if self.on_complete is not None:
            self.on_complete()

    def _load_question(self) -> None:
        self.selected = None
        if self.is_empty:
            self.current_options = []
            return
        self.current_options = next_question(
            self.order, self.position, rng=self.rng, option_count=self.option_count
        )
