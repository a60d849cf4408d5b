"""In-memory study session manager.

Sessions are kept in-process only. Each session owns one engine (flashcards,
multiple choice or matching) and buffers the notifications it raises until
the API layer drains them into a response. Idle sessions are swept by a
background loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Union
from uuid import uuid4

from app.core.config import StudySettings, settings
from app.core.logging import get_logger
from app.modules.study.events import Notification
from app.modules.study.flashcards import FlashcardSession
from app.modules.study.matching import MatchingSession
from app.modules.study.models import (
    FlashcardState,
    MatchState,
    MatchTileState,
    QuizState,
    SessionState,
    StudyMode,
)
from app.modules.study.quiz import QuizSession
from app.modules.study.scheduling import (
    AsyncioScheduler,
    Randomizer,
    Scheduler,
    default_randomizer,
)
from app.modules.vocab.models import VocabularyRecord

logger = get_logger(__name__)

Engine = Union[FlashcardSession, QuizSession, MatchingSession]


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def _short_id() -> str:
    # 12-char slice from uuid4
    return uuid4().hex[:12]


@dataclass
class StudySession:
    id: str
    mode: StudyMode
    created_at: datetime = field(default_factory=_now_utc)
    last_activity: datetime = field(default_factory=_now_utc)
    finished: bool = False
    engine: Optional[Engine] = field(default=None, repr=False)
    _notifications: list[Notification] = field(default_factory=list, repr=False)

    # Engine callbacks ---------------------------------------------------
    def notify(self, notification: Notification) -> None:
        self._notifications.append(notification)

    def mark_finished(self) -> None:
        self.finished = True
        logger.info(
            "Study session finished",
            extra={"session_id": self.id, "mode": self.mode.value},
        )

    def touch(self) -> None:
        self.last_activity = _now_utc()

    def drain_notifications(self) -> list[Notification]:
        out, self._notifications = self._notifications, []
        return out

    # Snapshot -----------------------------------------------------------
    def to_state(self, *, drain: bool = True) -> SessionState:
        engine = self.engine
        state = SessionState(
            id=self.id,
            mode=self.mode,
            finished=self.finished,
            created_at=_iso(self.created_at),
            notifications=(
                self.drain_notifications() if drain else list(self._notifications)
            ),
        )
        if isinstance(engine, FlashcardSession):
            state.empty = engine.is_empty
            state.completed = engine.completed
            state.flashcards = FlashcardState(
                position=engine.position,
                total=len(engine.order),
                revealed=engine.revealed,
                pending_direction=(
                    engine.pending_direction.value if engine.pending_direction else None
                ),
                card=engine.current,
            )
        elif isinstance(engine, QuizSession):
            current = engine.current
            state.empty = engine.is_empty
            state.completed = engine.completed
            state.quiz = QuizState(
                position=engine.position,
                total=len(engine.order),
                term=current.term if current else None,
                example=current.example if current else "",
                options=list(engine.current_options),
                selected=engine.selected,
                is_correct=engine.is_correct,
                correct_count=engine.correct_count,
            )
        elif isinstance(engine, MatchingSession):
            state.empty = engine.is_empty
            state.completed = engine.completed
            state.matching = MatchState(
                tiles=[
                    MatchTileState(
                        id=t.id, text=t.display_text, side=t.side.value, matched=t.matched
                    )
                    for t in engine.tiles
                ],
                selected=engine.selected.id if engine.selected else None,
                matched_pair_count=engine.matched_pair_count,
                pair_count=engine.pair_count,
            )
        return state


class StudySessionManager:
    def __init__(
        self,
        study: Optional[StudySettings] = None,
        *,
        scheduler_factory: Callable[[], Scheduler] = AsyncioScheduler,
        rng_factory: Callable[[], Randomizer] = default_randomizer,
    ) -> None:
        self.study = study or StudySettings()
        self.sessions: dict[str, StudySession] = {}
        self._scheduler_factory = scheduler_factory
        self._rng_factory = rng_factory
        self._cleanup_task: Optional[asyncio.Task] = None
        self._idle_seconds: int = self.study.session_idle_seconds
        self._sweep_interval: int = self.study.session_sweep_interval

    # Session lifecycle --------------------------------------------------
    def create_session(
        self, mode: StudyMode, vocabulary: Sequence[VocabularyRecord]
    ) -> StudySession:
        session = StudySession(id=_short_id(), mode=mode)
        if mode == StudyMode.FLASHCARDS:
            session.engine = FlashcardSession.start(
                vocabulary,
                scheduler=self._scheduler_factory(),
                on_complete=session.mark_finished,
                transition_seconds=self.study.flashcard_transition_seconds,
                swipe_threshold=self.study.swipe_threshold_px,
            )
        elif mode == StudyMode.MULTIPLE_CHOICE:
            session.engine = QuizSession.start(
                vocabulary,
                rng=self._rng_factory(),
                notify=session.notify,
                on_complete=session.mark_finished,
                option_count=self.study.quiz_option_count,
            )
        else:
            session.engine = MatchingSession.initialize(
                vocabulary,
                rng=self._rng_factory(),
                notify=session.notify,
                on_complete=session.mark_finished,
                pair_limit=self.study.match_pair_limit,
            )
        self.sessions[session.id] = session
        logger.info(
            "Study session started with %d records",
            len(vocabulary),
            extra={"session_id": session.id, "mode": mode.value},
        )
        return session

    def get_session(self, session_id: str) -> Optional[StudySession]:
        return self.sessions.get(session_id)

    def require(self, session_id: str, mode: Optional[StudyMode] = None) -> StudySession:
        session = self.sessions.get(session_id)
        if not session:
            raise ValueError("session_not_found")
        if mode is not None and session.mode != mode:
            raise ValueError("wrong_mode")
        session.touch()
        return session

    def end_session(self, session_id: str) -> bool:
        session = self.sessions.pop(session_id, None)
        if not session:
            return False
        if isinstance(session.engine, FlashcardSession):
            session.engine.close()
        logger.info(
            "Study session ended",
            extra={"session_id": session.id, "mode": session.mode.value},
        )
        return True

    def sweep_idle(self, now: Optional[datetime] = None) -> list[str]:
        """Drop sessions idle for longer than the configured limit."""
        now = now or _now_utc()
        to_delete = [
            sid
            for sid, s in self.sessions.items()
            if (now - s.last_activity).total_seconds() > self._idle_seconds
        ]
        for sid in to_delete:
            self.end_session(sid)
        if to_delete:
            logger.info("Swept %d idle study sessions", len(to_delete))
        return to_delete

    # Cleanup loop -------------------------------------------------------
    def start(
        self, *, idle_seconds: Optional[int] = None, sweep_interval: Optional[int] = None
    ) -> None:
        if idle_seconds is not None:
            self._idle_seconds = max(60, int(idle_seconds))
        if sweep_interval is not None:
            self._sweep_interval = max(5, int(sweep_interval))
        if self._cleanup_task and not self._cleanup_task.done():
            return
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop(self) -> None:
        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
        self._cleanup_task = None

    async def _cleanup_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._sweep_interval)
                self.sweep_idle()
        except asyncio.CancelledError:
            return


# Singleton manager used by the API layer
study_manager = StudySessionManager(settings.study)
