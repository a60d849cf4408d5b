"""Tests for the in-memory study session manager."""
from __future__ import annotations

from datetime import timedelta

import pytest

from app.modules.study.events import NotificationKind
from app.modules.study.models import StudyMode
from app.modules.study.sessions import StudySessionManager


class TestCreateSession:
    def test_flashcards_state(self, manager: StudySessionManager, animals):
        session = manager.create_session(StudyMode.FLASHCARDS, animals)
        state = session.to_state()
        assert state.mode is StudyMode.FLASHCARDS
        assert state.flashcards.total == 3
        assert state.flashcards.card.term == "gato"
        assert state.quiz is None
        assert manager.get_session(session.id) is session

    def test_quiz_state(self, manager, colors):
        session = manager.create_session(StudyMode.MULTIPLE_CHOICE, colors)
        state = session.to_state()
        assert state.quiz.term == "rojo"
        assert len(state.quiz.options) == 4
        assert "red" in state.quiz.options

    def test_matching_state(self, manager, animals):
        session = manager.create_session(StudyMode.MATCHING, animals)
        state = session.to_state()
        assert len(state.matching.tiles) == 6
        assert state.matching.pair_count == 3

    def test_empty_vocabulary_is_no_content(self, manager):
        for mode in StudyMode:
            state = manager.create_session(mode, []).to_state()
            assert state.empty is True
            assert state.completed is False


class TestSessionFlow:
    def test_notifications_are_drained(self, manager, animals):
        session = manager.create_session(StudyMode.MATCHING, animals)
        session.engine.select("term-v1")
        session.engine.select("def-v1")
        first = session.to_state()
        assert [n.kind for n in first.notifications] == [NotificationKind.MATCH_FOUND]
        assert session.to_state().notifications == []

    def test_completion_marks_finished(self, manager, animals, scheduler):
        session = manager.create_session(StudyMode.FLASHCARDS, animals)
        cards = session.engine
        for _ in animals:
            cards.next()
            scheduler.run_all()
        state = session.to_state()
        assert state.completed
        assert state.finished

    def test_pending_transition_is_visible(self, manager, animals, scheduler):
        session = manager.create_session(StudyMode.FLASHCARDS, animals)
        session.engine.next()
        assert session.to_state().flashcards.pending_direction == "forward"
        scheduler.run_all()
        state = session.to_state().flashcards
        assert state.pending_direction is None
        assert state.position == 1


class TestLookup:
    def test_require_unknown(self, manager):
        with pytest.raises(ValueError, match="session_not_found"):
            manager.require("missing")

    def test_require_wrong_mode(self, manager, animals):
        session = manager.create_session(StudyMode.MATCHING, animals)
        with pytest.raises(ValueError, match="wrong_mode"):
            manager.require(session.id, StudyMode.FLASHCARDS)

    def test_end_session(self, manager, animals, scheduler):
        session = manager.create_session(StudyMode.FLASHCARDS, animals)
        session.engine.next()
        assert manager.end_session(session.id) is True
        assert scheduler.run_all() == 0
        assert manager.end_session(session.id) is False


class TestSweep:
    def test_idle_sessions_are_swept(self, manager, animals):
        stale = manager.create_session(StudyMode.FLASHCARDS, animals)
        fresh = manager.create_session(StudyMode.MATCHING, animals)
        stale.last_activity -= timedelta(seconds=manager.study.session_idle_seconds + 1)
        swept = manager.sweep_idle()
        assert swept == [stale.id]
        assert manager.get_session(fresh.id) is fresh

    async def test_start_and_stop_cleanup_loop(self, manager):
        manager.start()
        assert manager._cleanup_task is not None
        await manager.stop()
        assert manager._cleanup_task is None
