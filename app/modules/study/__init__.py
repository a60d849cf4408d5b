"""Study session engines exports."""

from .events import Notification, NotificationKind
from .flashcards import FlashcardSession, GestureAction, classify_gesture
from .matching import MatchingSession, MatchTile, TileSide
from .models import SessionState, StudyMode
from .quiz import QuizSession, next_question
from .scheduling import AsyncioScheduler, ManualScheduler
from .sessions import StudySession, StudySessionManager, study_manager

__all__ = [
    "Notification",
    "NotificationKind",
    "FlashcardSession",
    "GestureAction",
    "classify_gesture",
    "MatchingSession",
    "MatchTile",
    "TileSide",
    "SessionState",
    "StudyMode",
    "QuizSession",
    "next_question",
    "AsyncioScheduler",
    "ManualScheduler",
    "StudySession",
    "StudySessionManager",
    "study_manager",
]
