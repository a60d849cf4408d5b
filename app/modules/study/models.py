"""Pydantic snapshots of in-memory study sessions.

Engines keep their state in dataclasses; these schemas are what the API
layer serializes.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.modules.study.events import Notification
from app.modules.vocab.models import VocabularyRecord


class StudyMode(str, Enum):
    FLASHCARDS = "flashcards"
    MULTIPLE_CHOICE = "multiple_choice"
    MATCHING = "matching"


class FlashcardState(BaseModel):
    position: int = 0
    total: int = 0
    revealed: bool = False
    pending_direction: Optional[str] = None
    card: Optional[VocabularyRecord] = None


class QuizState(BaseModel):
    position: int = 0
    total: int = 0
    term: Optional[str] = None
    example: str = ""
    options: list[str] = Field(default_factory=list)
    selected: Optional[str] = None
    is_correct: Optional[bool] = None
    correct_count: int = 0


class MatchTileState(BaseModel):
    id: str
    text: str
    side: str
    matched: bool = False


class MatchState(BaseModel):
    tiles: list[MatchTileState] = Field(default_factory=list)
    selected: Optional[str] = None
    matched_pair_count: int = 0
    pair_count: int = 0


class SessionState(BaseModel):
    id: str
    mode: StudyMode
    empty: bool = False
    # completed: the engine reached its terminal state
    # finished: the completion callback has fired
    completed: bool = False
    finished: bool = False
    created_at: str
    flashcards: Optional[FlashcardState] = None
    quiz: Optional[QuizState] = None
    matching: Optional[MatchState] = None
    notifications: list[Notification] = Field(default_factory=list)
