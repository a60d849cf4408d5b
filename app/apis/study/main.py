from __future__ import annotations

from typing import Annotated, Optional, cast

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.apis.deps import current_user_id, get_study_manager
from app.apis.study.schemas import (
    AnswerResponse,
    CreateSessionRequest,
    GestureRequest,
    GestureResponse,
    SelectOptionRequest,
    SelectTileRequest,
    SessionResponse,
)
from app.core.config import settings
from app.core.db.base import get_session
from app.core.db_services import VocabularyLibraryService
from app.modules.study.flashcards import FlashcardSession
from app.modules.study.matching import MatchingSession
from app.modules.study.models import StudyMode
from app.modules.study.quiz import QuizSession
from app.modules.study.sessions import StudySession, StudySessionManager


router = APIRouter()

Manager = Annotated[StudySessionManager, Depends(get_study_manager)]
PREFIX = f"/{settings.app.version}/study/sessions"


def _require(
    manager: StudySessionManager, session_id: str, mode: Optional[StudyMode] = None
) -> StudySession:
    try:
        return manager.require(session_id, mode)
    except ValueError as e:
        msg = str(e)
        if msg == "session_not_found":
            raise HTTPException(status_code=404, detail="Study session not found")
        if msg == "wrong_mode":
            raise HTTPException(
                status_code=409, detail=f"Study session is not in {mode.value} mode"
            )
        raise


def _flashcards(manager: StudySessionManager, session_id: str) -> tuple[StudySession, FlashcardSession]:
    session = _require(manager, session_id, StudyMode.FLASHCARDS)
    return session, cast(FlashcardSession, session.engine)


def _quiz(manager: StudySessionManager, session_id: str) -> tuple[StudySession, QuizSession]:
    session = _require(manager, session_id, StudyMode.MULTIPLE_CHOICE)
    return session, cast(QuizSession, session.engine)


def _matching(manager: StudySessionManager, session_id: str) -> tuple[StudySession, MatchingSession]:
    session = _require(manager, session_id, StudyMode.MATCHING)
    return session, cast(MatchingSession, session.engine)


# Lifecycle ------------------------------------------------------------------
@router.post(
    PREFIX,
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["study"],
)
async def create_study_session(
    req: CreateSessionRequest,
    manager: Manager,
    user_id: Annotated[str, Depends(current_user_id)],
    session: AsyncSession = Depends(get_session),
) -> SessionResponse:
    if req.study_set_id is not None:
        db = VocabularyLibraryService(session)
        try:
            vocabulary = await db.get_study_set_vocabulary(user_id, req.study_set_id)
        except ValueError as e:
            if str(e) == "study_set_not_found":
                raise HTTPException(status_code=404, detail="Study set not found")
            raise
    else:
        vocabulary = req.vocabulary or []
    study = manager.create_session(req.mode, vocabulary)
    return SessionResponse(state=study.to_state())


@router.get(f"{PREFIX}/{{session_id}}", response_model=SessionResponse, tags=["study"])
async def get_study_session(session_id: str, manager: Manager) -> SessionResponse:
    return SessionResponse(state=_require(manager, session_id).to_state())


@router.delete(
    f"{PREFIX}/{{session_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["study"],
)
async def end_study_session(session_id: str, manager: Manager) -> None:
    if not manager.end_session(session_id):
        raise HTTPException(status_code=404, detail="Study session not found")


# Flashcards -----------------------------------------------------------------
@router.post(
    f"{PREFIX}/{{session_id}}/flashcards/flip",
    response_model=SessionResponse,
    tags=["study"],
)
async def flip_card(session_id: str, manager: Manager) -> SessionResponse:
    session, cards = _flashcards(manager, session_id)
    cards.flip()
    return SessionResponse(state=session.to_state())


@router.post(
    f"{PREFIX}/{{session_id}}/flashcards/next",
    response_model=SessionResponse,
    tags=["study"],
)
async def next_card(session_id: str, manager: Manager) -> SessionResponse:
    session, cards = _flashcards(manager, session_id)
    cards.next()
    return SessionResponse(state=session.to_state())


@router.post(
    f"{PREFIX}/{{session_id}}/flashcards/previous",
    response_model=SessionResponse,
    tags=["study"],
)
async def previous_card(session_id: str, manager: Manager) -> SessionResponse:
    session, cards = _flashcards(manager, session_id)
    cards.previous()
    return SessionResponse(state=session.to_state())


@router.post(
    f"{PREFIX}/{{session_id}}/flashcards/gesture",
    response_model=GestureResponse,
    tags=["study"],
)
async def card_gesture(
    session_id: str, req: GestureRequest, manager: Manager
) -> GestureResponse:
    session, cards = _flashcards(manager, session_id)
    action = cards.gesture(req.start_x, req.end_x)
    return GestureResponse(action=action.value, state=session.to_state())


# Multiple choice ------------------------------------------------------------
@router.post(
    f"{PREFIX}/{{session_id}}/quiz/select",
    response_model=AnswerResponse,
    tags=["study"],
)
async def select_option(
    session_id: str, req: SelectOptionRequest, manager: Manager
) -> AnswerResponse:
    session, quiz = _quiz(manager, session_id)
    correct = quiz.select(req.option)
    return AnswerResponse(correct=correct, state=session.to_state())


@router.post(
    f"{PREFIX}/{{session_id}}/quiz/advance",
    response_model=SessionResponse,
    tags=["study"],
)
async def advance_question(session_id: str, manager: Manager) -> SessionResponse:
    session, quiz = _quiz(manager, session_id)
    quiz.advance()
    return SessionResponse(state=session.to_state())


# Matching -------------------------------------------------------------------
@router.post(
    f"{PREFIX}/{{session_id}}/matching/select",
    response_model=AnswerResponse,
    tags=["study"],
)
async def select_tile(
    session_id: str, req: SelectTileRequest, manager: Manager
) -> AnswerResponse:
    session, game = _matching(manager, session_id)
    correct = game.select(req.tile_id)
    return AnswerResponse(correct=correct, state=session.to_state())


@router.post(
    f"{PREFIX}/{{session_id}}/matching/restart",
    response_model=SessionResponse,
    tags=["study"],
)
async def restart_matching(session_id: str, manager: Manager) -> SessionResponse:
    session, game = _matching(manager, session_id)
    game.restart()
    return SessionResponse(state=session.to_state())


@router.post(
    f"{PREFIX}/{{session_id}}/matching/continue",
    response_model=SessionResponse,
    tags=["study"],
)
async def continue_matching(session_id: str, manager: Manager) -> SessionResponse:
    session, game = _matching(manager, session_id)
    game.finish()
    return SessionResponse(state=session.to_state())
