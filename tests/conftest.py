import os

# Must be set before app.core.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MODE", "test")

import random

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.apis.deps import get_study_manager
from app.core.config import StudySettings
from app.core.db.base import get_session, init_models
from app.core.db.schemas.library import StudySet, Vocabulary
from app.modules.study.scheduling import ManualScheduler
from app.modules.study.sessions import StudySessionManager
from app.modules.vocab.models import VocabularyRecord


@pytest.fixture
def animals() -> list[VocabularyRecord]:
    return [
        VocabularyRecord(id="v1", term="gato", definition="cat"),
        VocabularyRecord(id="v2", term="perro", definition="dog"),
        VocabularyRecord(id="v3", term="pez", definition="fish"),
    ]


@pytest.fixture
def colors() -> list[VocabularyRecord]:
    return [
        VocabularyRecord(id=f"c{i}", term=term, definition=definition)
        for i, (term, definition) in enumerate(
            [
                ("rojo", "red"),
                ("azul", "blue"),
                ("verde", "green"),
                ("amarillo", "yellow"),
                ("negro", "black"),
                ("blanco", "white"),
                ("gris", "grey"),
                ("rosa", "pink"),
            ]
        )
    ]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def manager(scheduler: ManualScheduler) -> StudySessionManager:
    return StudySessionManager(
        StudySettings(),
        scheduler_factory=lambda: scheduler,
        rng_factory=lambda: random.Random(7),
    )


@pytest.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    try:
        yield async_sessionmaker(engine, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest.fixture
async def study_set_id(session_maker) -> int:
    async with session_maker() as db:
        study_set = StudySet(user_id="user-1", name="Animals")
        db.add(study_set)
        await db.flush()
        for index, (term, definition) in enumerate(
            [("gato", "cat"), ("perro", "dog"), ("pez", "fish")]
        ):
            db.add(
                Vocabulary(
                    id=f"db{index}",
                    study_set_id=study_set.id,
                    term=term,
                    definition=definition,
                    order_index=index,
                )
            )
        await db.commit()
        return study_set.id


@pytest.fixture
async def client(session_maker, manager):
    from main import app

    async def _get_session():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_study_manager] = lambda: manager
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-User-Id": "user-1"},
    ) as http:
        yield http
    app.dependency_overrides.clear()
