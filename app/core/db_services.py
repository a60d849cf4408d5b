"""Database service for the vocabulary library.

The study engines never touch the database; this service is the thin
data-access layer that loads a study set's vocabulary for a session and
stores imported records.
"""

from __future__ import annotations

from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select

from app.core.db.schemas.library import StudySet, Vocabulary
from app.core.logging import get_logger
from app.modules.vocab.models import VocabularyRecord, new_vocabulary_id

logger = get_logger(__name__)


class VocabularyLibraryService:
    """Service for reading and appending study set vocabulary."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _owned_study_set(self, user_id: str, study_set_id: int) -> StudySet:
        result = await self.session.execute(
            select(StudySet).where(
                StudySet.id == study_set_id, StudySet.user_id == user_id
            )
        )
        study_set = result.scalar_one_or_none()
        if study_set is None:
            raise ValueError("study_set_not_found")
        return study_set

    async def get_study_set_vocabulary(
        self, user_id: str, study_set_id: int
    ) -> list[VocabularyRecord]:
        """Return the set's vocabulary in display order."""
        await self._owned_study_set(user_id, study_set_id)
        result = await self.session.execute(
            select(Vocabulary)
            .where(Vocabulary.study_set_id == study_set_id)
            .order_by(Vocabulary.order_index, Vocabulary.created_at)
        )
        return [
            VocabularyRecord(
                id=row.id,
                term=row.term,
                definition=row.definition,
                example=row.example or "",
            )
            for row in result.scalars().all()
        ]

    async def append_vocabulary(
        self,
        user_id: str,
        study_set_id: int,
        records: Sequence[VocabularyRecord],
    ) -> int:
        """Append records after the set's existing vocabulary."""
        await self._owned_study_set(user_id, study_set_id)
        max_index = (
            await self.session.execute(
                select(func.max(Vocabulary.order_index)).where(
                    Vocabulary.study_set_id == study_set_id
                )
            )
        ).scalar()
        start = -1 if max_index is None else int(max_index)

        existing_ids = set(
            (
                await self.session.execute(
                    select(Vocabulary.id).where(
                        Vocabulary.id.in_([r.id for r in records])
                    )
                )
            )
            .scalars()
            .all()
        )

        for offset, record in enumerate(records, start=1):
            # Ids are caller-generated; re-key any that already exist
            row_id = record.id if record.id not in existing_ids else new_vocabulary_id()
            self.session.add(
                Vocabulary(
                    id=row_id,
                    study_set_id=study_set_id,
                    term=record.term,
                    definition=record.definition,
                    example=record.example,
                    order_index=start + offset,
                )
            )

        await self.session.commit()
        logger.info(
            "Appended %d vocabulary records to study set %s", len(records), study_set_id
        )
        return len(records)
