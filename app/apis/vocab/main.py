from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.apis.deps import current_user_id
from app.core.config import settings
from app.core.db.base import get_session
from app.core.db_services import VocabularyLibraryService
from app.core.logging import get_logger
from app.modules.vocab.importer import import_vocabulary
from app.modules.vocab.models import ImportResult
from .schemas import ImportRequest, ImportResponse


logger = get_logger(__name__)
router = APIRouter()

CurrentUserId = Annotated[str, Depends(current_user_id)]


async def _respond(
    result: ImportResult,
    *,
    user_id: str,
    session: AsyncSession,
    study_set_id: Optional[int] = None,
) -> ImportResponse:
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.message
        )
    if study_set_id is not None:
        db = VocabularyLibraryService(session)
        try:
            await db.append_vocabulary(user_id, study_set_id, result.records)
        except ValueError as e:
            if str(e) == "study_set_not_found":
                raise HTTPException(status_code=404, detail="Study set not found")
            raise
    return ImportResponse(
        count=result.count,
        skipped_lines=result.skipped_lines,
        records=result.records,
        saved_to_study_set=study_set_id,
    )


@router.post(
    f"/{settings.app.version}/vocab/import",
    response_model=ImportResponse,
    tags=["vocab"],
)
async def import_text(
    req: ImportRequest,
    user_id: CurrentUserId,
    session: AsyncSession = Depends(get_session),
) -> ImportResponse:
    result = import_vocabulary(req.text)
    return await _respond(
        result, user_id=user_id, session=session, study_set_id=req.study_set_id
    )


@router.post(
    f"/{settings.app.version}/vocab/import/file",
    response_model=ImportResponse,
    tags=["vocab"],
)
async def import_file(
    user_id: CurrentUserId,
    file: UploadFile = File(...),
    study_set_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
) -> ImportResponse:
    if file.content_type != "text/plain":
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Please upload a .txt file",
        )
    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("Rejected undecodable vocabulary upload %s", file.filename)
        raise HTTPException(status_code=400, detail="Error reading file")
    result = import_vocabulary(text)
    return await _respond(
        result, user_id=user_id, session=session, study_set_id=study_set_id
    )
