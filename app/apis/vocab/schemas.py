from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.modules.vocab.models import VocabularyRecord


class ImportRequest(BaseModel):
    text: str = Field(..., description="One 'term: definition: example' entry per line")
    study_set_id: Optional[int] = Field(
        default=None, description="Append the parsed records to this study set"
    )


class ImportResponse(BaseModel):
    count: int
    skipped_lines: int = 0
    records: list[VocabularyRecord] = Field(default_factory=list)
    saved_to_study_set: Optional[int] = None
