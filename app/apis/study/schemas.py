from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.modules.study.models import SessionState, StudyMode
from app.modules.vocab.models import VocabularyRecord


class CreateSessionRequest(BaseModel):
    mode: StudyMode
    vocabulary: Optional[list[VocabularyRecord]] = Field(
        default=None, description="Inline vocabulary to study"
    )
    study_set_id: Optional[int] = Field(
        default=None, description="Load vocabulary from this study set instead"
    )

    @model_validator(mode="after")
    def _one_source(self) -> "CreateSessionRequest":
        if (self.vocabulary is None) == (self.study_set_id is None):
            raise ValueError("Provide exactly one of vocabulary or study_set_id")
        if self.vocabulary is not None:
            ids = [r.id for r in self.vocabulary]
            if len(ids) != len(set(ids)):
                raise ValueError("Vocabulary ids must be unique")
        return self


class SessionResponse(BaseModel):
    state: SessionState


class GestureRequest(BaseModel):
    start_x: float
    end_x: Optional[float] = None


class GestureResponse(BaseModel):
    action: str
    state: SessionState


class SelectOptionRequest(BaseModel):
    option: str


class SelectTileRequest(BaseModel):
    tile_id: str


class AnswerResponse(BaseModel):
    # None when the input was ignored or only stored a selection
    correct: Optional[bool] = None
    state: SessionState
