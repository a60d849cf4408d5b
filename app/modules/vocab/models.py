"""Pydantic models shared by the import parser and the study engines."""

from __future__ import annotations

from typing import Annotated, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def new_vocabulary_id() -> str:
    return uuid4().hex


class VocabularyRecord(BaseModel):
    """A single term/definition pair with an optional usage example.

    Records are frozen: study engines only read them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_vocabulary_id)
    term: NonBlank
    definition: NonBlank
    example: str = ""


class ImportResult(BaseModel):
    """Outcome of a bulk text import.

    An empty import is reported through ``ok``/``message`` rather than raised.
    """

    records: list[VocabularyRecord] = Field(default_factory=list)
    skipped_lines: int = 0
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.records)

    @property
    def count(self) -> int:
        return len(self.records)
