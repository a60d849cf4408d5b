"""Vocabulary module exports."""

from .models import ImportResult, VocabularyRecord
from .importer import IMPORT_EMPTY_MESSAGE, import_vocabulary, parse, serialize

__all__ = [
    "ImportResult",
    "VocabularyRecord",
    "IMPORT_EMPTY_MESSAGE",
    "import_vocabulary",
    "parse",
    "serialize",
]
