"""Line-delimited vocabulary import.

Each non-blank line reads ``term: definition[: example]``. Only the first two
colons separate fields, so an example may itself contain colons.
"""

from __future__ import annotations

from typing import Iterable, Optional

from app.core.logging import get_logger
from app.modules.vocab.models import ImportResult, VocabularyRecord

logger = get_logger(__name__)

FIELD_DELIMITER = ":"
IMPORT_EMPTY_MESSAGE = "No valid vocabulary entries found"


def split_import_line(line: str) -> list[str]:
    """Split a raw line into at most three trimmed fields."""
    return [part.strip() for part in line.split(FIELD_DELIMITER, 2)]


def parse_line(line: str) -> Optional[VocabularyRecord]:
    fields = split_import_line(line)
    if len(fields) < 2:
        return None
    term, definition = fields[0], fields[1]
    if not term or not definition:
        return None
    example = fields[2] if len(fields) > 2 else ""
    return VocabularyRecord(term=term, definition=definition, example=example)


def parse(raw_text: str) -> list[VocabularyRecord]:
    """Parse raw import text into records, preserving input order."""
    records: list[VocabularyRecord] = []
    for line in raw_text.splitlines():
        if not line.strip():
            continue
        record = parse_line(line)
        if record is not None:
            records.append(record)
    return records


def import_vocabulary(raw_text: str) -> ImportResult:
    """Parse ``raw_text`` and report an empty import instead of raising."""
    lines = [line for line in raw_text.splitlines() if line.strip()]
    records = parse("\n".join(lines))
    result = ImportResult(
        records=records,
        skipped_lines=len(lines) - len(records),
        message=None if records else IMPORT_EMPTY_MESSAGE,
    )
    if not result.ok:
        logger.info("Import produced no valid entries (%d lines)", len(lines))
    else:
        logger.info(
            "Imported %d vocabulary entries (%d lines skipped)",
            result.count,
            result.skipped_lines,
        )
    return result


def serialize(records: Iterable[VocabularyRecord]) -> str:
    """Render records back into the import format, one per line."""
    lines = []
    for record in records:
        parts = [record.term, record.definition]
        if record.example:
            parts.append(record.example)
        lines.append(FIELD_DELIMITER.join(parts))
    return "\n".join(lines)
