"""Import pipeline for custom-vocabulary."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from custom_vocabulary.exceptions import (
    DataImportError,
    DuplicateEntityError,
    ValidationError,
)
from custom_vocabulary.models import (
    Category,
    Difficulty,
    PartOfSpeech,
    Word,
    WordDraft,
    parse_timestamp,
)
from custom_vocabulary.validator import build_word

logger = logging.getLogger(__name__)

MSG_INVALID_FORMAT = "Invalid file format. Expected a JSON array of words."
MSG_EMPTY = "No words found in import file."

_TEXT_FIELDS = ("word", "definition", "exampleSentence")


def parse_payload(payload: str) -> list[Any]:
    """Parse *payload* as a JSON array.

    Raises:
        DataImportError: if the text is not JSON or the root is not an array
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, TypeError) as e:
        raise DataImportError(f"Failed to parse JSON: {e}") from e
    if not isinstance(data, list):
        raise DataImportError(MSG_INVALID_FORMAT)
    return data


def record_to_word(record: Any) -> Word:
    """Validate a single exported record and build a Word from it.

    ``id`` and ``createdAt`` are kept when present so that an export can be
    re-imported unchanged.
    """
    if not isinstance(record, dict):
        raise ValidationError("Record must be a JSON object")

    for key in _TEXT_FIELDS:
        value = record.get(key, "")
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Field {key!r} must be a string")

    record_id = record.get("id")
    if record_id is not None and (not isinstance(record_id, str) or not record_id):
        raise ValidationError("Field 'id' must be a non-empty string")

    created_at = None
    raw_created = record.get("createdAt")
    if raw_created is not None:
        if not isinstance(raw_created, str):
            raise ValidationError("Field 'createdAt' must be an ISO-8601 string")
        try:
            created_at = parse_timestamp(raw_created)
        except ValueError:
            raise ValidationError(
                f"Invalid createdAt timestamp: {raw_created!r}"
            ) from None

    draft = WordDraft(
        word=record.get("word") or "",
        definition=record.get("definition") or "",
        example_sentence=record.get("exampleSentence") or "",
        blank_position=record.get("blankPosition"),
        difficulty=record.get("difficulty", Difficulty.INTERMEDIATE.value),
        category=record.get("category", Category.DAILY.value),
        part_of_speech=record.get("partOfSpeech", PartOfSpeech.NOUN.value),
    )
    return build_word(draft, id=record_id, created_at=created_at)


def _label(index: int, record: Any) -> str:
    if isinstance(record, dict) and isinstance(record.get("word"), str) \
            and record["word"].strip():
        return f"Word #{index + 1} ({record['word'].strip()})"
    return f"Word #{index + 1}"


def parse_words(
    payload: str,
    *,
    existing_ids: Iterable[str] = (),
) -> tuple[list[Word], list[str]]:
    """Validate every record in *payload*.

    Returns the valid words and one message per rejected record. Records
    whose id is already in *existing_ids*, or repeats an earlier record in
    the same payload, are rejected.

    Raises:
        DataImportError: if the payload itself is malformed
    """
    records = parse_payload(payload)
    seen = set(existing_ids)
    words: list[Word] = []
    errors: list[str] = []

    for i, record in enumerate(records):
        try:
            word = record_to_word(record)
            if word.id in seen:
                raise DuplicateEntityError(
                    f"Word with id={word.id!r} already exists"
                )
        except (ValidationError, DuplicateEntityError) as e:
            errors.append(f"{_label(i, record)}: {e}")
            continue
        seen.add(word.id)
        words.append(word)

    return words, errors


def read_import_file(source: str | Path) -> str:
    """Return the text of a JSON export file.

    Raises:
        FileNotFoundError: if *source* does not exist
        DataImportError: if the file is not UTF-8 text
    """
    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"File not found: {source}")
    logger.debug(f"Reading import file {source}")
    try:
        return source.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DataImportError(f"File is not UTF-8 text: {e}") from e
