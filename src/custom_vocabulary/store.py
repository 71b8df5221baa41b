"""VocabularyStore: the collection of user-authored words."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from custom_vocabulary import exporter as _exporter
from custom_vocabulary import importer as _importer
from custom_vocabulary.exceptions import (
    DataImportError,
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)
from custom_vocabulary.models import (
    Category,
    Difficulty,
    ImportResult,
    PartOfSpeech,
    Word,
    WordDraft,
)
from custom_vocabulary.storage import WORDS_SLOT, KeyValueStorage
from custom_vocabulary.validator import build_word, coerce_enum

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])


def _persists(method: _F) -> _F:
    """Decorator: saves the collection after a mutation, undoing it on failure."""

    @functools.wraps(method)
    def wrapper(self: VocabularyStore, *args: Any, **kwargs: Any) -> Any:
        snapshot = list(self._words)
        result = method(self, *args, **kwargs)
        if self._words != snapshot:
            try:
                self._save()
            except PersistenceError:
                self._words = snapshot
                raise
        return result

    return wrapper  # type: ignore[return-value]


class VocabularyStore:
    """Custom vocabulary words, persisted under a single storage slot."""

    def __init__(self, storage: KeyValueStorage, *, slot: str = WORDS_SLOT) -> None:
        self._storage = storage
        self._slot = slot
        self._words: list[Word] = self._load()

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word_id: object) -> bool:
        return any(w.id == word_id for w in self._words)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> list[Word]:
        payload = self._storage.get(self._slot)
        if payload is None:
            return []
        try:
            records = _importer.parse_payload(payload)
            words = [_importer.record_to_word(r) for r in records]
        except (DataImportError, ValidationError) as e:
            raise PersistenceError(
                f"Stored vocabulary in slot {self._slot!r} is corrupt: {e}"
            ) from e
        logger.debug(f"Loaded {len(words)} word(s) from slot {self._slot!r}")
        return words

    def _save(self) -> None:
        self._storage.set(self._slot, _exporter.serialize_words(self._words))

    # ------------------------------------------------------------------
    # Word management
    # ------------------------------------------------------------------

    @_persists
    def add_word(self, draft: WordDraft) -> Word:
        """Validate *draft* and add it to the collection.

        Raises:
            ValidationError: if a required field is blank, the word is not
                in the example sentence, or a field value is invalid
        """
        word = build_word(draft)
        self._words.append(word)
        logger.info(f"Added word {word.word!r} ({word.id})")
        return word

    def get_custom_words(self) -> tuple[Word, ...]:
        """All words in insertion order."""
        return tuple(self._words)

    def get_word(self, word_id: str) -> Word:
        for word in self._words:
            if word.id == word_id:
                return word
        raise EntityNotFoundError(f"Word not found: {word_id!r}")

    def search_words(self, query: str) -> tuple[Word, ...]:
        """Words whose text or definition contains *query*, ignoring case.

        Raises:
            ValidationError: if *query* is blank; list all words with
                :meth:`get_custom_words` instead
        """
        needle = query.strip().lower()
        if not needle:
            raise ValidationError("Search query must not be empty")
        return tuple(
            w for w in self._words
            if needle in w.word.lower() or needle in w.definition.lower()
        )

    def filter_words(
        self,
        *,
        difficulty: Difficulty | str | None = None,
        category: Category | str | None = None,
        part_of_speech: PartOfSpeech | str | None = None,
    ) -> tuple[Word, ...]:
        """Words matching every given attribute, in insertion order."""
        if difficulty is not None:
            difficulty = coerce_enum(Difficulty, difficulty, "difficulty")
        if category is not None:
            category = coerce_enum(Category, category, "category")
        if part_of_speech is not None:
            part_of_speech = coerce_enum(
                PartOfSpeech, part_of_speech, "part of speech"
            )
        return tuple(
            w for w in self._words
            if (difficulty is None or w.difficulty == difficulty)
            and (category is None or w.category == category)
            and (part_of_speech is None or w.part_of_speech == part_of_speech)
        )

    @_persists
    def delete_word(self, word_id: str) -> bool:
        """Remove the word with *word_id*. Returns False if it was absent."""
        for i, word in enumerate(self._words):
            if word.id == word_id:
                del self._words[i]
                logger.info(f"Deleted word {word.word!r} ({word_id})")
                return True
        logger.debug(f"Delete ignored, no word with id {word_id!r}")
        return False

    @_persists
    def clear(self) -> int:
        """Remove every word. Returns how many were removed."""
        count = len(self._words)
        self._words = []
        if count:
            logger.info(f"Cleared {count} word(s)")
        return count

    # ------------------------------------------------------------------
    # Import / Export
    # ------------------------------------------------------------------

    def export_words(self) -> str:
        """Serialize the whole collection as a JSON array."""
        return _exporter.serialize_words(self._words)

    def export_to_file(self, directory: str | Path = ".") -> Path:
        """Write an export file into *directory* and return its path."""
        return _exporter.write_export(self, directory)

    @_persists
    def import_words(self, payload: str) -> ImportResult:
        """Import words from an exported JSON payload.

        Valid records are kept even when others fail validation; each
        failure is reported in ``ImportResult.errors``. A payload that
        cannot be parsed at all imports nothing and yields a single error.
        """
        try:
            words, errors = _importer.parse_words(
                payload, existing_ids=(w.id for w in self._words)
            )
        except DataImportError as e:
            logger.warning(f"Import rejected: {e}")
            return ImportResult(success=False, imported=0, errors=[str(e)])

        if not words and not errors:
            return ImportResult(
                success=False, imported=0, errors=[_importer.MSG_EMPTY]
            )

        self._words.extend(words)
        if words:
            logger.info(f"Imported {len(words)} word(s)")
        if errors:
            logger.info(f"Import skipped {len(errors)} invalid record(s)")

        return ImportResult(success=bool(words), imported=len(words), errors=errors)

    def import_file(self, source: str | Path) -> ImportResult:
        """Import words from a JSON export file.

        Raises:
            FileNotFoundError: if *source* does not exist
        """
        try:
            payload = _importer.read_import_file(source)
        except DataImportError as e:
            logger.warning(f"Import rejected: {e}")
            return ImportResult(success=False, imported=0, errors=[str(e)])
        return self.import_words(payload)
