"""Quiz attempt recording and mastery statistics."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from custom_vocabulary.exceptions import PersistenceError, ValidationError
from custom_vocabulary.models import (
    ProgressSummary,
    QuizResult,
    Word,
    WordStats,
)
from custom_vocabulary.storage import RESULTS_SLOT, KeyValueStorage

logger = logging.getLogger(__name__)

# A word counts as mastered once it has been attempted at least
# MASTERY_MIN_ATTEMPTS times with accuracy >= MASTERY_THRESHOLD.
MASTERY_MIN_ATTEMPTS = 3
MASTERY_THRESHOLD = 0.8


@dataclass
class _Tally:
    attempts: int = 0
    correct: int = 0
    total_time: float = 0.0
    last_attempt: datetime | None = None

    def add(self, result: QuizResult) -> None:
        self.attempts += 1
        if result.is_correct:
            self.correct += 1
        self.total_time += result.time_taken
        if self.last_attempt is None or result.timestamp > self.last_attempt:
            self.last_attempt = result.timestamp

    def to_stats(self, word_id: str) -> WordStats:
        accuracy = self.correct / self.attempts if self.attempts else 0.0
        return WordStats(
            word_id=word_id,
            attempts=self.attempts,
            correct=self.correct,
            incorrect=self.attempts - self.correct,
            average_time=self.total_time / self.attempts if self.attempts else 0.0,
            last_attempt=self.last_attempt,
            mastered=(
                self.attempts >= MASTERY_MIN_ATTEMPTS
                and accuracy >= MASTERY_THRESHOLD
            ),
        )


def _check_shape(result: QuizResult) -> None:
    if not isinstance(result, QuizResult):
        raise ValidationError(f"Expected a QuizResult, got {type(result).__name__}")
    if not isinstance(result.word_id, str) or not result.word_id:
        raise ValidationError("Quiz result must reference a word id")
    if not isinstance(result.is_correct, bool):
        raise ValidationError("Quiz result 'is_correct' must be a bool")
    if not isinstance(result.user_answer, str) or not isinstance(
        result.correct_answer, str
    ):
        raise ValidationError("Quiz result answers must be strings")
    if not isinstance(result.timestamp, datetime):
        raise ValidationError("Quiz result 'timestamp' must be a datetime")
    if isinstance(result.time_taken, bool) or not isinstance(
        result.time_taken, (int, float)
    ) or result.time_taken < 0:
        raise ValidationError("Quiz result 'time_taken' must be a non-negative number")


class ProgressRecorder:
    """Append-only log of quiz results with per-word aggregates."""

    def __init__(self, storage: KeyValueStorage, *, slot: str = RESULTS_SLOT) -> None:
        self._storage = storage
        self._slot = slot
        self._results: list[QuizResult] = self._load()
        self._tallies: dict[str, _Tally] = {}
        for result in self._results:
            self._tallies.setdefault(result.word_id, _Tally()).add(result)

    def __len__(self) -> int:
        return len(self._results)

    def _load(self) -> list[QuizResult]:
        payload = self._storage.get(self._slot)
        if payload is None:
            return []
        try:
            return [QuizResult.from_dict(r) for r in json.loads(payload)]
        except (ValueError, KeyError, TypeError) as e:
            raise PersistenceError(
                f"Stored quiz results in slot {self._slot!r} are corrupt: {e}"
            ) from e

    def _save(self) -> None:
        self._storage.set(
            self._slot, json.dumps([r.to_dict() for r in self._results])
        )

    def record_quiz_result(self, result: QuizResult, word: Word | None = None) -> None:
        """Append *result* to the log and update its word's aggregates.

        A naive timestamp is taken to be UTC.

        Raises:
            ValidationError: if *result* is malformed, or *word* is given
                and is not the word the result refers to
        """
        _check_shape(result)
        if word is not None and word.id != result.word_id:
            raise ValidationError(
                f"Result for {result.word_id!r} recorded against word {word.id!r}"
            )
        if result.timestamp.tzinfo is None:
            result = replace(
                result, timestamp=result.timestamp.replace(tzinfo=timezone.utc)
            )
        previous = self._tallies.get(result.word_id)
        tally = replace(previous) if previous else _Tally()
        tally.add(result)

        self._results.append(result)
        try:
            self._save()
        except PersistenceError:
            self._results.pop()
            raise
        self._tallies[result.word_id] = tally
        logger.debug(
            f"Recorded {'correct' if result.is_correct else 'incorrect'} "
            f"answer for {result.word_id}"
        )

    def get_results(self, word_id: str | None = None) -> tuple[QuizResult, ...]:
        """Recorded results in order, optionally only those for *word_id*."""
        if word_id is None:
            return tuple(self._results)
        return tuple(r for r in self._results if r.word_id == word_id)

    def get_word_stats(self, word_id: str) -> WordStats:
        return self._tallies.get(word_id, _Tally()).to_stats(word_id)

    def get_all_stats(self) -> dict[str, WordStats]:
        return {wid: t.to_stats(wid) for wid, t in self._tallies.items()}

    def mastered_word_ids(self) -> list[str]:
        return [wid for wid, s in self.get_all_stats().items() if s.mastered]

    def get_summary(self) -> ProgressSummary:
        """Totals across every recorded result."""
        total = len(self._results)
        correct = sum(1 for r in self._results if r.is_correct)
        total_time = sum(r.time_taken for r in self._results)
        return ProgressSummary(
            total_attempts=total,
            correct=correct,
            incorrect=total - correct,
            average_time=total_time / total if total else 0.0,
            words_practiced=len(self._tallies),
            words_mastered=len(self.mastered_word_ids()),
        )

    def reset(self) -> int:
        """Discard every recorded result. Returns how many were removed."""
        count = len(self._results)
        self._storage.delete(self._slot)
        self._results = []
        self._tallies = {}
        logger.info(f"Reset progress, removed {count} result(s)")
        return count
