"""Fill-in-the-blank quizzes over custom words."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from custom_vocabulary.exceptions import QuizError, ValidationError
from custom_vocabulary.models import QuizResult, Word, utcnow
from custom_vocabulary.progress import ProgressRecorder
from custom_vocabulary.validator import render_blank

logger = logging.getLogger(__name__)

DEFAULT_QUIZ_SIZE = 5


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """A sentence with one word blanked out."""

    word: Word
    prompt: str
    question_number: int
    total: int


@dataclass
class QuizSummary:
    """Score for a completed quiz."""

    score: int
    total: int
    total_time: float
    results: list[QuizResult] = field(default_factory=list)

    @property
    def percentage(self) -> int:
        return round(100 * self.score / self.total) if self.total else 0


def check_answer(word: Word, answer: str) -> bool:
    """True if *answer* matches the word, ignoring case and outer whitespace."""
    return answer.strip().lower() == word.word.strip().lower()


def make_question(word: Word, question_number: int = 1, total: int = 1) -> QuizQuestion:
    return QuizQuestion(
        word=word,
        prompt=render_blank(word.example_sentence, word.blank_position),
        question_number=question_number,
        total=total,
    )


class QuizSession:
    """A sequence of questions drawn at random from *words*.

    Each answer is recorded through *recorder* as it is given.
    """

    def __init__(
        self,
        words: Sequence[Word],
        recorder: ProgressRecorder,
        *,
        size: int = DEFAULT_QUIZ_SIZE,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if size < 1:
            raise ValidationError(f"Quiz size must be positive, got {size}")
        if not words:
            raise ValidationError("No words available for a quiz")
        rng = rng or random.Random()
        self._words = rng.sample(list(words), min(size, len(words)))
        self._recorder = recorder
        self._clock = clock
        self._index = 0
        self._results: list[QuizResult] = []
        self._started = clock()
        self._question_started = self._started
        logger.debug(f"Started quiz with {len(self._words)} question(s)")

    @property
    def total(self) -> int:
        return len(self._words)

    @property
    def is_complete(self) -> bool:
        return self._index >= len(self._words)

    @property
    def results(self) -> tuple[QuizResult, ...]:
        return tuple(self._results)

    def current_question(self) -> QuizQuestion:
        if self.is_complete:
            raise QuizError("Quiz is already complete")
        return make_question(
            self._words[self._index], self._index + 1, len(self._words)
        )

    def answer(self, text: str) -> QuizResult:
        """Answer the current question and move on to the next one."""
        word = self.current_question().word
        now = self._clock()
        result = QuizResult(
            word_id=word.id,
            is_correct=check_answer(word, text),
            user_answer=text.strip(),
            correct_answer=word.word,
            timestamp=utcnow(),
            time_taken=max(0.0, now - self._question_started),
        )
        self._recorder.record_quiz_result(result, word)
        self._results.append(result)
        self._index += 1
        self._question_started = now
        return result

    def summary(self) -> QuizSummary:
        """Score so far; complete once every question has been answered."""
        return QuizSummary(
            score=sum(1 for r in self._results if r.is_correct),
            total=len(self._words),
            total_time=max(0.0, self._clock() - self._started),
            results=list(self._results),
        )
