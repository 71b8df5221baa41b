"""Domain model dataclasses and enums for custom-vocabulary."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Difficulty(str, Enum):
    """How hard a word is considered to be."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Category(str, Enum):
    """Topic a word belongs to."""

    BUSINESS = "business"
    TRAVEL = "travel"
    DAILY = "daily"
    ACADEMIC = "academic"


class PartOfSpeech(str, Enum):
    """Part-of-speech tags for vocabulary words."""

    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"


# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting the ``Z`` suffix browsers emit."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class WordDraft:
    """User-supplied fields for a new word, before validation."""

    word: str
    definition: str
    example_sentence: str
    blank_position: int | None = None
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    category: Category = Category.DAILY
    part_of_speech: PartOfSpeech = PartOfSpeech.NOUN


@dataclass(frozen=True, slots=True)
class Word:
    """A custom vocabulary entry with its quiz metadata."""

    id: str
    word: str
    definition: str
    example_sentence: str
    blank_position: int
    difficulty: Difficulty
    category: Category
    part_of_speech: PartOfSpeech
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape used by export files."""
        return {
            "id": self.id,
            "word": self.word,
            "definition": self.definition,
            "exampleSentence": self.example_sentence,
            "blankPosition": self.blank_position,
            "difficulty": self.difficulty.value,
            "category": self.category.value,
            "partOfSpeech": self.part_of_speech.value,
            "createdAt": format_timestamp(self.created_at),
        }


@dataclass(frozen=True, slots=True)
class QuizResult:
    """One answered quiz question."""

    word_id: str
    is_correct: bool
    user_answer: str
    correct_answer: str
    timestamp: datetime
    time_taken: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "wordId": self.word_id,
            "isCorrect": self.is_correct,
            "userAnswer": self.user_answer,
            "correctAnswer": self.correct_answer,
            "timestamp": format_timestamp(self.timestamp),
            "timeTaken": self.time_taken,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuizResult:
        """Create a QuizResult from its stored form."""
        return cls(
            word_id=data["wordId"],
            is_correct=bool(data["isCorrect"]),
            user_answer=data["userAnswer"],
            correct_answer=data["correctAnswer"],
            timestamp=parse_timestamp(data["timestamp"]),
            time_taken=float(data["timeTaken"]),
        )


@dataclass(frozen=True, slots=True)
class WordStats:
    """Aggregate quiz statistics for a single word."""

    word_id: str
    attempts: int
    correct: int
    incorrect: int
    average_time: float
    last_attempt: datetime | None
    mastered: bool

    @property
    def accuracy(self) -> float:
        return self.correct / self.attempts if self.attempts else 0.0


@dataclass(frozen=True, slots=True)
class ProgressSummary:
    """Aggregate quiz statistics across every recorded attempt."""

    total_attempts: int
    correct: int
    incorrect: int
    average_time: float
    words_practiced: int
    words_mastered: int

    @property
    def accuracy(self) -> float:
        return self.correct / self.total_attempts if self.total_attempts else 0.0


@dataclass
class ImportResult:
    """Outcome of importing a payload of words."""

    success: bool
    imported: int
    errors: list[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)
