"""Validation rules for vocabulary words."""

from __future__ import annotations

import re
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from custom_vocabulary.exceptions import ValidationError
from custom_vocabulary.models import (
    Category,
    Difficulty,
    PartOfSpeech,
    Word,
    WordDraft,
    utcnow,
)

_E = TypeVar("_E", bound=Enum)

BLANK = "______"

MSG_REQUIRED = "Please fill in all required fields."
MSG_NOT_IN_SENTENCE = "The word must appear in the example sentence."

_PUNCTUATION = re.compile(r"[.,!?]")


# ---------------------------------------------------------------------------
# Sentence helpers
# ---------------------------------------------------------------------------

def tokenize(sentence: str) -> list[str]:
    """Split a sentence into whitespace-delimited tokens."""
    return sentence.split()


def normalize_token(token: str) -> str:
    """Lowercase a token and strip ``.,!?`` from it."""
    return _PUNCTUATION.sub("", token.lower())


def word_in_sentence(word: str, sentence: str) -> bool:
    """True if *word* equals one of the sentence's normalized tokens."""
    target = word.strip().lower()
    return any(normalize_token(t) == target for t in tokenize(sentence))


def find_blank_position(word: str, sentence: str) -> int | None:
    """Index of the first token containing *word*, case-insensitively."""
    target = word.strip().lower()
    if not target:
        return None
    for i, token in enumerate(tokenize(sentence)):
        if target in token.lower():
            return i
    return None


def render_blank(sentence: str, blank_position: int) -> str:
    """Replace the token at *blank_position* with a blank."""
    return " ".join(
        BLANK if i == blank_position else t
        for i, t in enumerate(tokenize(sentence))
    )


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def coerce_enum(enum_cls: type[_E], value: Any, field_name: str) -> _E:
    """Convert *value* to a member of *enum_cls* or raise ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)  # type: ignore[attr-defined]
        raise ValidationError(
            f"Invalid {field_name}: {value!r} (expected one of: {allowed})"
        ) from None


# ---------------------------------------------------------------------------
# Draft validation
# ---------------------------------------------------------------------------

def validate_draft(draft: WordDraft) -> list[str]:
    """Return validation messages for *draft*; empty when valid."""
    fields = (draft.word, draft.definition, draft.example_sentence)
    if any(not isinstance(f, str) or not f.strip() for f in fields):
        return [MSG_REQUIRED]

    messages: list[str] = []
    if not word_in_sentence(draft.word, draft.example_sentence):
        messages.append(MSG_NOT_IN_SENTENCE)

    pos = draft.blank_position
    if pos is not None:
        token_count = len(tokenize(draft.example_sentence))
        if isinstance(pos, bool) or not isinstance(pos, int):
            messages.append(f"Blank position must be an integer, got {pos!r}")
        elif not 0 <= pos < token_count:
            messages.append(
                f"Blank position {pos} is out of range "
                f"(0-{token_count - 1})"
            )

    for enum_cls, value, name in (
        (Difficulty, draft.difficulty, "difficulty"),
        (Category, draft.category, "category"),
        (PartOfSpeech, draft.part_of_speech, "part of speech"),
    ):
        try:
            coerce_enum(enum_cls, value, name)
        except ValidationError as e:
            messages.append(str(e))

    return messages


def check_draft(draft: WordDraft) -> None:
    """Raise ValidationError with the first problem found in *draft*."""
    messages = validate_draft(draft)
    if messages:
        raise ValidationError(messages[0])


def build_word(
    draft: WordDraft,
    *,
    id: str | None = None,
    created_at: datetime | None = None,
) -> Word:
    """Validate *draft* and turn it into a Word.

    Text fields are trimmed. A missing blank position is derived from the
    sentence. ``id`` and ``created_at`` are generated unless given.
    """
    draft = WordDraft(
        word=draft.word.strip() if isinstance(draft.word, str) else draft.word,
        definition=(
            draft.definition.strip()
            if isinstance(draft.definition, str) else draft.definition
        ),
        example_sentence=(
            draft.example_sentence.strip()
            if isinstance(draft.example_sentence, str)
            else draft.example_sentence
        ),
        blank_position=draft.blank_position,
        difficulty=draft.difficulty,
        category=draft.category,
        part_of_speech=draft.part_of_speech,
    )
    check_draft(draft)

    blank_position = draft.blank_position
    if blank_position is None:
        blank_position = find_blank_position(draft.word, draft.example_sentence)
    if blank_position is None:
        # punctuation inside the token (e.g. "do.g") defeats the substring match
        target = draft.word.lower()
        blank_position = next(
            i for i, t in enumerate(tokenize(draft.example_sentence))
            if normalize_token(t) == target
        )

    return Word(
        id=id or uuid.uuid4().hex,
        word=draft.word,
        definition=draft.definition,
        example_sentence=draft.example_sentence,
        blank_position=blank_position,
        difficulty=coerce_enum(Difficulty, draft.difficulty, "difficulty"),
        category=coerce_enum(Category, draft.category, "category"),
        part_of_speech=coerce_enum(
            PartOfSpeech, draft.part_of_speech, "part of speech"
        ),
        created_at=created_at or utcnow(),
    )
