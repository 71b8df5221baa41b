"""Shared test fixtures for custom-vocabulary."""

import pytest

from custom_vocabulary import (
    Category,
    Difficulty,
    MemoryStorage,
    PartOfSpeech,
    ProgressRecorder,
    VocabularyStore,
    WordDraft,
)


def make_draft(**overrides) -> WordDraft:
    fields = dict(
        word="journey",
        definition="An act of travelling from one place to another",
        example_sentence="Our journey to Rome took two days.",
        category=Category.TRAVEL,
    )
    fields.update(overrides)
    return WordDraft(**fields)


@pytest.fixture
def storage():
    """In-memory slot storage."""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Empty vocabulary store."""
    return VocabularyStore(storage)


@pytest.fixture
def recorder(storage):
    """Empty progress recorder sharing the store's storage."""
    return ProgressRecorder(storage)


@pytest.fixture
def store_with_words(store):
    """Store with three words: journey, meeting, travel."""
    journey = store.add_word(make_draft())
    meeting = store.add_word(make_draft(
        word="meeting",
        definition="An assembly of people for discussion",
        example_sentence="The meeting starts at noon.",
        difficulty=Difficulty.BEGINNER,
        category=Category.BUSINESS,
    ))
    travel = store.add_word(make_draft(
        word="travel",
        definition="To go from one place to another",
        example_sentence="I love to travel in summer!",
        difficulty=Difficulty.ADVANCED,
        part_of_speech=PartOfSpeech.VERB,
    ))
    return store, journey, meeting, travel
