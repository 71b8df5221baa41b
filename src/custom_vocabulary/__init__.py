__version__ = "0.1.0"

from .exceptions import (
    VocabularyError as VocabularyError,
    ValidationError as ValidationError,
    EntityNotFoundError as EntityNotFoundError,
    DuplicateEntityError as DuplicateEntityError,
    DataImportError as DataImportError,
    PersistenceError as PersistenceError,
    QuizError as QuizError,
    ConfigError as ConfigError,
)

from .models import (
    Difficulty as Difficulty,
    Category as Category,
    PartOfSpeech as PartOfSpeech,
    WordDraft as WordDraft,
    Word as Word,
    QuizResult as QuizResult,
    WordStats as WordStats,
    ProgressSummary as ProgressSummary,
    ImportResult as ImportResult,
)

from .storage import (
    KeyValueStorage as KeyValueStorage,
    MemoryStorage as MemoryStorage,
    SQLiteStorage as SQLiteStorage,
    WORDS_SLOT as WORDS_SLOT,
    RESULTS_SLOT as RESULTS_SLOT,
)

from .store import VocabularyStore as VocabularyStore
from .progress import ProgressRecorder as ProgressRecorder
from .quiz import (
    QuizSession as QuizSession,
    QuizQuestion as QuizQuestion,
    QuizSummary as QuizSummary,
    check_answer as check_answer,
)
from .exporter import export_filename as export_filename

__all__ = [
    # Store and recorder
    "VocabularyStore",
    "ProgressRecorder",
    # Quiz
    "QuizSession",
    "QuizQuestion",
    "QuizSummary",
    "check_answer",
    # Storage backends
    "KeyValueStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "WORDS_SLOT",
    "RESULTS_SLOT",
    # Models
    "Difficulty",
    "Category",
    "PartOfSpeech",
    "WordDraft",
    "Word",
    "QuizResult",
    "WordStats",
    "ProgressSummary",
    "ImportResult",
    # Utility functions
    "export_filename",
    # Exceptions
    "VocabularyError",
    "ValidationError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "DataImportError",
    "PersistenceError",
    "QuizError",
    "ConfigError",
]
