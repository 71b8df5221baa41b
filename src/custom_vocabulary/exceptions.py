"""Custom exception hierarchy for custom-vocabulary."""


class VocabularyError(Exception):
    """Base exception for all custom-vocabulary errors."""


class ValidationError(VocabularyError):
    """Invalid data (empty field, word missing from sentence, bad enum)."""


class EntityNotFoundError(VocabularyError):
    """Word doesn't exist in the store."""


class DuplicateEntityError(VocabularyError):
    """Word with same ID already exists."""


class DataImportError(VocabularyError):
    """Failed to parse an import payload (malformed JSON, wrong shape)."""


class PersistenceError(VocabularyError):
    """Storage read/write failure or schema version mismatch."""


class QuizError(VocabularyError):
    """Invalid quiz state (e.g., answering a completed quiz)."""


class ConfigError(VocabularyError):
    """Invalid settings file."""
