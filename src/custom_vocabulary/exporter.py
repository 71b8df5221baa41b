"""Export pipeline for custom-vocabulary."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from custom_vocabulary.models import Word

if TYPE_CHECKING:
    from custom_vocabulary.store import VocabularyStore

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "custom-vocabulary"


def serialize_words(words: Iterable[Word]) -> str:
    """Serialize words to the JSON array used by export files and storage."""
    return json.dumps([w.to_dict() for w in words], indent=2, ensure_ascii=False)


def export_filename(today: date | None = None) -> str:
    """File name for an export made on *today*."""
    today = today or date.today()
    return f"{FILENAME_PREFIX}-{today.isoformat()}.json"


def write_export(
    store: VocabularyStore,
    directory: str | Path = ".",
    *,
    today: date | None = None,
) -> Path:
    """Write the store's export payload into *directory*.

    Returns the path of the written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    destination = directory / export_filename(today)
    destination.write_text(store.export_words(), encoding="utf-8")
    logger.info(f"Exported {len(store)} word(s) to {destination}")
    return destination
