"""
Command-line interface for managing and practising custom vocabulary.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from custom_vocabulary import __version__
from custom_vocabulary.exceptions import VocabularyError
from custom_vocabulary.models import (
    Category,
    Difficulty,
    ImportResult,
    PartOfSpeech,
    Word,
    WordDraft,
)
from custom_vocabulary.progress import ProgressRecorder
from custom_vocabulary.quiz import QuizSession
from custom_vocabulary.storage import SQLiteStorage
from custom_vocabulary.store import VocabularyStore

from .config import Settings, load_settings

logger = logging.getLogger(__name__)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the vocab CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings(args.config)
    except (VocabularyError, FileNotFoundError) as e:
        print(f"[ERROR] {e}")
        return 1
    if args.db:
        settings.database = args.db

    _configure_logging(settings, args.verbose)

    try:
        with SQLiteStorage(settings.database) as storage:
            store = VocabularyStore(storage)
            recorder = ProgressRecorder(storage)
            return args.func(args, settings, store, recorder)
    except VocabularyError as e:
        print(f"[ERROR] {e}")
        return 1


def _configure_logging(settings: Settings, verbose: int) -> None:
    level = settings.log_level_number
    if verbose == 1:
        level = min(level, logging.INFO)
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vocab",
        description="Manage custom vocabulary and take fill-in-the-blank quizzes",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML settings file (default: ~/.custom_vocabulary.yaml)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        help="Database file, overrides the 'database' setting",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # add command
    add_parser = subparsers.add_parser("add", help="Add a new word")
    add_parser.add_argument("word", help="The vocabulary word")
    add_parser.add_argument("--definition", "-d", required=True)
    add_parser.add_argument(
        "--sentence", "-s",
        required=True,
        help="Example sentence that contains the word",
    )
    add_parser.add_argument(
        "--blank",
        type=int,
        help="0-based token to blank out (default: first token containing the word)",
    )
    _add_enum_options(add_parser, defaults=True)
    add_parser.set_defaults(func=cmd_add)

    # list command
    list_parser = subparsers.add_parser("list", help="List words")
    _add_enum_options(list_parser, defaults=False)
    list_parser.set_defaults(func=cmd_list)

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Search words and definitions",
    )
    search_parser.add_argument("query")
    search_parser.set_defaults(func=cmd_search)

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a word")
    delete_parser.add_argument("id", help="Word ID")
    delete_parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip confirmation prompt",
    )
    delete_parser.set_defaults(func=cmd_delete)

    # export command
    export_parser = subparsers.add_parser(
        "export",
        help="Export words to a JSON file",
    )
    export_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Directory to write into (default: 'export_dir' setting)",
    )
    export_parser.set_defaults(func=cmd_export)

    # import command
    import_parser = subparsers.add_parser(
        "import",
        help="Import words from a JSON file",
    )
    import_parser.add_argument("file", type=Path)
    import_parser.set_defaults(func=cmd_import)

    # quiz command
    quiz_parser = subparsers.add_parser(
        "quiz",
        help="Take a fill-in-the-blank quiz",
    )
    quiz_parser.add_argument(
        "--size", "-n",
        type=int,
        help="Number of questions (default: 'quiz_size' setting)",
    )
    quiz_parser.set_defaults(func=cmd_quiz)

    # stats command
    stats_parser = subparsers.add_parser("stats", help="Show quiz progress")
    stats_parser.set_defaults(func=cmd_stats)

    # reset command
    reset_parser = subparsers.add_parser(
        "reset",
        help="Clear quiz progress",
    )
    reset_parser.add_argument(
        "--words",
        action="store_true",
        help="Also delete every custom word",
    )
    reset_parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip confirmation prompt",
    )
    reset_parser.set_defaults(func=cmd_reset)

    return parser


def _add_enum_options(parser: argparse.ArgumentParser, defaults: bool) -> None:
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.INTERMEDIATE.value if defaults else None,
    )
    parser.add_argument(
        "--category",
        choices=[c.value for c in Category],
        default=Category.DAILY.value if defaults else None,
    )
    parser.add_argument(
        "--pos",
        choices=[p.value for p in PartOfSpeech],
        default=PartOfSpeech.NOUN.value if defaults else None,
        help="Part of speech",
    )


def _confirm(prompt: str) -> bool:
    response = input(f"{prompt} [y/N] ")
    return response.lower() in ("y", "yes")


def cmd_add(args, settings, store: VocabularyStore, recorder) -> int:
    """Handle add command."""
    draft = WordDraft(
        word=args.word,
        definition=args.definition,
        example_sentence=args.sentence,
        blank_position=args.blank,
        difficulty=Difficulty(args.difficulty),
        category=Category(args.category),
        part_of_speech=PartOfSpeech(args.pos),
    )
    word = store.add_word(draft)
    print(f"Added \"{word.word}\" ({word.id})")
    return 0


def cmd_list(args, settings, store: VocabularyStore, recorder) -> int:
    """Handle list command."""
    words = store.filter_words(
        difficulty=args.difficulty,
        category=args.category,
        part_of_speech=args.pos,
    )
    print(f"\nYour Custom Words ({len(words)})")
    if not words:
        print("  Add your first custom word with: vocab add")
        return 0
    _print_words(words)
    return 0


def cmd_search(args, settings, store: VocabularyStore, recorder) -> int:
    """Handle search command."""
    words = store.search_words(args.query)
    if not words:
        print(f"No words match {args.query!r}.")
        return 0
    print(f"\n{len(words)} match(es) for {args.query!r}")
    _print_words(words)
    return 0


def cmd_delete(args, settings, store: VocabularyStore, recorder) -> int:
    """Handle delete command."""
    if args.id not in store:
        print(f"Word {args.id} not found.")
        return 1
    word = store.get_word(args.id)
    if not args.yes and not _confirm(f"Delete \"{word.word}\"?"):
        print("Aborted.")
        return 1
    store.delete_word(args.id)
    print(f"Deleted \"{word.word}\".")
    return 0


def cmd_export(args, settings: Settings, store: VocabularyStore, recorder) -> int:
    """Handle export command."""
    destination = store.export_to_file(args.output or settings.export_dir)
    print(f"Exported {len(store)} word(s) to {destination}")
    return 0


def cmd_import(args, settings, store: VocabularyStore, recorder) -> int:
    """Handle import command."""
    try:
        result = store.import_file(args.file)
    except FileNotFoundError as e:
        print(f"[ERROR] {e}")
        return 1
    _print_import_result(result)
    return 0 if result.success else 1


def cmd_quiz(args, settings: Settings, store: VocabularyStore, recorder: ProgressRecorder) -> int:
    """Handle quiz command."""
    session = QuizSession(
        store.get_custom_words(),
        recorder,
        size=args.size if args.size is not None else settings.quiz_size,
    )
    while not session.is_complete:
        question = session.current_question()
        print(f"\nQuestion {question.question_number}/{question.total}")
        print(f"  {question.prompt}")
        print(f"  Hint: {question.word.definition} ({question.word.part_of_speech.value})")
        try:
            answer = input("  Answer: ")
        except (EOFError, KeyboardInterrupt):
            print("\nAborted.")
            return 1
        result = session.answer(answer)
        if result.is_correct:
            print("  Correct!")
        else:
            print(f"  Incorrect. The answer was \"{result.correct_answer}\".")

    summary = session.summary()
    print(f"\nResults:")
    print(f"  Score: {summary.score}/{summary.total} ({summary.percentage}%)")
    print(f"  Time:  {summary.total_time:.1f}s")
    return 0


def cmd_stats(args, settings, store: VocabularyStore, recorder: ProgressRecorder) -> int:
    """Handle stats command."""
    summary = recorder.get_summary()
    if summary.total_attempts == 0:
        print("No quiz results recorded yet.")
        return 0

    print(f"\nProgress:")
    print(f"  Attempts: {summary.total_attempts}")
    print(f"  Correct:  {summary.correct}")
    print(f"  Accuracy: {summary.accuracy:.0%}")
    print(f"  Avg time: {summary.average_time:.1f}s")
    print(f"  Mastered: {summary.words_mastered}/{summary.words_practiced}")

    print(f"\n{'Word':<20} {'Attempts':<9} {'Correct':<8} {'Avg time':<9} {'Mastered'}")
    print("-" * 60)
    for word_id, stats in recorder.get_all_stats().items():
        # Results may outlive their word
        label = store.get_word(word_id).word if word_id in store else f"({word_id[:8]})"
        print(
            f"{label[:20]:<20} {stats.attempts:<9} {stats.correct:<8} "
            f"{stats.average_time:<9.1f} {'yes' if stats.mastered else 'no'}"
        )
    return 0


def cmd_reset(args, settings, store: VocabularyStore, recorder: ProgressRecorder) -> int:
    """Handle reset command."""
    what = "quiz progress and all words" if args.words else "quiz progress"
    if not args.yes and not _confirm(f"Clear {what}?"):
        print("Aborted.")
        return 1
    count = recorder.reset()
    print(f"Removed {count} quiz result(s).")
    if args.words:
        print(f"Removed {store.clear()} word(s).")
    return 0


def _print_words(words: tuple[Word, ...]) -> None:
    for word in words:
        print(
            f"\n  {word.word}  [{word.part_of_speech.value}, "
            f"{word.difficulty.value}, {word.category.value}]"
        )
        print(f"    id: {word.id}")
        print(f"    {word.definition}")
        print(f"    \"{word.example_sentence}\"")


def _print_import_result(result: ImportResult) -> None:
    if result.success:
        print(f"Imported {result.imported} word(s) successfully.")
    else:
        print("Import failed.")
    for error in result.errors:
        print(f"  [ERROR] {error}")


if __name__ == "__main__":
    sys.exit(main())
