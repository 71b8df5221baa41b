"""Tests for the quiz progress recorder."""

from datetime import datetime, timedelta, timezone

import pytest

from custom_vocabulary import (
    MemoryStorage,
    PersistenceError,
    ProgressRecorder,
    QuizResult,
    RESULTS_SLOT,
    ValidationError,
)

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _result(word_id="w1", correct=True, time_taken=2.0, minutes=0):
    return QuizResult(
        word_id=word_id,
        is_correct=correct,
        user_answer="journey" if correct else "trip",
        correct_answer="journey",
        timestamp=T0 + timedelta(minutes=minutes),
        time_taken=time_taken,
    )


class TestRecord:
    def test_record_appends(self, recorder):
        r = _result()
        recorder.record_quiz_result(r)
        assert recorder.get_results() == (r,)
        assert len(recorder) == 1

    def test_record_with_matching_word(self, store_with_words, recorder):
        _, journey, *_ = store_with_words
        recorder.record_quiz_result(_result(word_id=journey.id), journey)
        assert recorder.get_word_stats(journey.id).attempts == 1

    def test_word_mismatch_rejected(self, store_with_words, recorder):
        _, journey, meeting, _ = store_with_words
        with pytest.raises(ValidationError):
            recorder.record_quiz_result(_result(word_id=meeting.id), journey)
        assert len(recorder) == 0

    @pytest.mark.parametrize("overrides", [
        {"word_id": ""},
        {"is_correct": "yes"},
        {"user_answer": None},
        {"timestamp": "2024-05-01"},
        {"time_taken": -1.0},
        {"time_taken": True},
    ])
    def test_malformed_result_rejected(self, recorder, overrides):
        fields = dict(
            word_id="w1", is_correct=True, user_answer="a",
            correct_answer="a", timestamp=T0, time_taken=1.0,
        )
        fields.update(overrides)
        with pytest.raises(ValidationError):
            recorder.record_quiz_result(QuizResult(**fields))

    def test_not_a_result(self, recorder):
        with pytest.raises(ValidationError):
            recorder.record_quiz_result({"wordId": "w1"})

    def test_unknown_word_id_allowed(self, recorder):
        recorder.record_quiz_result(_result(word_id="deleted-word"))
        assert recorder.get_word_stats("deleted-word").attempts == 1

    def test_filter_by_word(self, recorder):
        a, b = _result("w1"), _result("w2")
        recorder.record_quiz_result(a)
        recorder.record_quiz_result(b)
        assert recorder.get_results("w2") == (b,)


class TestStats:
    def test_word_stats(self, recorder):
        recorder.record_quiz_result(_result(correct=True, time_taken=2.0))
        recorder.record_quiz_result(_result(correct=False, time_taken=4.0, minutes=5))
        stats = recorder.get_word_stats("w1")
        assert stats.attempts == 2
        assert stats.correct == 1
        assert stats.incorrect == 1
        assert stats.accuracy == 0.5
        assert stats.average_time == 3.0
        assert stats.last_attempt == T0 + timedelta(minutes=5)

    def test_never_attempted(self, recorder):
        stats = recorder.get_word_stats("w9")
        assert stats.attempts == 0
        assert stats.accuracy == 0.0
        assert stats.last_attempt is None
        assert stats.mastered is False

    def test_mastery_needs_enough_attempts(self, recorder):
        for i in range(2):
            recorder.record_quiz_result(_result(minutes=i))
        assert recorder.get_word_stats("w1").mastered is False
        recorder.record_quiz_result(_result(minutes=3))
        assert recorder.get_word_stats("w1").mastered is True
        assert recorder.mastered_word_ids() == ["w1"]

    def test_mastery_needs_accuracy(self, recorder):
        for i, ok in enumerate([True, True, False, True]):
            recorder.record_quiz_result(_result(correct=ok, minutes=i))
        # 3/4 = 0.75 is below the threshold
        assert recorder.get_word_stats("w1").mastered is False
        recorder.record_quiz_result(_result(minutes=9))
        assert recorder.get_word_stats("w1").mastered is True

    def test_summary(self, recorder):
        recorder.record_quiz_result(_result("w1", True, 1.0))
        recorder.record_quiz_result(_result("w2", False, 3.0))
        summary = recorder.get_summary()
        assert summary.total_attempts == 2
        assert summary.correct == 1
        assert summary.incorrect == 1
        assert summary.accuracy == 0.5
        assert summary.average_time == 2.0
        assert summary.words_practiced == 2
        assert summary.words_mastered == 0

    def test_empty_summary(self, recorder):
        summary = recorder.get_summary()
        assert summary.total_attempts == 0
        assert summary.accuracy == 0.0
        assert summary.average_time == 0.0


class _FailingStorage(MemoryStorage):
    def set(self, slot, value):
        raise PersistenceError("disk full")


class TestPersistence:
    def test_reload(self, storage, recorder):
        r = _result()
        recorder.record_quiz_result(r)
        reloaded = ProgressRecorder(storage)
        assert reloaded.get_results() == (r,)
        assert reloaded.get_word_stats("w1").attempts == 1

    def test_corrupt_slot(self):
        with pytest.raises(PersistenceError):
            ProgressRecorder(MemoryStorage({RESULTS_SLOT: '[{"wordId": "x"}]'}))

    def test_failed_write_not_recorded(self):
        recorder = ProgressRecorder(_FailingStorage())
        with pytest.raises(PersistenceError):
            recorder.record_quiz_result(_result())
        assert len(recorder) == 0
        assert recorder.get_word_stats("w1").attempts == 0

    def test_reset(self, storage, recorder):
        recorder.record_quiz_result(_result())
        recorder.record_quiz_result(_result(minutes=1))
        assert recorder.reset() == 2
        assert recorder.get_results() == ()
        assert recorder.get_all_stats() == {}
        assert storage.get(RESULTS_SLOT) is None
        assert len(ProgressRecorder(storage)) == 0

    def test_naive_timestamp_treated_as_utc(self, storage, recorder):
        recorder.record_quiz_result(_result())
        naive = QuizResult(
            word_id="w1",
            is_correct=False,
            user_answer="trip",
            correct_answer="journey",
            timestamp=datetime(2024, 5, 1, 13, 0),
            time_taken=2.0,
        )
        recorder.record_quiz_result(naive)

        stats = recorder.get_word_stats("w1")
        assert stats.attempts == 2
        assert stats.last_attempt == T0 + timedelta(hours=1)
        assert recorder.get_results()[1].timestamp.tzinfo is not None
        assert len(ProgressRecorder(storage)) == 2

    def test_failed_write_keeps_previous_stats(self, storage, monkeypatch):
        recorder = ProgressRecorder(storage)
        recorder.record_quiz_result(_result())
        monkeypatch.setattr(storage, "set", _FailingStorage().set)
        with pytest.raises(PersistenceError):
            recorder.record_quiz_result(_result(correct=False, minutes=1))
        stats = recorder.get_word_stats("w1")
        assert (stats.attempts, stats.correct) == (1, 1)
        assert stats.last_attempt == T0
