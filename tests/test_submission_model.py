"""Tests for submission parsing and result serialization."""

from datetime import datetime, timezone

import pytest

from quizguard.models.submission import (
    AnalysisResult, BatchReport, Flag, FlagType, InvalidInputError, Issue,
    Scores, Severity, SimilarityMatch, Submission
)
from tests.conftest import make_submission


def test_from_dict_reads_stored_result():
    submission = Submission.from_dict(make_submission(
        'p1', ['a', ['x', 'y']], name='Alice', completion_time=125,
        timestamp='2026-03-01T10:00:00.000Z',
        typing_data={
            'questionTypingSpeeds': [40, 'n/a', 60],
            'pausePatterns': {'longPauses': 3, 'avgPause': 5.5},
            'answerChanges': [1, 2],
            'totalTime': 125,
            'totalQuestions': 2,
        },
        question_times=[60, 65],
    ))

    assert submission.participant_name == 'Alice'
    assert submission.answers == ('a', ['x', 'y'])
    assert submission.completion_time == 125
    assert submission.timestamp == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert submission.typing_data.question_typing_speeds == (40, 60)
    assert submission.typing_data.pause_patterns.avg_pause == 5.5
    assert submission.typing_data.answer_changes == (1, 2)
    assert submission.question_times == (60, 65)


def test_from_dict_degrades_bad_optional_fields():
    submission = Submission.from_dict({
        'participantId': 'p1',
        'answers': 'not a list',
        'completionTime': 'slow',
        'timestamp': 'yesterday',
        'typingData': 'none',
        'questionTimes': {'q1': 3},
    })

    assert submission.answers is None
    assert submission.completion_time is None
    assert submission.timestamp is None
    assert submission.typing_data is None
    assert submission.question_times is None


def test_epoch_millisecond_timestamp():
    submission = Submission.from_dict({'participantId': 'p1', 'timestamp': 1772359200000})
    assert submission.timestamp == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize('data', [None, 'p1', ['p1'], {'participantName': 'x'}])
def test_from_dict_rejects_invalid_documents(data):
    with pytest.raises(InvalidInputError):
        Submission.from_dict(data)


def test_submission_round_trips_to_json_shape():
    data = make_submission('p1', ['a'], completion_time=30.0, timestamp='2026-03-01T10:00:00.000Z')
    assert Submission.from_dict(data).to_dict() == data


def test_analysis_result_to_dict():
    result = AnalysisResult(
        participant_id='p1',
        participant_name='Alice',
        is_suspicious=True,
        suspicion_score=72,
        scores=Scores(answer_similarity=100, typing_pattern=75, time_anomaly=40),
        flags=(
            Flag(FlagType.ANSWER_SIMILARITY, Severity.HIGH, 'High similarity with 1 submission(s)',
                 (SimilarityMatch('p2', 'Bob', 100, (0, 1)),)),
            Flag(FlagType.TIME_ANOMALY, Severity.LOW, 'Unusual time-based patterns detected',
                 (Issue('Suspiciously fast completion', '5s for 10 questions', '>20s'),)),
        ),
        timestamp=datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc),
    )

    data = result.to_dict()

    assert data['isSuspicious'] is True
    assert data['scores'] == {'answerSimilarity': 100, 'typingPattern': 75, 'timeAnomaly': 40}
    assert data['flags'][0]['type'] == 'ANSWER_SIMILARITY'
    assert data['flags'][0]['details'][0] == {
        'participantId': 'p2', 'participantName': 'Bob',
        'similarityScore': 100, 'matchingAnswers': [0, 1],
    }
    assert data['flags'][1]['details'][0]['expected'] == '>20s'
    assert data['timestamp'] == '2026-03-01T10:00:00.000Z'
    assert result.flag_types == ['ANSWER_SIMILARITY', 'TIME_ANOMALY']


def test_batch_report_to_dict():
    report = BatchReport(total_submissions=0, flagged_submissions=0,
                         generated_at=datetime(2026, 3, 1, tzinfo=timezone.utc))
    assert report.to_dict() == {
        'totalSubmissions': 0,
        'flaggedSubmissions': 0,
        'reports': [],
        'generatedAt': '2026-03-01T00:00:00.000Z',
    }
