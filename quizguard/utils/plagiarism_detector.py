"""
Plagiarism risk scoring for quiz submissions.
Combines answer similarity, typing pattern and timing signals into a single
0-100 suspicion score, and ranks a whole class by that score.
"""

import logging
from collections.abc import Sequence

from quizguard.models.submission import (
    AnalysisResult, BatchReport, Flag, FlagType, InvalidInputError, Scores,
    Severity, Submission
)
from quizguard.utils import utc_now
from quizguard.utils.similarity_analyzer import detect_answer_similarity
from quizguard.utils.stats import clamp_score, round_half_up
from quizguard.utils.time_analyzer import detect_time_anomalies
from quizguard.utils.typing_analyzer import analyze_typing_pattern

logger = logging.getLogger(__name__)

SUSPICIOUS_SCORE = 60

SIMILARITY_WEIGHT = 0.5
TYPING_WEIGHT = 0.3
TIME_WEIGHT = 0.2


def get_severity(score):
    """Map a 0-100 category score to a flag severity."""
    if score >= 80:
        return Severity.HIGH
    if score >= 60:
        return Severity.MEDIUM
    if score >= 40:
        return Severity.LOW
    return Severity.INFO


def overall_score(answer_similarity, typing_pattern, time_anomaly):
    """Weighted suspicion score, rounded and clamped to 0-100."""
    return clamp_score(round_half_up(
        answer_similarity * SIMILARITY_WEIGHT +
        typing_pattern * TYPING_WEIGHT +
        time_anomaly * TIME_WEIGHT
    ))


def _is_sequence(value):
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _coerce_peers(all_submissions):
    """Stored submissions as models; malformed entries are skipped."""
    if not _is_sequence(all_submissions):
        raise InvalidInputError('all_submissions must be a list of submissions')
    peers = []
    for index, data in enumerate(all_submissions):
        try:
            peers.append(Submission.from_dict(data))
        except InvalidInputError as e:
            logger.warning(f"Skipping stored submission #{index}: {str(e)}")
    return peers


def _validate_questions(questions):
    if not _is_sequence(questions):
        raise InvalidInputError('questions must be a list')


def _analyze(submission, submissions, questions):
    flags = []

    # 1. Answer similarity
    similarity = detect_answer_similarity(submission, submissions)
    if similarity.suspicious:
        flags.append(Flag(
            type=FlagType.ANSWER_SIMILARITY,
            severity=get_severity(similarity.max_score),
            description=f'High similarity with {len(similarity.suspicious)} submission(s)',
            details=similarity.suspicious
        ))

    # 2. Typing pattern (only when the tracker sent telemetry)
    typing_score = 0
    if submission.typing_data is not None:
        typing = analyze_typing_pattern(submission.typing_data)
        typing_score = typing.anomaly_score
        if typing.flags:
            flags.append(Flag(
                type=FlagType.TYPING_PATTERN,
                severity=get_severity(typing.anomaly_score),
                description='Suspicious typing patterns detected',
                details=typing.flags
            ))

    # 3. Time anomalies
    timing = detect_time_anomalies(submission, submissions, questions)
    if timing.flags:
        flags.append(Flag(
            type=FlagType.TIME_ANOMALY,
            severity=get_severity(timing.anomaly_score),
            description='Unusual time-based patterns detected',
            details=timing.flags
        ))

    scores = Scores(
        answer_similarity=similarity.max_score,
        typing_pattern=typing_score,
        time_anomaly=timing.anomaly_score
    )
    suspicion_score = overall_score(
        scores.answer_similarity, scores.typing_pattern, scores.time_anomaly
    )

    result = AnalysisResult(
        participant_id=submission.participant_id,
        participant_name=submission.participant_name,
        is_suspicious=suspicion_score >= SUSPICIOUS_SCORE,
        suspicion_score=suspicion_score,
        scores=scores,
        flags=tuple(flags),
        timestamp=utc_now()
    )

    logger.info(f"Plagiarism analysis for {submission.participant_name or submission.participant_id}: "
                f"suspicion score = {suspicion_score}")
    if result.is_suspicious:
        logger.warning(f"FLAGGED: {submission.participant_name or submission.participant_id} "
                       f"flagged for plagiarism (score: {suspicion_score}, flags: {result.flag_types})")

    return result


def analyze(submission, all_submissions, questions):
    """
    Analyze a quiz submission for potential plagiarism.

    Args:
        submission: The Submission (or its JSON document) to analyze
        all_submissions: All stored submissions of the quiz, with or without
            the submission itself
        questions: The quiz questions (only the count is used)

    Returns:
        AnalysisResult

    Raises:
        InvalidInputError: if the submission is malformed or questions /
            all_submissions is not a list. Malformed stored entries are
            skipped instead.
    """
    if submission is None:
        raise InvalidInputError('submission is required')
    _validate_questions(questions)
    submissions = _coerce_peers(all_submissions)
    submission = Submission.from_dict(submission)
    return _analyze(submission, submissions, questions)


def generate_batch_report(all_submissions, questions):
    """
    Analyze every submission of a quiz and rank them.

    Each submission is compared against the full collection. Reports are
    sorted by suspicion score, highest first; ties keep input order.
    Stored entries that are not valid submissions are left out of the
    report and of total_submissions.

    Returns:
        BatchReport
    """
    _validate_questions(questions)
    submissions = _coerce_peers(all_submissions)

    reports = [_analyze(s, submissions, questions) for s in submissions]
    reports.sort(key=lambda r: r.suspicion_score, reverse=True)

    flagged = sum(1 for r in reports if r.is_suspicious)
    logger.info(f"Batch plagiarism report: {flagged}/{len(reports)} submissions flagged")

    return BatchReport(
        total_submissions=len(submissions),
        flagged_submissions=flagged,
        reports=tuple(reports),
        generated_at=utc_now()
    )


def find_submission(all_submissions, participant_id):
    """Return the submission of a participant, or None."""
    for submission in _coerce_peers(all_submissions):
        if str(submission.participant_id) == str(participant_id):
            return submission
    return None
