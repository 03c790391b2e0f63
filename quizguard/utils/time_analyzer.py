"""
Time-based anomaly detection.
Compares completion time against the question count and the rest of the
class, checks per-question pacing, and spots near-simultaneous submissions.
"""

from dataclasses import dataclass
from typing import Tuple

from quizguard.models.submission import Issue
from quizguard.utils import to_epoch_ms
from quizguard.utils.stats import (
    clamp_score, format_number, mean, numeric_values, population_stddev,
    population_variance, round_half_up
)

SUSPICIOUS_SECONDS_PER_QUESTION = 2
MIN_PEERS_FOR_DEVIATION = 3
UNIFORM_TIMING_MIN_QUESTIONS = 5
INSTANT_ANSWER_SECONDS = 1
SIMULTANEOUS_WINDOW_MS = 5000


@dataclass(frozen=True)
class TimeAnalysis:
    anomaly_score: float
    flags: Tuple[Issue, ...]


def completed_peers(submission, all_submissions):
    """Other participants' submissions that recorded a completion time."""
    return [s for s in all_submissions
            if s.completion_time and s.participant_id != submission.participant_id]


def detect_time_anomalies(submission, all_submissions, questions):
    """
    Score the timing of a submission.

    Args:
        submission: The Submission being analyzed
        all_submissions: Every Submission of the quiz
        questions: The quiz questions (only the count is used)

    Returns:
        TimeAnalysis with the anomaly score (0-100) and the triggered issues
    """
    flags = []
    score = 0

    question_count = len(questions)
    completion_time = submission.completion_time
    peers = completed_peers(submission, all_submissions)

    # 1. Overall completion time
    if completion_time is not None:
        minimum = SUSPICIOUS_SECONDS_PER_QUESTION * question_count
        if completion_time < minimum:
            flags.append(Issue(
                'Suspiciously fast completion',
                f'{format_number(completion_time)}s for {question_count} questions',
                f'>{minimum}s'
            ))
            score += 40

    # 2. Compared with the rest of the class
    if completion_time is not None and len(peers) >= MIN_PEERS_FOR_DEVIATION:
        peer_times = [s.completion_time for s in peers]
        avg_time = mean(peer_times)
        std_dev = population_stddev(peer_times)

        if abs(completion_time - avg_time) > 2 * std_dev:
            if completion_time < avg_time:
                flags.append(Issue(
                    'Completion time significantly faster than peers',
                    f'{format_number(completion_time)}s',
                    f'~{round_half_up(avg_time)}s average'
                ))
                score += 30
            else:
                flags.append(Issue(
                    'Unusually slow completion time',
                    f'{format_number(completion_time)}s',
                    f'~{round_half_up(avg_time)}s average'
                ))
                score += 15

    # 3. Per-question timing
    question_times = numeric_values(submission.question_times)
    if question_times:
        variance = population_variance(question_times)
        avg_question_time = mean(question_times)

        if (len(question_times) > UNIFORM_TIMING_MIN_QUESTIONS
                and variance < avg_question_time * 0.1):
            flags.append(Issue(
                'Unnaturally consistent question timing',
                f'Variance: {variance:.2f}',
                'Variable timing across questions'
            ))
            score += 25

        instant = sum(1 for t in question_times if t < INSTANT_ANSWER_SECONDS)
        if instant > len(question_times) * 0.3:
            flags.append(Issue(
                'Too many instant answers',
                f'{instant} questions',
                'More time for reading and thinking'
            ))
            score += 35

    # 4. Submitted at the same moment as others
    if submission.timestamp is not None and peers:
        submitted_ms = to_epoch_ms(submission.timestamp)
        nearby = [s for s in peers
                  if s.timestamp is not None
                  and abs(submitted_ms - to_epoch_ms(s.timestamp)) < SIMULTANEOUS_WINDOW_MS]

        if len(nearby) >= 2:
            flags.append(Issue(
                'Multiple submissions within 5 seconds',
                f'{len(nearby) + 1} submissions',
                'More varied submission times'
            ))
            score += 20

    return TimeAnalysis(clamp_score(score), tuple(flags))
