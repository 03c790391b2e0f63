"""
Answer similarity analysis.
Compares one submission's answers, position by position, against every other
submission of the same quiz.
"""

from dataclasses import dataclass
from typing import Tuple

from quizguard.models.answer import answers_equal, normalize_answer
from quizguard.models.submission import SimilarityMatch
from quizguard.utils.stats import clamp_score, round_half_up
from quizguard.utils.text_similarity import jaccard_similarity, levenshtein_similarity

SIMILARITY_THRESHOLD = 0.85
LONG_TEXT_LENGTH = 20


@dataclass(frozen=True)
class SimilarityAnalysis:
    max_score: float
    suspicious: Tuple[SimilarityMatch, ...]


def compare_answer(first, second):
    """Similarity of two answers at the same position.

    Returns:
        float in [0, 1], or None when either side is empty (position skipped)
    """
    a, b = normalize_answer(first), normalize_answer(second)
    if a.is_empty or b.is_empty:
        return None

    if a.is_text and b.is_text:
        if len(a.value) > LONG_TEXT_LENGTH or len(b.value) > LONG_TEXT_LENGTH:
            return (jaccard_similarity(a.value, b.value) +
                    levenshtein_similarity(a.value, b.value)) / 2
        return 1.0 if a.value == b.value else 0.0

    return 1.0 if answers_equal(a, b) else 0.0


def calculate_answer_similarity(answers_a, answers_b):
    """Average per-position similarity over the comparable positions.

    Missing answer lists or lists of different lengths score 0.
    """
    if answers_a is None or answers_b is None or len(answers_a) != len(answers_b):
        return 0.0

    total = 0.0
    comparable = 0
    for first, second in zip(answers_a, answers_b):
        score = compare_answer(first, second)
        if score is None:
            continue
        total += score
        comparable += 1

    return total / comparable if comparable else 0.0


def get_matching_answers(answers_a, answers_b):
    """Indices where both answers are present and equal after normalization.

    This uses strict equality even for long texts, so a paraphrased long
    answer adds to the similarity score but is not listed here.
    """
    return [i for i, (first, second) in enumerate(zip(answers_a, answers_b))
            if answers_equal(first, second)]


def detect_answer_similarity(submission, all_submissions):
    """Compare a submission against all other submissions.

    Args:
        submission: The Submission being analyzed
        all_submissions: Every Submission of the quiz; the submission itself
            and submissions without answers are skipped

    Returns:
        SimilarityAnalysis with the highest suspicious similarity (0-100, 0
        when no pair reaches SIMILARITY_THRESHOLD) and the suspicious pairs
    """
    suspicious = []
    max_score = 0.0

    if submission.answers is None:
        return SimilarityAnalysis(max_score, ())

    for other in all_submissions:
        if other.participant_id == submission.participant_id or other.answers is None:
            continue
        if len(other.answers) != len(submission.answers):
            continue

        similarity = calculate_answer_similarity(submission.answers, other.answers)
        if similarity >= SIMILARITY_THRESHOLD:
            max_score = max(max_score, similarity * 100)
            suspicious.append(SimilarityMatch(
                participant_id=other.participant_id,
                participant_name=other.participant_name,
                similarity_score=round_half_up(similarity * 100),
                matching_answers=tuple(get_matching_answers(submission.answers, other.answers)),
            ))

    return SimilarityAnalysis(clamp_score(max_score), tuple(suspicious))
