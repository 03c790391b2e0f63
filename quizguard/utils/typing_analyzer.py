"""
Typing pattern analysis.
Looks for keystroke telemetry that does not look like a person typing answers:
pasted or scripted input, missing thinking pauses, answers never revised.
"""

from dataclasses import dataclass
from typing import Tuple

from quizguard.models.submission import Issue
from quizguard.utils.stats import clamp_score, format_number, mean, population_stddev, round_half_up

TYPING_SPEED_MIN = 10   # WPM
TYPING_SPEED_MAX = 500  # WPM


@dataclass(frozen=True)
class PatternAnalysis:
    anomaly_score: float
    flags: Tuple[Issue, ...]


def analyze_typing_pattern(typing_data):
    """
    Score a submission's typing telemetry.

    Each rule adds its weight independently; the total is capped at 100.

    Args:
        typing_data: TypingTelemetry for one submission

    Returns:
        PatternAnalysis with the anomaly score and the triggered issues
    """
    flags = []
    score = 0

    # 1. Typing speed
    speeds = typing_data.question_typing_speeds
    if speeds:
        avg_speed = mean(speeds)
        std_dev = population_stddev(speeds)

        if avg_speed < TYPING_SPEED_MIN:
            flags.append(Issue(
                'Extremely slow typing speed',
                f'{round_half_up(avg_speed)} WPM',
                f'>{TYPING_SPEED_MIN} WPM'
            ))
            score += 30
        elif avg_speed > TYPING_SPEED_MAX:
            flags.append(Issue(
                'Unrealistically fast typing speed',
                f'{round_half_up(avg_speed)} WPM',
                f'<{TYPING_SPEED_MAX} WPM'
            ))
            score += 40

        # Near-constant speed across questions suggests pasted input
        if std_dev < avg_speed * 0.1 and avg_speed > 100:
            flags.append(Issue(
                'Suspiciously consistent typing speed',
                f'StdDev: {std_dev:.2f}',
                'Natural variation expected'
            ))
            score += 35

    total_time = typing_data.total_time

    # 2. Pauses
    pauses = typing_data.pause_patterns
    if pauses is not None:
        if (pauses.long_pauses is not None and pauses.long_pauses < 2
                and total_time is not None and total_time > 60):
            flags.append(Issue(
                'Very few thinking pauses',
                f'{format_number(pauses.long_pauses)} pauses',
                'Regular pauses for thinking'
            ))
            score += 25

        if pauses.avg_pause is not None and pauses.avg_pause > 30:
            flags.append(Issue(
                'Unusually long pauses between typing',
                f'{pauses.avg_pause:.1f}s average',
                '<30s average pause'
            ))
            score += 20

    # 3. Answer revisions
    changes = typing_data.answer_changes
    if changes is not None:
        total_changes = sum(changes)

        if total_changes == 0 and total_time is not None and total_time > 30:
            flags.append(Issue(
                'No answer revisions',
                '0 changes',
                'Some natural corrections expected'
            ))
            score += 30

        total_questions = typing_data.total_questions
        if total_questions is not None and total_changes > total_questions * 5:
            flags.append(Issue(
                'Excessive answer revisions',
                f'{format_number(total_changes)} changes',
                f'<{format_number(total_questions * 5)} changes'
            ))
            score += 15

    return PatternAnalysis(clamp_score(score), tuple(flags))
