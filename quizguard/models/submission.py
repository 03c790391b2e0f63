"""Submission and analysis result models.

These are plain immutable values: the caller owns persistence. Conversion to
and from the camelCase JSON documents used by the quiz front end lives here
(from_dict / to_dict).
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from quizguard.utils import format_timestamp, parse_timestamp, utc_now
from quizguard.utils.stats import is_number, numeric_values


class InvalidInputError(ValueError):
    """Raised when the analysis input is missing or has the wrong shape."""


class FlagType(str, Enum):
    ANSWER_SIMILARITY = 'ANSWER_SIMILARITY'
    TYPING_PATTERN = 'TYPING_PATTERN'
    TIME_ANOMALY = 'TIME_ANOMALY'


class Severity(str, Enum):
    INFO = 'INFO'
    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'


def _number_or_none(value):
    return float(value) if is_number(value) else None


def _sequence_or_none(value):
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return tuple(value)
    return None


@dataclass(frozen=True)
class PausePatterns:
    long_pauses: Optional[float] = None
    avg_pause: Optional[float] = None

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, Mapping):
            return None
        return cls(
            long_pauses=_number_or_none(data.get('longPauses')),
            avg_pause=_number_or_none(data.get('avgPause')),
        )

    def to_dict(self):
        return {'longPauses': self.long_pauses, 'avgPause': self.avg_pause}


@dataclass(frozen=True)
class TypingTelemetry:
    question_typing_speeds: Tuple[float, ...] = ()
    pause_patterns: Optional[PausePatterns] = None
    # None means no revision data was recorded at all
    answer_changes: Optional[Tuple[float, ...]] = None
    total_time: Optional[float] = None
    total_questions: Optional[float] = None

    @classmethod
    def from_dict(cls, data):
        """Build telemetry from the tracker payload; None if it is not a mapping."""
        if not isinstance(data, Mapping):
            return None
        changes = _sequence_or_none(data.get('answerChanges'))
        return cls(
            question_typing_speeds=tuple(numeric_values(data.get('questionTypingSpeeds'))),
            pause_patterns=PausePatterns.from_dict(data.get('pausePatterns')),
            answer_changes=tuple(numeric_values(changes)) if changes is not None else None,
            total_time=_number_or_none(data.get('totalTime')),
            total_questions=_number_or_none(data.get('totalQuestions')),
        )

    def to_dict(self):
        return {
            'questionTypingSpeeds': list(self.question_typing_speeds),
            'pausePatterns': self.pause_patterns.to_dict() if self.pause_patterns else None,
            'answerChanges': list(self.answer_changes) if self.answer_changes is not None else None,
            'totalTime': self.total_time,
            'totalQuestions': self.total_questions,
        }


@dataclass(frozen=True)
class Submission:
    participant_id: Any
    participant_name: str = ''
    answers: Optional[Tuple[Any, ...]] = None
    completion_time: Optional[float] = None
    timestamp: Optional[datetime] = None
    typing_data: Optional[TypingTelemetry] = None
    question_times: Optional[Tuple[Any, ...]] = None

    @classmethod
    def from_dict(cls, data):
        """Build a Submission from a stored result document.

        Optional fields with the wrong type are dropped, not rejected.

        Raises:
            InvalidInputError: if data is not a mapping or has no participantId
        """
        if isinstance(data, Submission):
            return data
        if not isinstance(data, Mapping):
            raise InvalidInputError('Submission must be a JSON object')
        participant_id = data.get('participantId')
        if participant_id is None:
            raise InvalidInputError('Submission is missing participantId')
        name = data.get('participantName')
        return cls(
            participant_id=participant_id,
            participant_name=name if isinstance(name, str) else '',
            answers=_sequence_or_none(data.get('answers')),
            completion_time=_number_or_none(data.get('completionTime')),
            timestamp=parse_timestamp(data.get('timestamp')),
            typing_data=TypingTelemetry.from_dict(data.get('typingData')),
            question_times=_sequence_or_none(data.get('questionTimes')),
        )

    def to_dict(self):
        return {
            'participantId': self.participant_id,
            'participantName': self.participant_name,
            'answers': list(self.answers) if self.answers is not None else None,
            'completionTime': self.completion_time,
            'timestamp': format_timestamp(self.timestamp),
            'typingData': self.typing_data.to_dict() if self.typing_data else None,
            'questionTimes': list(self.question_times) if self.question_times is not None else None,
        }


@dataclass(frozen=True)
class SimilarityMatch:
    """Another participant whose answers are suspiciously close."""
    participant_id: Any
    participant_name: str
    similarity_score: int
    matching_answers: Tuple[int, ...]

    def to_dict(self):
        return {
            'participantId': self.participant_id,
            'participantName': self.participant_name,
            'similarityScore': self.similarity_score,
            'matchingAnswers': list(self.matching_answers),
        }


@dataclass(frozen=True)
class Issue:
    """A named anomaly with the observed value and what was expected."""
    issue: str
    value: str
    expected: str

    def to_dict(self):
        return {'issue': self.issue, 'value': self.value, 'expected': self.expected}


@dataclass(frozen=True)
class Flag:
    type: FlagType
    severity: Severity
    description: str
    details: Tuple[Any, ...] = ()

    def to_dict(self):
        return {
            'type': self.type.value,
            'severity': self.severity.value,
            'description': self.description,
            'details': [d.to_dict() for d in self.details],
        }


@dataclass(frozen=True)
class Scores:
    answer_similarity: float = 0
    typing_pattern: float = 0
    time_anomaly: float = 0

    def to_dict(self):
        return {
            'answerSimilarity': self.answer_similarity,
            'typingPattern': self.typing_pattern,
            'timeAnomaly': self.time_anomaly,
        }


@dataclass(frozen=True)
class AnalysisResult:
    participant_id: Any
    participant_name: str
    is_suspicious: bool
    suspicion_score: int
    scores: Scores
    flags: Tuple[Flag, ...] = ()
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def flag_types(self):
        return [f.type.value for f in self.flags]

    def to_dict(self):
        return {
            'participantId': self.participant_id,
            'participantName': self.participant_name,
            'isSuspicious': self.is_suspicious,
            'suspicionScore': self.suspicion_score,
            'scores': self.scores.to_dict(),
            'flags': [f.to_dict() for f in self.flags],
            'timestamp': format_timestamp(self.timestamp),
        }


@dataclass(frozen=True)
class BatchReport:
    total_submissions: int
    flagged_submissions: int
    reports: Tuple[AnalysisResult, ...] = ()
    generated_at: datetime = field(default_factory=utc_now)

    def to_dict(self):
        return {
            'totalSubmissions': self.total_submissions,
            'flaggedSubmissions': self.flagged_submissions,
            'reports': [r.to_dict() for r in self.reports],
            'generatedAt': format_timestamp(self.generated_at),
        }
