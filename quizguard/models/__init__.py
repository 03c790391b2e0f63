# Models package - plain value types used by the analyzers
from quizguard.models.answer import Answer, AnswerKind, normalize_answer, answers_equal
from quizguard.models.submission import (
    InvalidInputError, FlagType, Severity,
    Submission, TypingTelemetry, PausePatterns,
    SimilarityMatch, Issue, Flag, Scores, AnalysisResult, BatchReport
)

__all__ = [
    'Answer', 'AnswerKind', 'normalize_answer', 'answers_equal',
    'InvalidInputError', 'FlagType', 'Severity',
    'Submission', 'TypingTelemetry', 'PausePatterns',
    'SimilarityMatch', 'Issue', 'Flag', 'Scores', 'AnalysisResult', 'BatchReport'
]
