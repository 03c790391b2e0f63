"""Quiz answers as a tagged union.

Every raw answer coming from a submission is normalized into one of:

- TEXT: a free-text or fill-in answer (case-folded, trimmed)
- CHOICE: a single scalar choice (number or boolean)
- CHOICE_SET: an ordered sequence (multiple-answer, ordering questions)
- STRUCTURED: a mapping (matching, hotspot, drag-and-drop questions)
- EMPTY: no answer
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class AnswerKind(str, Enum):
    TEXT = 'text'
    CHOICE = 'choice'
    CHOICE_SET = 'choice_set'
    STRUCTURED = 'structured'
    EMPTY = 'empty'


@dataclass(frozen=True)
class Answer:
    kind: AnswerKind
    value: Any = None

    @property
    def is_empty(self):
        return self.kind is AnswerKind.EMPTY

    @property
    def is_text(self):
        return self.kind is AnswerKind.TEXT

    def canonical(self):
        """Stable serialization used for structural equality."""
        if self.kind is AnswerKind.TEXT:
            return json.dumps(self.value)
        return json.dumps(_canonical_value(self.value), sort_keys=True,
                          separators=(',', ':'), default=str)


EMPTY_ANSWER = Answer(AnswerKind.EMPTY)


def _canonical_value(value):
    # 1.0 and 1 serialize the same way, as they do in the browser payload
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_canonical_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _canonical_value(v) for k, v in value.items()}
    return value


def normalize_answer(raw):
    """Normalize a raw answer value into an Answer.

    Strings are case-folded and trimmed; a string that is empty after
    trimming counts as no answer. Other values pass through unchanged.
    """
    if raw is None:
        return EMPTY_ANSWER
    if isinstance(raw, Answer):
        return raw
    if isinstance(raw, str):
        text = raw.strip().lower()
        return Answer(AnswerKind.TEXT, text) if text else EMPTY_ANSWER
    if isinstance(raw, (bool, int, float)):
        return Answer(AnswerKind.CHOICE, raw)
    if isinstance(raw, (list, tuple)):
        return Answer(AnswerKind.CHOICE_SET, tuple(raw))
    if isinstance(raw, dict):
        return Answer(AnswerKind.STRUCTURED, raw)
    return Answer(AnswerKind.STRUCTURED, str(raw))


def answers_equal(first, second):
    """Structural equality of two answers after normalization.

    Empty answers are never equal to anything, including another empty answer.
    """
    a, b = normalize_answer(first), normalize_answer(second)
    if a.is_empty or b.is_empty:
        return False
    if a.is_text != b.is_text:
        return False
    return a.canonical() == b.canonical()
