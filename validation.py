"""
Structural rules a question must satisfy before it is stored.

validate_question is pure: it looks only at the type and the choice inputs and
returns Valid or Invalid(reason). Nothing is raised.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from entities import ChoiceInput, QuestionType

MAX_KEYWORD_HINTS = 5

SINGLE_SELECT_REASON = "Single selection questions require exactly one valid answer"
MULTI_SELECT_REASON = "Multiple selection questions require at least one valid answer"
OPEN_TEXT_REASON = f"Open text questions support maximum {MAX_KEYWORD_HINTS} keyword hints"


@dataclass(frozen=True)
class Valid:
    pass


@dataclass(frozen=True)
class Invalid:
    reason: str


ValidationResult = Union[Valid, Invalid]


def validate_question(question_type: QuestionType, choices: Sequence[ChoiceInput]) -> ValidationResult:
    valid_count = sum(1 for c in choices if c.is_valid_answer)

    if question_type == QuestionType.SINGLE_SELECT:
        if valid_count != 1:
            return Invalid(SINGLE_SELECT_REASON)
    elif question_type == QuestionType.MULTI_SELECT:
        if valid_count < 1:
            return Invalid(MULTI_SELECT_REASON)
    elif question_type == QuestionType.OPEN_TEXT:
        if len(choices) > MAX_KEYWORD_HINTS:
            return Invalid(OPEN_TEXT_REASON)
    else:
        return Invalid(f"Unsupported question type: {question_type!r}")
    return Valid()
