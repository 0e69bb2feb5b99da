"""
Read-only projections of a stored Question.

- AuthorQuestionView: everything, including which choices are valid answers.
- ParticipantQuestionView: what a quiz taker may see. It has no field for the
  valid-answer flag at all, so the flag cannot leak through it.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from entities import Question, QuestionType


@dataclass(frozen=True)
class AuthorChoiceView:
    choice_id: str
    choice_text: str
    is_valid_answer: bool


@dataclass(frozen=True)
class AuthorQuestionView:
    question_id: str
    quiz_id: str
    question_text: str
    question_type: QuestionType
    choices: Tuple[AuthorChoiceView, ...]
    created_at: datetime
    last_modified: datetime


@dataclass(frozen=True)
class ParticipantChoiceView:
    choice_id: str
    choice_text: str


@dataclass(frozen=True)
class ParticipantQuestionView:
    question_id: str
    question_text: str
    question_type: QuestionType
    choices: Tuple[ParticipantChoiceView, ...]


def to_author_view(question: Question) -> AuthorQuestionView:
    return AuthorQuestionView(
        question_id=question.question_id,
        quiz_id=question.quiz_id,
        question_text=question.text,
        question_type=question.question_type,
        choices=tuple(
            AuthorChoiceView(choice_id=c.choice_id, choice_text=c.text, is_valid_answer=c.is_valid_answer)
            for c in question.choices
        ),
        created_at=question.created_at,
        last_modified=question.last_modified,
    )


def to_participant_view(question: Question) -> ParticipantQuestionView:
    return ParticipantQuestionView(
        question_id=question.question_id,
        question_text=question.text,
        question_type=question.question_type,
        choices=tuple(ParticipantChoiceView(choice_id=c.choice_id, choice_text=c.text) for c in question.choices),
    )
