"""
Domain records (tiny):
- Quiz, Question and Choice as held by the store.
- ChoiceInput is what an author sends before ids are assigned.
- Records are frozen; the store never hands out something a caller can mutate.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class QuestionType(str, Enum):
    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"
    OPEN_TEXT = "open_text"


@dataclass(frozen=True)
class ChoiceInput:
    text: str
    is_valid_answer: bool = False


@dataclass(frozen=True)
class Choice:
    choice_id: str
    text: str
    is_valid_answer: bool


@dataclass(frozen=True)
class Quiz:
    quiz_id: str
    title: str
    description: Optional[str]
    created_at: datetime
    last_modified: datetime


@dataclass(frozen=True)
class Question:
    question_id: str
    quiz_id: str
    text: str
    question_type: QuestionType
    choices: Tuple[Choice, ...]
    created_at: datetime
    last_modified: datetime

    # ---- Answer key ------------------------------------------------------
    @property
    def answer_key(self) -> Tuple[Choice, ...]:
        """Choices flagged as valid answers, in authoring order."""
        return tuple(c for c in self.choices if c.is_valid_answer)

    def answer_key_ids(self) -> list[str]:
        return [c.choice_id for c in self.answer_key]
