"""
In-memory entity store:
- Owns every Quiz and Question for the process lifetime (no delete, no update).
- Lookups are keyed maps; questions are also indexed per quiz in insertion order.
- One coarse lock serializes reads and writes (handlers run on a thread pool).
"""
from __future__ import annotations
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence
import logging
import threading

from entities import Choice, ChoiceInput, Question, QuestionType, Quiz
from ids import new_id, utc_now

logger = logging.getLogger(__name__)


class QuizStore:
    """In-memory store (swap for Redis/DB when needed)."""

    def __init__(
        self,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._new_id = id_factory
        self._now = clock
        self._lock = threading.Lock()
        self._quizzes: Dict[str, Quiz] = {}
        self._questions: Dict[str, Question] = {}
        self._questions_by_quiz: Dict[str, List[str]] = {}

    # ---- Quizzes -------------------------------------------------------------
    def create_quiz(self, title: str, description: Optional[str] = None) -> Quiz:
        now = self._now()
        with self._lock:
            quiz = Quiz(
                quiz_id=self._new_id(),
                title=title,
                description=description,
                created_at=now,
                last_modified=now,
            )
            self._quizzes[quiz.quiz_id] = quiz
            self._questions_by_quiz[quiz.quiz_id] = []
        logger.debug("Stored quiz %s", quiz.quiz_id)
        return quiz

    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        with self._lock:
            return self._quizzes.get(quiz_id)

    def list_quizzes(self) -> List[Quiz]:
        with self._lock:
            return list(self._quizzes.values())

    # ---- Questions -----------------------------------------------------------
    def add_question(
        self,
        quiz_id: str,
        text: str,
        question_type: QuestionType,
        choices: Sequence[ChoiceInput],
    ) -> Optional[Question]:
        """
        Insert a question under an existing quiz.

        Returns None when quiz_id does not resolve. Structural checks are the
        caller's job (see validation.validate_question); this only commits.
        """
        now = self._now()
        with self._lock:
            if quiz_id not in self._quizzes:
                return None
            question = Question(
                question_id=self._new_id(),
                quiz_id=quiz_id,
                text=text,
                question_type=QuestionType(question_type),
                choices=tuple(
                    Choice(choice_id=self._new_id(), text=c.text, is_valid_answer=bool(c.is_valid_answer))
                    for c in choices
                ),
                created_at=now,
                last_modified=now,
            )
            self._questions[question.question_id] = question
            self._questions_by_quiz[quiz_id].append(question.question_id)
        logger.debug("Stored question %s under quiz %s", question.question_id, quiz_id)
        return question

    def get_question(self, question_id: str) -> Optional[Question]:
        with self._lock:
            return self._questions.get(question_id)

    def list_questions_for_quiz(self, quiz_id: str) -> List[Question]:
        with self._lock:
            ids = self._questions_by_quiz.get(quiz_id, [])
            return [self._questions[qid] for qid in ids]
