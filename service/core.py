"""
Core orchestration that binds the store, validator, views and scoring engine.

Every outcome is a returned value:
- unknown quiz (or an empty quiz on submit) -> None
- structurally invalid question -> validation.Invalid
Routers decide what those mean on the wire.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Union
import logging

from engine.responses import Answer
from engine.scoring import ScoringEngine, ScoringResult
from entities import ChoiceInput, QuestionType, Quiz
from store import QuizStore
from validation import Invalid, validate_question
from views import AuthorQuestionView, ParticipantQuestionView, to_author_view, to_participant_view

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(self, store: QuizStore, scoring: Optional[ScoringEngine] = None) -> None:
        self._store = store
        self._scoring = scoring or ScoringEngine(store)

    @property
    def store(self) -> QuizStore:
        return self._store

    # ---- Quizzes -------------------------------------------------------------
    def create_quiz(self, title: str, description: Optional[str] = None) -> Quiz:
        quiz = self._store.create_quiz(title, description)
        logger.info("Quiz %s created (%r)", quiz.quiz_id, quiz.title)
        return quiz

    def list_quizzes(self) -> List[Quiz]:
        return self._store.list_quizzes()

    def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        return self._store.get_quiz(quiz_id)

    # ---- Questions -----------------------------------------------------------
    def attach_question(
        self,
        quiz_id: str,
        text: str,
        question_type: QuestionType,
        choices: Sequence[ChoiceInput],
    ) -> Union[AuthorQuestionView, Invalid, None]:
        """
        Validate, then store. Either the question is stored whole or nothing is.

        Unknown quiz is checked first so a bad question against a missing quiz
        reports "not found" rather than the structural problem.
        """
        if self._store.get_quiz(quiz_id) is None:
            return None

        verdict = validate_question(question_type, choices)
        if isinstance(verdict, Invalid):
            logger.warning("Question rejected for quiz %s: %s", quiz_id, verdict.reason)
            return verdict

        question = self._store.add_question(quiz_id, text, question_type, choices)
        if question is None:
            return None
        logger.info(
            "Question %s (%s, %d choices) attached to quiz %s",
            question.question_id, question.question_type.value, len(question.choices), quiz_id,
        )
        return to_author_view(question)

    def participant_questions(self, quiz_id: str) -> Optional[List[ParticipantQuestionView]]:
        if self._store.get_quiz(quiz_id) is None:
            return None
        return [to_participant_view(q) for q in self._store.list_questions_for_quiz(quiz_id)]

    # ---- Submissions ---------------------------------------------------------
    def submit(self, quiz_id: str, responses: Sequence[Answer]) -> Optional[ScoringResult]:
        result = self._scoring.score(quiz_id, responses)
        if result is None:
            logger.info("Submission for quiz %s not scorable", quiz_id)
            return None
        logger.info(
            "Submission for quiz %s scored %d/%d (%d%%)",
            quiz_id, result.final_score, result.max_possible_score, result.score_percentage,
        )
        return result
