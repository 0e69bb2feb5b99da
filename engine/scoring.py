"""
Scoring engine: evaluate a submission against the stored answer keys.

Rules per question type:
- single_select: correct iff the one selected choice is in the answer key.
- multi_select: correct iff the selection has no repeats and equals the
  answer key exactly.
- open_text: correct iff the casefolded text contains at least one casefolded
  keyword. Empty text never matches.

Every question of the quiz is worth one point. Questions without a response,
or answered with the wrong kind of answer, score zero. Nothing is persisted,
so repeated calls over the same store state return equal results.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from engine.responses import Answer, MultiSelectAnswer, SingleSelectAnswer, TextAnswer
from entities import Question, QuestionType
from store import QuizStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionOutcome:
    question_id: str
    was_correct: bool
    expected_answers: Tuple[str, ...]
    provided_answers: Tuple[str, ...]


@dataclass(frozen=True)
class ScoringResult:
    final_score: int
    max_possible_score: int
    score_percentage: int
    breakdown: Tuple[QuestionOutcome, ...]


def percentage(achieved: int, maximum: int) -> int:
    """achieved / maximum * 100, rounded half-up, in integer arithmetic."""
    if maximum <= 0:
        raise ValueError("maximum must be positive")
    return (200 * achieved + maximum) // (2 * maximum)


class ScoringEngine:
    def __init__(self, store: QuizStore) -> None:
        self._store = store

    # ---- Public --------------------------------------------------------------
    def score(self, quiz_id: str, responses: Sequence[Answer]) -> Optional[ScoringResult]:
        """
        Score a submission for quiz_id.

        Returns None when the quiz is unknown or has no questions; callers
        cannot tell the two apart and should not need to.
        """
        if self._store.get_quiz(quiz_id) is None:
            return None
        questions = self._store.list_questions_for_quiz(quiz_id)
        if not questions:
            return None

        by_question = self._first_response_per_question(responses)
        breakdown: List[QuestionOutcome] = [
            self.evaluate(q, by_question.get(q.question_id)) for q in questions
        ]
        achieved = sum(1 for o in breakdown if o.was_correct)
        result = ScoringResult(
            final_score=achieved,
            max_possible_score=len(questions),
            score_percentage=percentage(achieved, len(questions)),
            breakdown=tuple(breakdown),
        )
        logger.debug("Scored quiz %s: %d/%d", quiz_id, result.final_score, result.max_possible_score)
        return result

    def evaluate(self, question: Question, answer: Optional[Answer]) -> QuestionOutcome:
        if question.question_type == QuestionType.OPEN_TEXT:
            expected = tuple(c.text for c in question.answer_key)
        else:
            expected = tuple(question.answer_key_ids())

        return QuestionOutcome(
            question_id=question.question_id,
            was_correct=answer is not None and self._is_correct(question, answer),
            expected_answers=expected,
            provided_answers=tuple(answer.provided()) if answer is not None else (),
        )

    # ---- internals -----------------------------------------------------------
    @staticmethod
    def _first_response_per_question(responses: Sequence[Answer]) -> Dict[str, Answer]:
        # Duplicates: the first response for a question is the one scored.
        found: Dict[str, Answer] = {}
        for r in responses:
            found.setdefault(r.question_id, r)
        return found

    @staticmethod
    def _is_correct(question: Question, answer: Answer) -> bool:
        key = set(question.answer_key_ids())

        if question.question_type == QuestionType.SINGLE_SELECT:
            return isinstance(answer, SingleSelectAnswer) and answer.choice_id in key

        if question.question_type == QuestionType.MULTI_SELECT:
            # Repeated ids count against the submission: same size and same members.
            return (
                isinstance(answer, MultiSelectAnswer)
                and len(answer.choice_ids) == len(key)
                and set(answer.choice_ids) == key
            )

        if question.question_type == QuestionType.OPEN_TEXT:
            if not isinstance(answer, TextAnswer) or not answer.text:
                return False
            text = answer.text.casefold()
            keywords = [c.text.casefold() for c in question.answer_key if c.text]
            return any(k in text for k in keywords)

        return False
