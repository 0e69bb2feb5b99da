"""
Pydantic models for the quiz API.

Wire JSON is camelCase; Python attributes stay snake_case and carry aliases.
Request models do the shape checks (lengths, types, required fields) before
anything reaches the core. Per-type question rules are left to the core.
"""
from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictBool, model_validator

from engine.responses import Answer, normalize_response
from engine.scoring import ScoringResult
from entities import ChoiceInput, QuestionType, Quiz
from views import AuthorQuestionView, ParticipantQuestionView

QUIZ_TITLE_MIN, QUIZ_TITLE_MAX = 3, 200
QUIZ_DESCRIPTION_MAX = 1000
QUESTION_TEXT_MIN, QUESTION_TEXT_MAX = 5, 500
OPTIONS_MIN, OPTIONS_MAX = 2, 10
CHOICE_TEXT_MAX = 300
TEXT_RESPONSE_MAX = 300


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---- Requests ----

class CreateQuizRequest(WireModel):
    title: str = Field(..., min_length=QUIZ_TITLE_MIN, max_length=QUIZ_TITLE_MAX)
    description: Optional[str] = Field(default=None, max_length=QUIZ_DESCRIPTION_MAX)


class ChoiceIn(WireModel):
    # `text`/`isCorrect` are the original names, `choiceText`/`isValidAnswer` the record names
    text: Optional[str] = Field(default=None, min_length=1, max_length=CHOICE_TEXT_MAX)
    choice_text: Optional[str] = Field(default=None, alias="choiceText", min_length=1, max_length=CHOICE_TEXT_MAX)
    is_correct: Optional[StrictBool] = Field(default=None, alias="isCorrect")
    is_valid_answer: Optional[StrictBool] = Field(default=None, alias="isValidAnswer")

    @model_validator(mode="after")
    def _require_text_and_flag(self) -> "ChoiceIn":
        if self.choice_text is None and self.text is None:
            raise ValueError("Each choice text is required and must be maximum 300 characters")
        if self.is_valid_answer is None and self.is_correct is None:
            raise ValueError("Each choice must have isCorrect boolean property")
        return self

    def to_input(self) -> ChoiceInput:
        text = self.choice_text if self.choice_text is not None else self.text
        flag = self.is_valid_answer if self.is_valid_answer is not None else self.is_correct
        return ChoiceInput(text=text, is_valid_answer=bool(flag))


class CreateQuestionRequest(WireModel):
    text: str = Field(..., min_length=QUESTION_TEXT_MIN, max_length=QUESTION_TEXT_MAX)
    type: QuestionType
    options: List[ChoiceIn] = Field(..., min_length=OPTIONS_MIN, max_length=OPTIONS_MAX)

    def choice_inputs(self) -> List[ChoiceInput]:
        return [o.to_input() for o in self.options]


class SubmissionResponseIn(WireModel):
    """One response; either naming convention is accepted (see engine.responses)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    target_question_id: Optional[str] = Field(default=None, alias="targetQuestionId")
    question_id: Optional[str] = Field(default=None, alias="questionId")
    selected_choice_id: Optional[str] = Field(default=None, alias="selectedChoiceId")
    selected_option_id: Optional[str] = Field(default=None, alias="selectedOptionId")
    selected_choice_ids: Optional[List[str]] = Field(default=None, alias="selectedChoiceIds")
    selected_option_ids: Optional[List[str]] = Field(default=None, alias="selectedOptionIds")
    open_text_response: Optional[str] = Field(default=None, alias="openTextResponse", max_length=TEXT_RESPONSE_MAX)
    text_answer: Optional[str] = Field(default=None, alias="textAnswer", max_length=TEXT_RESPONSE_MAX)

    @model_validator(mode="after")
    def _resolves_to_one_answer(self) -> "SubmissionResponseIn":
        # ResponseFormatError is a ValueError, so pydantic reports it as a field error
        self.to_answer()
        return self

    def to_answer(self) -> Answer:
        return normalize_response(self.model_dump(by_alias=True, exclude_none=True))


class SubmissionRequest(RootModel):
    root: List[SubmissionResponseIn] = Field(..., min_length=1)

    def answers(self) -> List[Answer]:
        return [r.to_answer() for r in self.root]


# ---- Responses ----

class QuizPayload(WireModel):
    quiz_id: str = Field(..., alias="quizId")
    quiz_title: str = Field(..., alias="quizTitle")
    quiz_description: Optional[str] = Field(default=None, alias="quizDescription")
    created_timestamp: datetime = Field(..., alias="createdTimestamp")
    last_modified: datetime = Field(..., alias="lastModified")

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizPayload":
        return cls(
            quiz_id=quiz.quiz_id,
            quiz_title=quiz.title,
            quiz_description=quiz.description,
            created_timestamp=quiz.created_at,
            last_modified=quiz.last_modified,
        )


class QuizSummary(WireModel):
    quiz_id: str = Field(..., alias="quizId")
    quiz_title: str = Field(..., alias="quizTitle")
    quiz_description: Optional[str] = Field(default=None, alias="quizDescription")


class AuthorChoicePayload(WireModel):
    choice_id: str = Field(..., alias="choiceId")
    choice_text: str = Field(..., alias="choiceText")
    is_valid_answer: bool = Field(..., alias="isValidAnswer")


class AuthorQuestionPayload(WireModel):
    question_id: str = Field(..., alias="questionId")
    belongs_to_quiz: str = Field(..., alias="belongsToQuiz")
    question_text: str = Field(..., alias="questionText")
    question_type: QuestionType = Field(..., alias="questionType")
    available_choices: List[AuthorChoicePayload] = Field(..., alias="availableChoices")
    created_timestamp: datetime = Field(..., alias="createdTimestamp")
    last_modified: datetime = Field(..., alias="lastModified")

    @classmethod
    def from_view(cls, view: AuthorQuestionView) -> "AuthorQuestionPayload":
        return cls(
            question_id=view.question_id,
            belongs_to_quiz=view.quiz_id,
            question_text=view.question_text,
            question_type=view.question_type,
            available_choices=[
                AuthorChoicePayload(choice_id=c.choice_id, choice_text=c.choice_text, is_valid_answer=c.is_valid_answer)
                for c in view.choices
            ],
            created_timestamp=view.created_at,
            last_modified=view.last_modified,
        )


class ParticipantChoicePayload(WireModel):
    choice_id: str = Field(..., alias="choiceId")
    choice_text: str = Field(..., alias="choiceText")


class ParticipantQuestionPayload(WireModel):
    question_id: str = Field(..., alias="questionId")
    question_text: str = Field(..., alias="questionText")
    question_type: QuestionType = Field(..., alias="questionType")
    available_choices: List[ParticipantChoicePayload] = Field(..., alias="availableChoices")

    @classmethod
    def from_view(cls, view: ParticipantQuestionView) -> "ParticipantQuestionPayload":
        return cls(
            question_id=view.question_id,
            question_text=view.question_text,
            question_type=view.question_type,
            available_choices=[
                ParticipantChoicePayload(choice_id=c.choice_id, choice_text=c.choice_text) for c in view.choices
            ],
        )


class ParticipantQuizPayload(WireModel):
    quiz: QuizSummary
    questions: List[ParticipantQuestionPayload]


class ResponseBreakdownItem(WireModel):
    question_id: str = Field(..., alias="questionId")
    was_correct: bool = Field(..., alias="wasCorrect")
    expected_answers: List[str] = Field(..., alias="expectedAnswers")
    provided_answers: List[str] = Field(..., alias="providedAnswers")


class ScoringResultPayload(WireModel):
    final_score: int = Field(..., alias="finalScore")
    max_possible_score: int = Field(..., alias="maxPossibleScore")
    score_percentage: int = Field(..., alias="scorePercentage")
    response_breakdown: List[ResponseBreakdownItem] = Field(..., alias="responseBreakdown")

    @classmethod
    def from_result(cls, result: ScoringResult) -> "ScoringResultPayload":
        return cls(
            final_score=result.final_score,
            max_possible_score=result.max_possible_score,
            score_percentage=result.score_percentage,
            response_breakdown=[
                ResponseBreakdownItem(
                    question_id=o.question_id,
                    was_correct=o.was_correct,
                    expected_answers=list(o.expected_answers),
                    provided_answers=list(o.provided_answers),
                )
                for o in result.breakdown
            ],
        )


# ---- Envelopes ----

class QuizEnvelope(WireModel):
    success: bool = True
    data: QuizPayload
    message: Optional[str] = None


class QuizListEnvelope(WireModel):
    success: bool = True
    data: List[QuizPayload]
    count: int


class QuestionEnvelope(WireModel):
    success: bool = True
    data: AuthorQuestionPayload
    message: Optional[str] = None


class ParticipantQuestionsEnvelope(WireModel):
    success: bool = True
    data: ParticipantQuizPayload
    count: int


class HealthPayload(WireModel):
    success: bool = True
    message: str
    timestamp: datetime
    environment: str
    version: str
    uptime: float = Field(..., description="Seconds since the app was created")


def describe_validation_errors(errors: List[dict]) -> str:
    """Flatten pydantic error dicts into one readable sentence."""
    parts = []
    for err in errors:
        msg = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "__root__"))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
