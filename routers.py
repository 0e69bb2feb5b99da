"""
FastAPI routes for the quiz service.

We expose (under settings.api_prefix):
- GET  /health                          (liveness)
- POST /quizzes                         (create a quiz)
- GET  /quizzes                         (list quizzes)
- GET  /quizzes/{quiz_id}               (one quiz)
- POST /quizzes/{quiz_id}/questions     (attach a question; author view back)
- GET  /quizzes/{quiz_id}/questions     (participant view, no answer keys)
- POST /quizzes/{quiz_id}/submit        (score a submission)

The core signals "not found" with None and structural problems with
validation.Invalid; this module is where those become 404 and 400.
"""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any
import time

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from pydantic import ValidationError

from schemas import (
    CreateQuestionRequest, CreateQuizRequest, SubmissionRequest,
    HealthPayload, ParticipantQuestionsEnvelope, ParticipantQuizPayload,
    ParticipantQuestionPayload, QuestionEnvelope, AuthorQuestionPayload,
    QuizEnvelope, QuizListEnvelope, QuizPayload, QuizSummary,
    ScoringResultPayload, describe_validation_errors,
)
from service.core import QuizService
from validation import Invalid

router = APIRouter(tags=["quizzes"])

QUIZ_NOT_FOUND = "Quiz not located"
QUIZ_NOT_SCORABLE = "Quiz not located or contains no questions"


def get_quiz_service(request: Request) -> QuizService:
    return request.app.state.quiz_service


@router.get("/health", response_model=HealthPayload)
def health(request: Request) -> HealthPayload:
    settings = request.app.state.settings
    return HealthPayload(
        message="Quiz management API is operational",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        version=settings.version,
        uptime=round(time.monotonic() - request.app.state.started_at, 3),
    )


# ---- Quizzes -----------------------------------------------------------------

@router.post("/quizzes", response_model=QuizEnvelope, status_code=status.HTTP_201_CREATED)
def create_quiz(payload: CreateQuizRequest, service: QuizService = Depends(get_quiz_service)) -> QuizEnvelope:
    quiz = service.create_quiz(payload.title, payload.description)
    return QuizEnvelope(data=QuizPayload.from_quiz(quiz), message="Quiz established successfully")


@router.get("/quizzes", response_model=QuizListEnvelope)
def list_quizzes(service: QuizService = Depends(get_quiz_service)) -> QuizListEnvelope:
    quizzes = service.list_quizzes()
    return QuizListEnvelope(data=[QuizPayload.from_quiz(q) for q in quizzes], count=len(quizzes))


@router.get("/quizzes/{quiz_id}", response_model=QuizEnvelope)
def get_quiz(quiz_id: str, service: QuizService = Depends(get_quiz_service)) -> QuizEnvelope:
    quiz = service.get_quiz(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail=QUIZ_NOT_FOUND)
    return QuizEnvelope(data=QuizPayload.from_quiz(quiz))


# ---- Questions ---------------------------------------------------------------

@router.post("/quizzes/{quiz_id}/questions", response_model=QuestionEnvelope, status_code=status.HTTP_201_CREATED)
def attach_question(
    quiz_id: str,
    payload: Any = Body(None),
    service: QuizService = Depends(get_quiz_service),
) -> QuestionEnvelope:
    # Unknown quiz wins over a malformed body, so the body is parsed here
    # rather than by FastAPI before the handler runs.
    if service.get_quiz(quiz_id) is None:
        raise HTTPException(status_code=404, detail=QUIZ_NOT_FOUND)
    try:
        request = CreateQuestionRequest.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=describe_validation_errors(e.errors())) from e

    result = service.attach_question(quiz_id, request.text, request.type, request.choice_inputs())
    if result is None:
        raise HTTPException(status_code=404, detail=QUIZ_NOT_FOUND)
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    return QuestionEnvelope(data=AuthorQuestionPayload.from_view(result), message="Question attached successfully")


@router.get("/quizzes/{quiz_id}/questions", response_model=ParticipantQuestionsEnvelope)
def participant_questions(quiz_id: str, service: QuizService = Depends(get_quiz_service)) -> ParticipantQuestionsEnvelope:
    quiz = service.get_quiz(quiz_id)
    views = service.participant_questions(quiz_id)
    if quiz is None or views is None:
        raise HTTPException(status_code=404, detail=QUIZ_NOT_FOUND)
    return ParticipantQuestionsEnvelope(
        data=ParticipantQuizPayload(
            quiz=QuizSummary(quiz_id=quiz.quiz_id, quiz_title=quiz.title, quiz_description=quiz.description),
            questions=[ParticipantQuestionPayload.from_view(v) for v in views],
        ),
        count=len(views),
    )


# ---- Submissions -------------------------------------------------------------

@router.post("/quizzes/{quiz_id}/submit", response_model=ScoringResultPayload)
def submit(
    quiz_id: str,
    payload: SubmissionRequest,
    service: QuizService = Depends(get_quiz_service),
) -> ScoringResultPayload:
    result = service.submit(quiz_id, payload.answers())
    if result is None:
        raise HTTPException(status_code=404, detail=QUIZ_NOT_SCORABLE)
    return ScoringResultPayload.from_result(result)
