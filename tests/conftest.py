# =============================================================================
# CONFTEST - shared fixtures
# =============================================================================
# Store with deterministic ids, service over it, TestClient over a fresh app.
# =============================================================================

import itertools
from datetime import datetime, timezone

import pytest

from config import Settings
from entities import ChoiceInput, QuestionType
from service.core import QuizService
from store import QuizStore

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _sequential_ids(prefix: str = "id"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def store():
    """Store with predictable ids (id-1, id-2, ...) and a frozen clock."""
    return QuizStore(id_factory=_sequential_ids(), clock=lambda: FIXED_NOW)


@pytest.fixture
def service(store):
    return QuizService(store)


@pytest.fixture
def quiz(service):
    return service.create_quiz("General knowledge", "A short warm-up quiz")


@pytest.fixture
def mixed_quiz(service):
    """Quiz with one question of each type; returns (quiz, single, multi, text)."""
    quiz = service.create_quiz("Mixed quiz")
    single = service.attach_question(
        quiz.quiz_id,
        "What is 2 + 2?",
        QuestionType.SINGLE_SELECT,
        [ChoiceInput("4", True), ChoiceInput("5", False)],
    )
    multi = service.attach_question(
        quiz.quiz_id,
        "Which of these are primes?",
        QuestionType.MULTI_SELECT,
        [ChoiceInput("2", True), ChoiceInput("3", True), ChoiceInput("4", False)],
    )
    text = service.attach_question(
        quiz.quiz_id,
        "Describe type inference",
        QuestionType.OPEN_TEXT,
        [ChoiceInput("expectedkeyword", True)],
    )
    return quiz, single, multi, text


@pytest.fixture
def test_settings():
    return Settings(environment="test", log_level="WARNING")


@pytest.fixture
def client(test_settings):
    """FastAPI TestClient over an app with its own empty store."""
    from fastapi.testclient import TestClient
    from main import create_app

    return TestClient(create_app(settings=test_settings))


@pytest.fixture
def api(test_settings):
    return test_settings.api_prefix


@pytest.fixture
def fixed_now():
    return FIXED_NOW
