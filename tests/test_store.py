# =============================================================================
# TESTS - QuizStore
# =============================================================================

import threading

from entities import ChoiceInput, QuestionType
from store import QuizStore


class TestQuizLifecycle:
    """Quiz creation and lookup."""

    def test_create_quiz_stamps_id_and_timestamps(self, store, fixed_now):
        quiz = store.create_quiz("History", "Dates and names")

        assert quiz.quiz_id == "id-1"
        assert quiz.title == "History"
        assert quiz.description == "Dates and names"
        assert quiz.created_at == fixed_now
        assert quiz.last_modified == fixed_now

    def test_description_is_optional(self, store):
        quiz = store.create_quiz("No description")

        assert quiz.description is None

    def test_get_quiz_unknown_returns_none(self, store):
        assert store.get_quiz("missing") is None

    def test_get_quiz_returns_stored_record(self, store):
        quiz = store.create_quiz("Geography")

        assert store.get_quiz(quiz.quiz_id) == quiz

    def test_list_quizzes_in_insertion_order(self, store):
        first = store.create_quiz("First")
        second = store.create_quiz("Second")

        assert store.list_quizzes() == [first, second]

    def test_default_ids_are_unique(self):
        store = QuizStore()
        ids = {store.create_quiz(f"Quiz {i}").quiz_id for i in range(50)}

        assert len(ids) == 50


class TestQuestionLifecycle:
    """Question attachment and per-quiz listing."""

    def test_add_question_to_unknown_quiz_returns_none(self, store):
        result = store.add_question("missing", "Question?", QuestionType.SINGLE_SELECT, [ChoiceInput("a", True)])

        assert result is None
        assert store.get_question("id-1") is None

    def test_add_question_assigns_ids_to_question_and_choices(self, store, fixed_now):
        quiz = store.create_quiz("Quiz")
        question = store.add_question(
            quiz.quiz_id,
            "Pick one",
            QuestionType.SINGLE_SELECT,
            [ChoiceInput("yes", True), ChoiceInput("no", False)],
        )

        assert question.question_id == "id-2"
        assert [c.choice_id for c in question.choices] == ["id-3", "id-4"]
        assert question.quiz_id == quiz.quiz_id
        assert question.created_at == fixed_now
        assert [c.is_valid_answer for c in question.choices] == [True, False]

    def test_choice_order_is_preserved(self, store):
        quiz = store.create_quiz("Quiz")
        texts = ["alpha", "beta", "gamma", "delta"]
        question = store.add_question(
            quiz.quiz_id, "Order?", QuestionType.MULTI_SELECT, [ChoiceInput(t, True) for t in texts]
        )

        assert [c.text for c in question.choices] == texts

    def test_list_questions_only_for_owning_quiz(self, store):
        a = store.create_quiz("A")
        b = store.create_quiz("B")
        qa1 = store.add_question(a.quiz_id, "A1", QuestionType.OPEN_TEXT, [])
        store.add_question(b.quiz_id, "B1", QuestionType.OPEN_TEXT, [])
        qa2 = store.add_question(a.quiz_id, "A2", QuestionType.OPEN_TEXT, [])

        assert store.list_questions_for_quiz(a.quiz_id) == [qa1, qa2]
        assert len(store.list_questions_for_quiz(b.quiz_id)) == 1

    def test_list_questions_for_unknown_quiz_is_empty(self, store):
        assert store.list_questions_for_quiz("missing") == []

    def test_get_question_by_id(self, store):
        quiz = store.create_quiz("Quiz")
        question = store.add_question(quiz.quiz_id, "Q", QuestionType.OPEN_TEXT, [ChoiceInput("k", True)])

        assert store.get_question(question.question_id) == question

    def test_answer_key_lists_valid_choices(self, store):
        quiz = store.create_quiz("Quiz")
        question = store.add_question(
            quiz.quiz_id,
            "Pick",
            QuestionType.MULTI_SELECT,
            [ChoiceInput("a", True), ChoiceInput("b", False), ChoiceInput("c", True)],
        )

        assert [c.text for c in question.answer_key] == ["a", "c"]


class TestConcurrentAccess:
    """Mutations from several threads all land."""

    def test_parallel_attachments(self):
        store = QuizStore()
        quiz = store.create_quiz("Busy quiz")

        def worker():
            for _ in range(50):
                store.add_question(quiz.quiz_id, "Q", QuestionType.OPEN_TEXT, [ChoiceInput("k", True)])

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        questions = store.list_questions_for_quiz(quiz.quiz_id)
        assert len(questions) == 400
        assert len({q.question_id for q in questions}) == 400
