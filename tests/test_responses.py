# =============================================================================
# TESTS - Response normalization (field aliases -> tagged union)
# =============================================================================

import pytest

from engine.responses import (
    MultiSelectAnswer, ResponseFormatError, SingleSelectAnswer, TextAnswer,
    normalize_response,
)


class TestFieldNames:
    """Current and legacy field names resolve to the same answers."""

    def test_current_names(self):
        assert normalize_response({"targetQuestionId": "q1", "selectedChoiceId": "c1"}) == SingleSelectAnswer("q1", "c1")
        assert normalize_response({"targetQuestionId": "q1", "selectedChoiceIds": ["a", "b"]}) == MultiSelectAnswer("q1", ("a", "b"))
        assert normalize_response({"targetQuestionId": "q1", "openTextResponse": "hi"}) == TextAnswer("q1", "hi")

    def test_legacy_names(self):
        assert normalize_response({"questionId": "q1", "selectedOptionId": "c1"}) == SingleSelectAnswer("q1", "c1")
        assert normalize_response({"questionId": "q1", "selectedOptionIds": ["a"]}) == MultiSelectAnswer("q1", ("a",))
        assert normalize_response({"questionId": "q1", "textAnswer": "hi"}) == TextAnswer("q1", "hi")

    def test_mixed_names(self):
        answer = normalize_response({"questionId": "q1", "selectedChoiceId": "c1"})

        assert answer == SingleSelectAnswer("q1", "c1")


class TestPrecedence:
    """When both names are present, the current one wins."""

    def test_question_id(self):
        answer = normalize_response({"targetQuestionId": "new", "questionId": "old", "textAnswer": "x"})

        assert answer.question_id == "new"

    def test_single_choice(self):
        answer = normalize_response({"questionId": "q", "selectedChoiceId": "new", "selectedOptionId": "old"})

        assert answer == SingleSelectAnswer("q", "new")

    def test_choice_set_not_merged(self):
        answer = normalize_response({"questionId": "q", "selectedChoiceIds": ["a"], "selectedOptionIds": ["b"]})

        assert answer == MultiSelectAnswer("q", ("a",))

    def test_text(self):
        answer = normalize_response({"questionId": "q", "openTextResponse": "new", "textAnswer": "old"})

        assert answer == TextAnswer("q", "new")

    def test_none_falls_back_to_legacy(self):
        answer = normalize_response({"targetQuestionId": None, "questionId": "q", "textAnswer": "x"})

        assert answer.question_id == "q"


class TestRejections:
    """Responses that cannot become exactly one answer."""

    def test_missing_question_id(self):
        with pytest.raises(ResponseFormatError, match="questionId"):
            normalize_response({"selectedOptionId": "some-id"})

    def test_no_answer(self):
        with pytest.raises(ResponseFormatError, match="answer data"):
            normalize_response({"questionId": "q"})

    def test_two_kinds(self):
        with pytest.raises(ResponseFormatError, match="exactly one"):
            normalize_response({"questionId": "q", "selectedChoiceId": "c", "textAnswer": "t"})

    def test_choice_set_must_be_list(self):
        with pytest.raises(ResponseFormatError):
            normalize_response({"questionId": "q", "selectedChoiceIds": "abc"})

    def test_is_a_value_error(self):
        assert issubclass(ResponseFormatError, ValueError)


class TestEdgeValues:
    def test_empty_text_is_an_answer(self):
        assert normalize_response({"questionId": "q", "openTextResponse": ""}) == TextAnswer("q", "")

    def test_empty_choice_set_is_an_answer(self):
        assert normalize_response({"questionId": "q", "selectedChoiceIds": []}) == MultiSelectAnswer("q", ())

    def test_provided_answers(self):
        assert SingleSelectAnswer("q", "c").provided() == ["c"]
        assert MultiSelectAnswer("q", ("a", "b")).provided() == ["a", "b"]
        assert TextAnswer("q", "words").provided() == ["words"]
