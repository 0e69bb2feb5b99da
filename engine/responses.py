"""
Submission answers as a tagged union, plus the step that builds them.

Clients send either the current field names or the legacy ones:

    targetQuestionId  | questionId
    selectedChoiceId  | selectedOptionId
    selectedChoiceIds | selectedOptionIds
    openTextResponse  | textAnswer

normalize_response resolves these once so the scoring engine never sees an
alias. When both names of a pair are present the current name wins; values
are never merged. A value counts as present when it is not None, so an empty
string is a (wrong) text answer rather than a missing one.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union


class ResponseFormatError(ValueError):
    """Raised when a raw response cannot be resolved to exactly one answer."""


@dataclass(frozen=True)
class SingleSelectAnswer:
    question_id: str
    choice_id: str

    def provided(self) -> List[str]:
        return [self.choice_id]


@dataclass(frozen=True)
class MultiSelectAnswer:
    question_id: str
    choice_ids: Tuple[str, ...]

    def provided(self) -> List[str]:
        return list(self.choice_ids)


@dataclass(frozen=True)
class TextAnswer:
    question_id: str
    text: str

    def provided(self) -> List[str]:
        return [self.text]


Answer = Union[SingleSelectAnswer, MultiSelectAnswer, TextAnswer]

# (canonical, legacy)
QUESTION_ID_FIELDS = ("targetQuestionId", "questionId")
SINGLE_CHOICE_FIELDS = ("selectedChoiceId", "selectedOptionId")
MULTI_CHOICE_FIELDS = ("selectedChoiceIds", "selectedOptionIds")
TEXT_FIELDS = ("openTextResponse", "textAnswer")


def _pick(raw: Mapping[str, Any], fields: Tuple[str, str]) -> Optional[Any]:
    canonical, legacy = fields
    value = raw.get(canonical)
    if value is None:
        value = raw.get(legacy)
    return value


def normalize_response(raw: Mapping[str, Any]) -> Answer:
    question_id = _pick(raw, QUESTION_ID_FIELDS)
    if not isinstance(question_id, str) or not question_id:
        raise ResponseFormatError("Each response must have a valid questionId")

    single = _pick(raw, SINGLE_CHOICE_FIELDS)
    multi = _pick(raw, MULTI_CHOICE_FIELDS)
    text = _pick(raw, TEXT_FIELDS)

    present = [v for v in (single, multi, text) if v is not None]
    if not present:
        raise ResponseFormatError("Each response must have valid answer data")
    if len(present) > 1:
        raise ResponseFormatError("Each response must carry exactly one kind of answer")

    if single is not None:
        if not isinstance(single, str):
            raise ResponseFormatError("selectedChoiceId must be a string")
        return SingleSelectAnswer(question_id=question_id, choice_id=single)
    if multi is not None:
        if not isinstance(multi, (list, tuple)) or not all(isinstance(c, str) for c in multi):
            raise ResponseFormatError("selectedChoiceIds must be a list of strings")
        return MultiSelectAnswer(question_id=question_id, choice_ids=tuple(multi))
    if not isinstance(text, str):
        raise ResponseFormatError("openTextResponse must be a string")
    return TextAnswer(question_id=question_id, text=text)
