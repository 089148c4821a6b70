"""A learner's response to one question."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import ConfigDict, field_validator, model_validator

from quizdomain.models.base import DomainModel


class UserAnswer(DomainModel):
    """
    Submitted answer for one question.

    Exactly one payload is meaningful, depending on the question type:
    selected choice ids, free text, or nested answers for the sub-questions of
    a material question. The unused payloads stay at ``()`` / ``None``.
    Prefer the ``choice_answer``, ``text_answer`` and ``composite_answer``
    factories over the raw constructor.
    """

    model_config = ConfigDict(frozen=True)

    question_id: str
    selected_choice_ids: tuple[str, ...] = ()
    filled_text: str | None = None
    sub_answers: tuple[UserAnswer, ...] = ()

    @field_validator("question_id")
    @classmethod
    def question_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Question ID cannot be empty")
        return v

    @model_validator(mode="after")
    def single_payload(self) -> UserAnswer:
        active = [
            bool(self.selected_choice_ids),
            self.filled_text is not None,
            bool(self.sub_answers),
        ]
        if sum(active) > 1:
            raise ValueError("A UserAnswer carries only one kind of payload")
        return self

    @classmethod
    def choice_answer(
        cls, question_id: str, selected_choice_ids: Sequence[str]
    ) -> UserAnswer:
        """Answer to a SINGLE_CHOICE, MULTIPLE_CHOICE or TRUE_FALSE question."""
        return cls(question_id=question_id, selected_choice_ids=selected_choice_ids)

    @classmethod
    def text_answer(cls, question_id: str, filled_text: str | None) -> UserAnswer:
        """Answer to a FILL_IN_BLANK question; the text may be None."""
        return cls(question_id=question_id, filled_text=filled_text)

    @classmethod
    def composite_answer(
        cls, question_id: str, sub_answers: Sequence[UserAnswer]
    ) -> UserAnswer:
        """Answer to a READING question, one nested answer per sub-question."""
        return cls(question_id=question_id, sub_answers=sub_answers)

    def find_sub_answer(self, question_id: str) -> UserAnswer | None:
        """First nested answer for ``question_id``, if any."""
        for sub_answer in self.sub_answers:
            if sub_answer.question_id == question_id:
                return sub_answer
        return None
