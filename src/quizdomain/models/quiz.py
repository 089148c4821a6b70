"""Quiz aggregate owning an ordered list of questions."""

from __future__ import annotations

from pydantic import Field, field_validator

from quizdomain.exceptions import DomainValidationError
from quizdomain.ids import generate_id
from quizdomain.models.base import DomainModel
from quizdomain.models.question import (
    AnyQuestion,
    MaterialQuestion,
    find_question,
    remove_first,
)


class Quiz(DomainModel):
    """
    A titled, ordered collection of questions.

    Duplicate question ids are allowed. Two quizzes are equal when their ids
    are equal, whatever their content.
    """

    id: str = Field(default_factory=generate_id)
    title: str
    description: str | None = None
    questions: tuple[AnyQuestion, ...]

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Quiz title cannot be empty")
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quiz):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def add_question(self, question: AnyQuestion) -> None:
        """
        Append a question.

        Raises:
            DomainValidationError: If question is None
        """
        if question is None:
            raise DomainValidationError("Cannot add a None question.", field="questions")
        self.questions = (*self.questions, question)

    def remove_question(self, question_id: str | None) -> bool:
        """Remove the first question with ``question_id``; report whether one was found."""
        remaining = remove_first(self.questions, question_id)
        if remaining is None:
            return False
        self.questions = remaining
        return True

    def find_question(self, question_id: str) -> AnyQuestion | None:
        return find_question(self.questions, question_id)

    @property
    def total_points(self) -> int:
        """Points available across the quiz, counting material questions by their sub-questions."""
        return sum(
            question.total_sub_question_points
            if isinstance(question, MaterialQuestion)
            else question.points
            for question in self.questions
        )
