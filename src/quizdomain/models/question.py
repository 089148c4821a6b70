"""Question entities: plain questions and material (reading) questions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Annotated, Any, TypeVar

from pydantic import Discriminator, Field, Tag, field_validator, model_validator

from quizdomain.exceptions import DomainValidationError
from quizdomain.ids import generate_id
from quizdomain.models.base import DomainModel
from quizdomain.models.choice import Choice
from quizdomain.models.question_type import QuestionType

CorrectAnswer = tuple[str, ...] | str


def ensure_choices_for_type(
    question_type: QuestionType,
    choices: Sequence[Choice | str],
) -> None:
    """Reject an empty choice list for choice-based question types."""
    if question_type.is_choice_based and not choices:
        raise DomainValidationError(
            "Choice-based questions must have at least one choice.",
            field="choices",
        )


class _QuestionFields(DomainModel):
    """Fields and validation shared by both question variants."""

    id: str = Field(default_factory=generate_id)
    stem: str
    type: QuestionType
    choices: tuple[Choice, ...]
    correct_answer: CorrectAnswer
    points: int = Field(ge=0)

    @field_validator("id", "stem")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Any:
        """Accept type names the way spreadsheets write them ("READING", "Single choice")."""
        if isinstance(v, str):
            return QuestionType.parse(v)
        return v

    @field_validator("choices", mode="before")
    @classmethod
    def coerce_choices(cls, v: Any) -> Any:
        """Accept bare strings as choice texts."""
        if isinstance(v, (list, tuple)):
            return tuple(Choice(text=item) if isinstance(item, str) else item for item in v)
        return v

    @model_validator(mode="after")
    def check_choices(self) -> _QuestionFields:
        ensure_choices_for_type(self.type, self.choices)
        return self

    @property
    def choice_texts(self) -> tuple[str, ...]:
        """Choice texts in declared order."""
        return tuple(choice.text for choice in self.choices)

    def set_points(self, points: int) -> None:
        """
        Change the point value.

        Raises:
            DomainValidationError: If points is negative
        """
        self.points = points

    def set_choices(self, choices: Sequence[Choice | str]) -> None:
        """
        Replace the choices, re-checking the type-dependent rules.

        The question is left untouched when validation fails.

        Raises:
            DomainValidationError: If choices is None, or empty for a choice-based type
        """
        if choices is None:
            raise DomainValidationError("Choices list cannot be None.", field="choices")
        choices = tuple(choices)
        ensure_choices_for_type(self.type, choices)
        self.choices = choices


class Question(_QuestionFields):
    """A directly gradable question of any non-READING type."""

    @field_validator("type")
    @classmethod
    def not_reading(cls, v: QuestionType) -> QuestionType:
        if v is QuestionType.READING:
            raise ValueError("READING questions must be built as MaterialQuestion")
        return v


class MaterialQuestion(_QuestionFields):
    """
    A READING question grouping sub-questions around shared material.

    The material itself carries no gradable content, so ``points`` defaults
    to 0 and the value of the question is the sum of its sub-questions.
    """

    type: QuestionType = QuestionType.READING
    choices: tuple[Choice, ...] = ()
    correct_answer: CorrectAnswer = ()
    points: int = Field(default=0, ge=0)
    sub_questions: tuple[Question, ...]

    @field_validator("type")
    @classmethod
    def only_reading(cls, v: QuestionType) -> QuestionType:
        if v is not QuestionType.READING:
            raise ValueError("MaterialQuestion type must be READING")
        return v

    @property
    def total_sub_question_points(self) -> int:
        """Sum of the points of all current sub-questions."""
        return sum(sub_question.points for sub_question in self.sub_questions)

    def add_sub_question(self, sub_question: Question) -> None:
        """
        Append a sub-question.

        Raises:
            DomainValidationError: If sub_question is None
        """
        if sub_question is None:
            raise DomainValidationError(
                "Cannot add a None sub-question.", field="sub_questions"
            )
        self.sub_questions = (*self.sub_questions, sub_question)

    def remove_sub_question(self, question_id: str | None) -> bool:
        """Remove the first sub-question with ``question_id``; report whether one was found."""
        remaining = remove_first(self.sub_questions, question_id)
        if remaining is None:
            return False
        self.sub_questions = remaining
        return True

    def find_sub_question(self, question_id: str) -> Question | None:
        return find_question(self.sub_questions, question_id)


def _question_tag(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    if isinstance(kind, str):
        kind = QuestionType.lookup(kind)
    return "material" if kind is QuestionType.READING else "simple"


Q = TypeVar("Q", bound=_QuestionFields)

AnyQuestion = Annotated[
    Annotated[Question, Tag("simple")] | Annotated[MaterialQuestion, Tag("material")],
    Discriminator(_question_tag),
]


def find_question(
    questions: Iterable[Q],
    question_id: str | None,
) -> Q | None:
    """Return the first question whose id equals ``question_id``."""
    for question in questions:
        if question.id == question_id:
            return question
    return None


def remove_first(
    questions: tuple[Q, ...],
    question_id: str | None,
) -> tuple[Q, ...] | None:
    """Copy of ``questions`` minus the first id match, or None without a match."""
    if question_id is None:
        return None
    for index, question in enumerate(questions):
        if question.id == question_id:
            return questions[:index] + questions[index + 1 :]
    return None
