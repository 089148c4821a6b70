"""Question type enumeration."""

from enum import StrEnum

from quizdomain.exceptions import DomainValidationError

_ALIASES = {"MATERIAL": "READING"}


class QuestionType(StrEnum):
    """Kinds of question a quiz can hold."""

    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    FILL_IN_BLANK = "fill_in_blank"
    READING = "reading"  # material question grouping sub-questions

    @property
    def is_choice_based(self) -> bool:
        """Whether questions of this type must offer at least one choice."""
        return self in CHOICE_BASED_TYPES

    @classmethod
    def lookup(cls, text: str) -> "QuestionType | None":
        """
        Resolve a loosely written type name, or return None.

        Matching is case-insensitive and spaces count as underscores, so
        "single choice", "Single_Choice" and "SINGLE_CHOICE" are equivalent.
        "material" is accepted for READING.
        """
        name = text.strip().upper().replace(" ", "_")
        return cls.__members__.get(_ALIASES.get(name, name))

    @classmethod
    def parse(cls, text: str) -> "QuestionType":
        """
        Like ``lookup``, but unknown names are an error.

        Raises:
            DomainValidationError: If the name matches no question type
        """
        question_type = cls.lookup(text)
        if question_type is None:
            raise DomainValidationError(
                message=f"Unknown question type: '{text}'",
                field="type",
            )
        return question_type


CHOICE_BASED_TYPES = frozenset(
    {
        QuestionType.SINGLE_CHOICE,
        QuestionType.MULTIPLE_CHOICE,
        QuestionType.TRUE_FALSE,
    }
)
