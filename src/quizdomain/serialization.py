"""JSON reading and writing of quizzes, questions and answer sheets."""

from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from quizdomain.exceptions import DomainValidationError, ImportFileError
from quizdomain.models.answer_sheet import AnswerSheet
from quizdomain.models.base import DomainModel
from quizdomain.models.question import AnyQuestion
from quizdomain.models.quiz import Quiz

M = TypeVar("M", bound=DomainModel)

_question_list = TypeAdapter(list[AnyQuestion])


def dump_questions(questions: Iterable[AnyQuestion], indent: int | None = 2) -> str:
    """Render questions as a JSON array."""
    return _question_list.dump_json(list(questions), indent=indent).decode()


def parse_questions(text: str) -> list[AnyQuestion]:
    """Parse a JSON array of questions, tagged by their ``type``."""
    try:
        return _question_list.validate_json(text)
    except ValidationError as e:
        raise DomainValidationError.from_validation_error("Question", e) from e


def load_quiz(file_path: str | Path) -> Quiz:
    """Read a Quiz from a JSON file."""
    return _load_model(Quiz, file_path)


def load_answer_sheet(file_path: str | Path) -> AnswerSheet:
    """Read an AnswerSheet from a JSON file."""
    return _load_model(AnswerSheet, file_path)


def _load_model(model: type[M], file_path: str | Path) -> M:
    """
    Raises:
        ImportFileError: If the file cannot be read
        DomainValidationError: If the document is not valid JSON for ``model``
    """
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ImportFileError(f"Failed to read {path}: {e.strerror}", path=str(path)) from e

    return model.model_validate_json(text)
