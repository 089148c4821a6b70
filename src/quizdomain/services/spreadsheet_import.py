"""Spreadsheet question import using pandas.

Each data row describes one question. Columns, 0-indexed:

    0  id
    1  stem
    2  type            case-insensitive, spaces allowed ("single choice")
    3  choices         choice texts joined by the choice separator
    4  correct answer  split on the separator for choice-based types
    5  points          integer; blank or non-numeric cells count as 0

A filled cell past the last column means the row is shifted (an unquoted
separator in a CSV field, for instance) and the row is rejected.

Rows are independent: a row that fails validation is reported in the
ImportResult and the remaining rows are still imported.
"""

import zipfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger

from quizdomain.config import settings
from quizdomain.exceptions import (
    DomainValidationError,
    ImportFileError,
    QuizDomainException,
)
from quizdomain.models.question import AnyQuestion, MaterialQuestion, Question
from quizdomain.models.question_type import QuestionType

COLUMN_COUNT = 6
EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm"})


@dataclass
class RowResult:
    """Outcome of importing one spreadsheet row."""

    row_number: int  # 1-indexed, header rows included
    question: AnyQuestion | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ImportResult:
    """Per-row results of one import, in row order."""

    source: str | None = None
    rows: list[RowResult] = field(default_factory=list)

    @property
    def questions(self) -> list[AnyQuestion]:
        return [row.question for row in self.rows if row.question is not None]

    @property
    def errors(self) -> list[RowResult]:
        return [row for row in self.rows if not row.ok]


def _cell_text(value: Any) -> str:
    """Render a cell as trimmed text; empty cells become ''."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _cell_int(value: Any) -> int:
    """Read an integer cell, truncating decimals; anything non-numeric counts as 0."""
    text = _cell_text(value)
    if not text:
        return 0
    try:
        return int(float(text))
    except ValueError:
        return 0


def _fold_overflow(fields: list[str]) -> list[str]:
    """Keep the question columns and join everything after them into one cell."""
    return [*fields[:COLUMN_COUNT], ",".join(fields[COLUMN_COUNT:])]


class SpreadsheetImportService:
    """Build validated questions from spreadsheet rows."""

    def __init__(
        self,
        choice_separator: str | None = None,
        header_rows: int | None = None,
        sheet_index: int | None = None,
    ) -> None:
        self.choice_separator = choice_separator or settings.import_choice_separator
        self.header_rows = (
            settings.import_header_rows if header_rows is None else header_rows
        )
        self.sheet_index = (
            settings.import_sheet_index if sheet_index is None else sheet_index
        )

    def import_file(self, file_path: str | Path) -> ImportResult:
        """
        Import questions from an .xlsx or .csv file.

        Args:
            file_path: Spreadsheet to read; for workbooks only the configured
                sheet is read

        Returns:
            ImportResult with one RowResult per data row

        Raises:
            ImportFileError: If the file is missing, unreadable or of an
                unsupported type
        """
        path = Path(file_path)
        if not path.exists():
            raise ImportFileError(f"Spreadsheet not found: {path}", path=str(path))

        frame = self._read_frame(path)
        logger.info(
            "Importing questions from spreadsheet",
            path=str(path),
            rows=len(frame.index),
        )
        result = self.import_rows(frame.itertuples(index=False, name=None))
        result.source = str(path)
        return result

    def import_rows(self, rows: Iterable[Sequence[Any]]) -> ImportResult:
        """Import already-read rows, header rows included."""
        result = ImportResult()

        for index, cells in enumerate(rows):
            row_number = index + 1
            if index < self.header_rows:
                continue
            if all(not _cell_text(cell) for cell in cells):
                logger.debug("Skipping blank row", row_number=row_number)
                continue

            try:
                question = self.build_question(cells)
            except (QuizDomainException, ValueError) as e:
                logger.warning(
                    "Skipping invalid question row",
                    row_number=row_number,
                    error=str(e),
                )
                result.rows.append(RowResult(row_number=row_number, error=str(e)))
                continue

            result.rows.append(RowResult(row_number=row_number, question=question))

        logger.info(
            "Spreadsheet import finished",
            imported=len(result.questions),
            failed=len(result.errors),
        )
        return result

    def build_question(self, cells: Sequence[Any]) -> AnyQuestion:
        """
        Map one row to a question.

        Raises:
            DomainValidationError: If the row violates a question invariant
        """
        padded = list(cells) + [None] * (COLUMN_COUNT - len(cells))
        extra = [text for text in map(_cell_text, padded[COLUMN_COUNT:]) if text]
        if extra:
            raise DomainValidationError(
                f"Row has cells beyond the {COLUMN_COUNT} question columns: "
                + ", ".join(repr(text) for text in extra),
            )

        question_id = _cell_text(padded[0])
        stem = _cell_text(padded[1])
        question_type = QuestionType.parse(_cell_text(padded[2]))
        choices = self._split(_cell_text(padded[3]))
        answer_text = _cell_text(padded[4])
        points = _cell_int(padded[5])

        if question_type is QuestionType.READING:
            return MaterialQuestion(
                id=question_id,
                stem=stem,
                choices=choices,
                correct_answer=answer_text,
                points=points,
                sub_questions=(),
            )

        correct_answer = (
            tuple(self._split(answer_text))
            if question_type.is_choice_based
            else answer_text
        )
        return Question(
            id=question_id,
            stem=stem,
            type=question_type,
            choices=choices,
            correct_answer=correct_answer,
            points=points,
        )

    def _split(self, text: str) -> list[str]:
        """Split a separator-joined cell into trimmed, non-empty parts."""
        if not text:
            return []
        parts = (part.strip() for part in text.split(self.choice_separator))
        return [part for part in parts if part]

    def _read_frame(self, path: Path) -> pd.DataFrame:
        suffix = path.suffix.lower()
        if suffix not in EXCEL_SUFFIXES and suffix != ".csv":
            raise ImportFileError(
                f"Unsupported spreadsheet type: {suffix or path.name}",
                path=str(path),
            )

        try:
            if suffix == ".csv":
                # One spare column collects the fields of over-long lines so
                # the row keeps its position and fails on its own.
                return pd.read_csv(
                    path,
                    header=None,
                    names=list(range(COLUMN_COUNT + 1)),
                    dtype=object,
                    keep_default_na=False,
                    engine="python",
                    on_bad_lines=_fold_overflow,
                )
            return pd.read_excel(
                path,
                sheet_name=self.sheet_index,
                header=None,
                dtype=object,
            )
        except (OSError, ValueError, KeyError, zipfile.BadZipFile) as e:
            raise ImportFileError(
                f"Failed to read spreadsheet: {e!s}",
                path=str(path),
            ) from e


def nest_sub_questions(questions: Sequence[AnyQuestion]) -> list[AnyQuestion]:
    """
    Attach ``<material id>-<suffix>`` questions to their material question.

    A question is nested when an earlier MaterialQuestion has the id before
    its last "-". Material questions are copied, never modified, and the
    remaining questions keep their order.
    """
    children: dict[str, list[Question]] = {}
    top_level: list[AnyQuestion] = []

    for question in questions:
        parent_id, separator, _ = question.id.rpartition("-")
        if separator and parent_id in children and isinstance(question, Question):
            children[parent_id].append(question)
            continue
        top_level.append(question)
        if isinstance(question, MaterialQuestion) and question.id not in children:
            children[question.id] = []

    nested: list[AnyQuestion] = []
    for question in top_level:
        if isinstance(question, MaterialQuestion) and children.get(question.id):
            question = question.model_copy(
                update={
                    "sub_questions": (*question.sub_questions, *children.pop(question.id))
                }
            )
        nested.append(question)
    return nested
