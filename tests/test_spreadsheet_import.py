"""Tests for spreadsheet question import."""

import zipfile
from pathlib import Path

import pandas as pd
import pytest

from quizdomain.exceptions import ImportFileError
from quizdomain.models.question import MaterialQuestion, Question
from quizdomain.models.question_type import QuestionType
from quizdomain.services.spreadsheet_import import (
    SpreadsheetImportService,
    nest_sub_questions,
)

HEADER = ["id", "stem", "type", "choices", "correct_answer", "points"]

ROWS = [
    HEADER,
    ["q1", "What is 1+1?", "single choice", "1;2;3;4", "2", 10],
    ["q2", "Which are primary colors?", "MULTIPLE_CHOICE", "Red; Blue; Green; Yellow", "Red;Blue;Yellow", 15],
    ["q3", "The capital of France is Paris.", "true_false", "True;False", "True", 5],
    ["q4", "Fill in the blank: Python is __ fun.", "Fill In Blank", "", "very", 10],
    ["q5", "Explain the meaning of life.", "single_choice", "", "*N/A*", 20],
    ["q6", "Read: Python is an object-oriented language.", "material", "", "", 0],
    ["q6-1", "Who created Python?", "single_choice", "Guido;Linus", "Guido", 5],
    ["q6-2", "What was Python named after?", "fill_in_blank", "", "Monty Python", 5],
    ["q7", "Broken type", "essay", "", "", 1],
]


@pytest.fixture
def service() -> SpreadsheetImportService:
    """Importer with explicit settings."""
    return SpreadsheetImportService(choice_separator=";", header_rows=1, sheet_index=0)


def _by_id(questions: list, question_id: str):
    return next(q for q in questions if q.id == question_id)


class TestImportRows:
    """Tests for SpreadsheetImportService.import_rows."""

    def test_valid_rows_imported(self, service: SpreadsheetImportService) -> None:
        """Valid rows become questions in row order."""
        result = service.import_rows(ROWS)

        assert [q.id for q in result.questions] == [
            "q1", "q2", "q3", "q4", "q6", "q6-1", "q6-2",
        ]

    def test_invalid_rows_reported(self, service: SpreadsheetImportService) -> None:
        """Failing rows are reported with their row number, not raised."""
        result = service.import_rows(ROWS)

        assert [row.row_number for row in result.errors] == [6, 10]
        assert "at least one choice" in result.errors[0].error
        assert "Unknown question type" in result.errors[1].error

    def test_single_choice(self, service: SpreadsheetImportService) -> None:
        """Choice cells are split and the answer becomes a sequence."""
        q1 = _by_id(service.import_rows(ROWS).questions, "q1")

        assert isinstance(q1, Question)
        assert q1.stem == "What is 1+1?"
        assert q1.type is QuestionType.SINGLE_CHOICE
        assert q1.points == 10
        assert q1.correct_answer == ("2",)
        assert q1.choice_texts == ("1", "2", "3", "4")

    def test_multiple_choice(self, service: SpreadsheetImportService) -> None:
        """Choice texts are trimmed and the answer keeps its order."""
        q2 = _by_id(service.import_rows(ROWS).questions, "q2")

        assert q2.type is QuestionType.MULTIPLE_CHOICE
        assert q2.correct_answer == ("Red", "Blue", "Yellow")
        assert q2.choice_texts == ("Red", "Blue", "Green", "Yellow")

    def test_true_false(self, service: SpreadsheetImportService) -> None:
        """True/false rows keep their explicit choices."""
        q3 = _by_id(service.import_rows(ROWS).questions, "q3")

        assert q3.type is QuestionType.TRUE_FALSE
        assert q3.correct_answer == ("True",)
        assert q3.choice_texts == ("True", "False")

    def test_fill_in_blank(self, service: SpreadsheetImportService) -> None:
        """Fill-in-blank rows keep the answer as text and have no choices."""
        q4 = _by_id(service.import_rows(ROWS).questions, "q4")

        assert q4.type is QuestionType.FILL_IN_BLANK
        assert q4.correct_answer == "very"
        assert q4.choices == ()

    def test_material_row(self, service: SpreadsheetImportService) -> None:
        """READING rows (or their MATERIAL alias) become material questions."""
        q6 = _by_id(service.import_rows(ROWS).questions, "q6")

        assert isinstance(q6, MaterialQuestion)
        assert q6.points == 0
        assert q6.sub_questions == ()

    def test_points_cells(self, service: SpreadsheetImportService) -> None:
        """Decimals are truncated and non-numeric points count as 0."""
        rows = [
            HEADER,
            ["a", "Stem", "fill_in_blank", "", "x", 7.9],
            ["b", "Stem", "fill_in_blank", "", "x", "lots"],
            ["c", "Stem", "fill_in_blank", "", "x", None],
        ]

        questions = service.import_rows(rows).questions

        assert [q.points for q in questions] == [7, 0, 0]

    def test_negative_points_row_fails(self, service: SpreadsheetImportService) -> None:
        """Model validation applies to imported rows."""
        rows = [HEADER, ["a", "Stem", "fill_in_blank", "", "x", -3]]

        result = service.import_rows(rows)

        assert result.questions == []
        assert result.errors[0].row_number == 2

    def test_short_and_blank_rows(self, service: SpreadsheetImportService) -> None:
        """Blank rows are skipped; short rows are padded before validation."""
        rows = [HEADER, ["", "", ""], ["a", "Stem", "fill_in_blank"]]

        result = service.import_rows(rows)

        assert len(result.rows) == 1
        assert result.rows[0].ok
        assert result.questions[0].correct_answer == ""
        assert result.questions[0].points == 0

    def test_missing_id_fails(self, service: SpreadsheetImportService) -> None:
        """A row without an id is rejected."""
        rows = [HEADER, ["", "Stem", "fill_in_blank", "", "x", 1]]

        result = service.import_rows(rows)

        assert result.rows[0].error is not None

    def test_cells_past_last_column_rejected(
        self, service: SpreadsheetImportService
    ) -> None:
        """A filled seventh cell means the row is shifted; blank ones are ignored."""
        rows = [
            HEADER,
            ["a", "Stem", "fill_in_blank", "", "x", 1, "stray"],
            ["b", "Stem", "fill_in_blank", "", "x", 1, None, ""],
        ]

        result = service.import_rows(rows)

        assert [q.id for q in result.questions] == ["b"]
        assert result.errors[0].row_number == 2
        assert "'stray'" in result.errors[0].error

    def test_custom_separator(self) -> None:
        """The choice separator is configurable."""
        service = SpreadsheetImportService(choice_separator="|", header_rows=0)
        rows = [["a", "Pick", "multiple_choice", "x|y|z", "x|z", 2]]

        question = service.import_rows(rows).questions[0]

        assert question.choice_texts == ("x", "y", "z")
        assert question.correct_answer == ("x", "z")


class TestImportFile:
    """Tests for SpreadsheetImportService.import_file."""

    def test_csv(self, service: SpreadsheetImportService, tmp_path: Path) -> None:
        """CSV files are read with every row kept, header included."""
        path = tmp_path / "questions.csv"
        pd.DataFrame(ROWS).to_csv(path, header=False, index=False)

        result = service.import_file(path)

        assert result.source == str(path)
        assert len(result.questions) == 7
        assert _by_id(result.questions, "q2").points == 15

    def test_xlsx(self, service: SpreadsheetImportService, tmp_path: Path) -> None:
        """Workbooks are read from the first sheet."""
        path = tmp_path / "questions.xlsx"
        pd.DataFrame(ROWS).to_excel(path, header=False, index=False)

        result = service.import_file(path)

        assert [q.id for q in result.questions] == [
            "q1", "q2", "q3", "q4", "q6", "q6-1", "q6-2",
        ]
        assert _by_id(result.questions, "q1").correct_answer == ("2",)
        assert [row.row_number for row in result.errors] == [6, 10]

    def test_missing_file(self, service: SpreadsheetImportService, tmp_path: Path) -> None:
        """A missing file is an ImportFileError."""
        with pytest.raises(ImportFileError, match="not found"):
            service.import_file(tmp_path / "nope.xlsx")

    def test_csv_row_with_extra_fields(
        self, service: SpreadsheetImportService, tmp_path: Path
    ) -> None:
        """An unquoted separator only fails its own row."""
        path = tmp_path / "questions.csv"
        path.write_text(
            "id,stem,type,choices,correct_answer,points\n"
            "q1,What is 1+1?,single_choice,1;2,2,10\n"
            "q2,Pick one, or two,single_choice,a;b,a,5\n"
            "q3,Pick one, or two, or three,single_choice,a;b,a,5\n"
            "q4,Python is __ fun.,fill_in_blank,,very,10\n",
            encoding="utf-8",
        )

        result = service.import_file(path)

        assert [q.id for q in result.questions] == ["q1", "q4"]
        assert [row.row_number for row in result.errors] == [3, 4]
        assert "beyond the 6 question columns" in result.errors[0].error
        assert _by_id(result.questions, "q1").points == 10

    def test_not_a_workbook(
        self, service: SpreadsheetImportService, tmp_path: Path
    ) -> None:
        """A zip archive without workbook parts is an ImportFileError."""
        path = tmp_path / "questions.xlsx"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("notes.txt", "not a workbook")

        with pytest.raises(ImportFileError, match="Failed to read"):
            service.import_file(path)

    def test_garbage_workbook(
        self, service: SpreadsheetImportService, tmp_path: Path
    ) -> None:
        """Bytes that are no spreadsheet format at all are an ImportFileError."""
        path = tmp_path / "questions.xlsx"
        path.write_bytes(b"PK\x03\x04 truncated archive")

        with pytest.raises(ImportFileError, match="Failed to read"):
            service.import_file(path)

    def test_unsupported_type(
        self, service: SpreadsheetImportService, tmp_path: Path
    ) -> None:
        """Only spreadsheet formats are accepted."""
        path = tmp_path / "questions.txt"
        path.write_text("q1,stem", encoding="utf-8")

        with pytest.raises(ImportFileError, match="Unsupported"):
            service.import_file(path)


class TestNestSubQuestions:
    """Tests for nest_sub_questions."""

    def test_children_attached(self, service: SpreadsheetImportService) -> None:
        """'<id>-<n>' rows move under the material question '<id>'."""
        imported = service.import_rows(ROWS).questions

        nested = nest_sub_questions(imported)

        assert [q.id for q in nested] == ["q1", "q2", "q3", "q4", "q6"]
        material = nested[-1]
        assert [q.id for q in material.sub_questions] == ["q6-1", "q6-2"]
        assert material.total_sub_question_points == 10

    def test_original_material_untouched(self, service: SpreadsheetImportService) -> None:
        """The imported material question is copied, not modified."""
        imported = service.import_rows(ROWS).questions
        original = _by_id(imported, "q6")

        nest_sub_questions(imported)

        assert original.sub_questions == ()

    def test_children_without_parent_stay(self) -> None:
        """Hyphenated ids without an earlier material question are left alone."""
        orphan = Question(
            id="x-1",
            stem="Orphan",
            type=QuestionType.FILL_IN_BLANK,
            choices=[],
            correct_answer="a",
            points=1,
        )

        assert nest_sub_questions([orphan]) == [orphan]
