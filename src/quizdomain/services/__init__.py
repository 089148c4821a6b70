"""Service layer for scoring and import logic."""

from quizdomain.services.scoring import ScoringService
from quizdomain.services.spreadsheet_import import (
    ImportResult,
    RowResult,
    SpreadsheetImportService,
    nest_sub_questions,
)

__all__ = [
    "ImportResult",
    "RowResult",
    "ScoringService",
    "SpreadsheetImportService",
    "nest_sub_questions",
]
