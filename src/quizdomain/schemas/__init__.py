"""Pydantic schemas for reports and command line output."""

from quizdomain.schemas.common import ErrorResponse
from quizdomain.schemas.importing import ImportReport, ImportRowError
from quizdomain.schemas.scoring import QuestionScore, ScoreReport

__all__ = [
    "ErrorResponse",
    "ImportReport",
    "ImportRowError",
    "QuestionScore",
    "ScoreReport",
]
