"""Pydantic schemas for spreadsheet import output."""

from pydantic import BaseModel, Field

from quizdomain.models.question import AnyQuestion


class ImportRowError(BaseModel):
    """A spreadsheet row that could not be turned into a question."""

    row_number: int = Field(..., ge=1, description="1-based spreadsheet row")
    detail: str = Field(..., description="Human-readable error message")


class ImportReport(BaseModel):
    """Questions imported from a file plus the rows that failed."""

    source: str | None = Field(None, description="File the rows were read from")
    questions: list[AnyQuestion] = Field(default_factory=list)
    errors: list[ImportRowError] = Field(default_factory=list)
