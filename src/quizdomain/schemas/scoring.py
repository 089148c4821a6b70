"""Pydantic schemas describing how an answer sheet was scored."""

from pydantic import BaseModel, Field


class QuestionScore(BaseModel):
    """Points contributed by one answer."""

    question_id: str = Field(..., description="Question the answer refers to")
    matched: bool = Field(..., description="Whether a question with this id was found")
    awarded: int = Field(0, ge=0, description="Total points contributed by this answer")
    material_points: int = Field(
        0,
        ge=0,
        description="Sub-question point total added for a material question",
    )
    sub_scores: list["QuestionScore"] = Field(
        default_factory=list,
        description="Per-sub-question scores for a material question",
    )


class ScoreReport(BaseModel):
    """Score breakdown for one answer sheet."""

    sheet_id: str = Field(..., description="Answer sheet ID")
    quiz_id: str = Field(..., description="Quiz the sheet was submitted for")
    user_id: str = Field(..., description="Learner who submitted the sheet")
    total: int = Field(..., ge=0, description="Total score")
    items: list[QuestionScore] = Field(
        default_factory=list,
        description="One entry per submitted answer, in submission order",
    )
