"""Choice value offered by a choice-based question."""

from pydantic import ConfigDict, Field, field_validator

from quizdomain.ids import generate_id
from quizdomain.models.base import DomainModel


class Choice(DomainModel):
    """One selectable option. Immutable; two choices are equal when their ids are."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Choice text cannot be empty")
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Choice):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
