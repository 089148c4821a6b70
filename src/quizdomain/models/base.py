"""Base class for validated domain entities."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from quizdomain.exceptions import DomainValidationError


class DomainModel(BaseModel):
    """Pydantic model that reports invariant violations as DomainValidationError.

    Construction, ``model_validate``/``model_validate_json`` and attribute
    assignment all go through pydantic validation; a failure in any of them
    surfaces as a single DomainValidationError (a ValueError) carrying the
    pydantic error list in ``details["errors"]``.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def __init__(self, /, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise DomainValidationError.from_validation_error(
                type(self).__name__, exc
            ) from exc

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> Self:
        try:
            return super().model_validate(obj, **kwargs)
        except ValidationError as exc:
            raise DomainValidationError.from_validation_error(cls.__name__, exc) from exc

    @classmethod
    def model_validate_json(cls, json_data: str | bytes, **kwargs: Any) -> Self:
        try:
            return super().model_validate_json(json_data, **kwargs)
        except ValidationError as exc:
            raise DomainValidationError.from_validation_error(cls.__name__, exc) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as exc:
            raise DomainValidationError.from_validation_error(
                type(self).__name__, exc
            ) from exc
