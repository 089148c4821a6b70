"""Custom exceptions for the quiz domain."""

from typing import Any

from pydantic import ValidationError


class QuizDomainException(Exception):
    """Base exception for all quiz domain errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class DomainValidationError(ValueError, QuizDomainException):
    """An entity invariant was violated."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        QuizDomainException.__init__(
            self,
            message=message,
            error_code="VALIDATION_ERROR",
            details={"field": field, **(details or {})} if field else details,
        )

    @classmethod
    def from_validation_error(
        cls,
        model_name: str,
        exc: ValidationError,
    ) -> "DomainValidationError":
        """Translate a pydantic ValidationError raised while building a model."""
        errors = _flatten_errors(
            exc.errors(include_url=False, include_context=True, include_input=False)
        )
        problems = []
        for error in errors:
            location = ".".join(str(part) for part in error["loc"])
            message = error["msg"].removeprefix("Value error, ")
            problems.append(f"{location}: {message}" if location else message)

        first_field = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        return cls(
            message=f"Invalid {model_name}: " + "; ".join(problems),
            field=first_field or None,
            details={"errors": errors},
        )


def _flatten_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Replace wrapped DomainValidationErrors by the errors they carry.

    Nested domain models raise DomainValidationError from their constructor,
    which pydantic reports as a ``value_error`` at the nested model's location.
    Their own errors are lifted out with the outer location prepended, and
    the exception objects in ``ctx`` are dropped so the list stays JSON-safe.
    """
    flat: list[dict[str, Any]] = []
    for error in errors:
        cause = (error.get("ctx") or {}).get("error")
        error = {key: value for key, value in error.items() if key != "ctx"}
        loc = tuple(error["loc"])

        if isinstance(cause, DomainValidationError):
            nested = cause.details.get("errors")
            if nested:
                flat.extend({**item, "loc": (*loc, *item["loc"])} for item in nested)
                continue
            field = cause.details.get("field")
            if field and loc[-1:] != (field,):
                loc = (*loc, field)

        flat.append({**error, "loc": loc})
    return flat


class ImportFileError(QuizDomainException):
    """A question or answer file could not be read."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="IMPORT_ERROR",
            details={"path": path, **(details or {})} if path else details,
        )
