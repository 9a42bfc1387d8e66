from __future__ import annotations

from typing import Any


class ServiceException(Exception):
    """Base class for business friendly errors surfaced to API consumers."""

    default_code = 10000

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])
        self.code = code if code is not None else self.default_code

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "errors": self.errors,
        }


class ValidationError(ServiceException):
    """Raised when incoming data does not satisfy the declared DTO rules."""

    default_code = 10001


class UnknownFieldError(ServiceException):
    """Raised when a filter references a field the entity does not map."""

    default_code = 10002

    def __init__(self, entity: str, field: str) -> None:
        super().__init__(
            f"{entity} has no field named {field!r}",
            errors=[{"loc": [field], "type": "unknown_field"}],
        )
        self.entity = entity
        self.field = field
