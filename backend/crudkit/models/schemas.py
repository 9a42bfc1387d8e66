from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypedDict, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class SortDirection(StrEnum):
    ASC = "ASC"
    DESC = "DESC"


class FilterOptions(BaseModel):
    """Listing options: predicate, free-text search and pagination bounds."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="forbid",
    )

    where: dict[str, Any] | None = None
    search: str | None = None
    search_fields: list[str] = Field(default_factory=list, alias="searchFields")
    take: int | None = Field(default=None, ge=0)
    skip: int | None = Field(default=None, ge=0)
    order: dict[str, SortDirection] = Field(default_factory=dict)
    with_deleted: bool = Field(default=False, alias="withDeleted")

    @field_validator("order", mode="before")
    @classmethod
    def normalize_order(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        return {field: str(direction).upper() for field, direction in value.items()}

    @property
    def has_search(self) -> bool:
        return bool(self.search) and bool(self.search_fields)


@dataclass(frozen=True, slots=True)
class PaginatedResponse(Generic[T]):
    data: list[T]
    total: int
    limit: int | None
    offset: int | None

    def as_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
        }


class DeleteResult(TypedDict):
    affected: int
