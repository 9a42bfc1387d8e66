"""
Predicate builders used in ``FilterOptions.where``.

Each predicate describes one comparison for one field and renders itself
against the SQLAlchemy column it is bound to. Plain values in a ``where``
mapping are treated as ``Equals``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.sql.elements import ColumnElement


class Predicate(ABC):
    """A single field comparison."""

    @abstractmethod
    def to_sql_filter(self, column: ColumnElement[Any]) -> ColumnElement[bool]:
        """
        Render the comparison against ``column``.

        Args:
            column: Mapped column attribute of the entity

        Returns:
            SQLAlchemy boolean expression
        """

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{self.__class__.__name__}({fields})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]


class Equals(Predicate):
    """Exact match; ``None`` renders as ``IS NULL``."""

    def __init__(self, value: Any):
        self.value = value

    def to_sql_filter(self, column: ColumnElement[Any]) -> ColumnElement[bool]:
        if self.value is None:
            return column.is_(None)
        return column == self.value


class IContains(Predicate):
    """Case-insensitive substring match, wildcards in the text match literally."""

    def __init__(self, text: str):
        self.text = text

    def to_sql_filter(self, column: ColumnElement[Any]) -> ColumnElement[bool]:
        return column.icontains(self.text, autoescape=True)


class Between(Predicate):
    """Inclusive range; either bound may be omitted but not both."""

    def __init__(self, lower: Any = None, upper: Any = None):
        if lower is None and upper is None:
            raise ValueError("Between requires at least one bound")
        self.lower = lower
        self.upper = upper

    def to_sql_filter(self, column: ColumnElement[Any]) -> ColumnElement[bool]:
        if self.lower is None:
            return column <= self.upper
        if self.upper is None:
            return column >= self.lower
        return column.between(self.lower, self.upper)


def as_predicate(value: Any) -> Predicate:
    if isinstance(value, Predicate):
        return value
    return Equals(value)
