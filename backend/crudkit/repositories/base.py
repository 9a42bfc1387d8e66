from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar
from uuid import UUID

from crudkit.models.schemas import FilterOptions

EntityT = TypeVar("EntityT")


class RepositoryPort(Protocol[EntityT]):
    """Persistence operations the generic service relies on."""

    def find_one_by(self, **criteria: Any) -> EntityT | None: ...

    def find_and_count(
        self, options: FilterOptions | None = None
    ) -> tuple[list[EntityT], int]: ...

    def save(self, partial: Mapping[str, Any] | EntityT) -> EntityT: ...

    def soft_delete(self, uuid: UUID) -> int: ...
