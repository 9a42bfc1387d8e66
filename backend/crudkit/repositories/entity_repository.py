from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Mapping, TypeVar
from uuid import UUID

import sqlalchemy as sa
from crudkit.core.exceptions import UnknownFieldError
from crudkit.models.entity import RepositoryEntity
from crudkit.models.schemas import FilterOptions, SortDirection
from crudkit.utils.identifiers import parse_uuid
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from .predicates import as_predicate

EntityT = TypeVar("EntityT", bound=RepositoryEntity)


class EntityRepository(Generic[EntityT]):
    """SQLAlchemy persistence for one ``RepositoryEntity`` model.

    Soft-deleted rows are hidden from ``find_one_by`` and from
    ``find_and_count`` unless ``FilterOptions.with_deleted`` is set. The
    repository flushes but leaves commit/rollback to the session owner.
    """

    def __init__(self, session: Session, model: type[EntityT]) -> None:
        self.session = session
        self.model = model
        mapper = sa.inspect(model)
        self._columns = frozenset(mapper.column_attrs.keys())
        self._attributes = frozenset(mapper.attrs.keys())

    def _column(self, field: str) -> ColumnElement[Any]:
        if field not in self._columns:
            raise UnknownFieldError(self.model.__name__, field)
        return getattr(self.model, field)

    def _where_clauses(
        self, where: Mapping[str, Any] | None, *, with_deleted: bool
    ) -> list[ColumnElement[bool]]:
        clauses = [
            as_predicate(value).to_sql_filter(self._column(field))
            for field, value in (where or {}).items()
        ]
        if not with_deleted:
            clauses.append(self.model.deleted_at.is_(None))
        return clauses

    def find_one_by(self, **criteria: Any) -> EntityT | None:
        stmt = sa.select(self.model).where(
            *self._where_clauses(criteria, with_deleted=False)
        )
        return self.session.scalars(stmt.limit(1)).first()

    def find_and_count(
        self, options: FilterOptions | None = None
    ) -> tuple[list[EntityT], int]:
        options = options or FilterOptions()
        clauses = self._where_clauses(options.where, with_deleted=options.with_deleted)

        stmt = sa.select(self.model).where(*clauses)
        for field, direction in options.order.items():
            column = self._column(field)
            stmt = stmt.order_by(
                column.desc() if direction == SortDirection.DESC else column.asc()
            )
        if options.skip:
            stmt = stmt.offset(options.skip)
        if options.take:
            stmt = stmt.limit(options.take)

        count_stmt = sa.select(sa.func.count()).select_from(self.model).where(*clauses)
        rows = list(self.session.scalars(stmt).all())
        total = self.session.scalar(count_stmt) or 0
        return rows, total

    def save(self, partial: Mapping[str, Any] | EntityT) -> EntityT:
        if isinstance(partial, self.model):
            if partial.uuid is None:
                self.session.add(partial)
                self.session.flush()
                return partial
            entity = self.session.merge(partial)
            self.session.flush()
            self.session.refresh(entity)
            return entity

        values = dict(partial)
        unknown = sorted(set(values) - self._attributes)
        if unknown:
            raise UnknownFieldError(self.model.__name__, unknown[0])
        identifier = values.get("uuid")
        if identifier is not None:
            identifier = values["uuid"] = parse_uuid(identifier)
        entity = (
            self.session.get(self.model, identifier) if identifier is not None else None
        )
        if entity is None:
            entity = self.model(**values)
            self.session.add(entity)
        else:
            for field, value in values.items():
                setattr(entity, field, value)
        self.session.flush()
        self.session.refresh(entity)
        return entity

    def soft_delete(self, uuid: UUID) -> int:
        """Stamp ``deleted_at`` on a live row and return the affected row count."""

        entity = self.find_one_by(uuid=uuid)
        if entity is None:
            return 0
        entity.deleted_at = datetime.now(timezone.utc)
        self.session.flush()
        return 1
