from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Protocol, TypeVar
from uuid import UUID

from crudkit.core.exceptions import ValidationError
from crudkit.core.logging import get_logger
from crudkit.core.settings import settings
from crudkit.models.entity import RepositoryEntity
from crudkit.models.schemas import DeleteResult, FilterOptions, PaginatedResponse
from crudkit.repositories.base import RepositoryPort
from crudkit.repositories.predicates import IContains
from crudkit.utils.identifiers import is_uuid, parse_uuid
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

EntityT = TypeVar("EntityT", bound=RepositoryEntity)
DtoT = TypeVar("DtoT", bound=BaseModel)

PartialEntity = dict[str, Any]


class EntityHandler(Protocol[DtoT]):
    """Per-entity behaviour plugged into ``RepositoryService``."""

    dto_model: type[DtoT]

    def build_partial(self, dto: DtoT) -> PartialEntity: ...

    def validate_before_create(self, dto: DtoT) -> None: ...

    def validate_before_edit(self, uuid: UUID, dto: DtoT) -> None: ...


class EntityHooks(ABC, Generic[DtoT]):
    """Convenience base for handlers: hooks default to no-ops.

    Hooks signal a rejected operation by raising a ``ServiceException``
    subclass.
    """

    dto_model: type[DtoT]

    @abstractmethod
    def build_partial(self, dto: DtoT) -> PartialEntity:
        """Map a validated DTO onto entity attribute values."""

    def validate_before_create(self, dto: DtoT) -> None:
        return None

    def validate_before_edit(self, uuid: UUID, dto: DtoT) -> None:
        return None


class RepositoryService(Generic[EntityT, DtoT]):
    """Validate → hook → build partial → persist, for one entity type."""

    def __init__(
        self,
        repository: RepositoryPort[EntityT],
        handler: EntityHandler[DtoT],
    ) -> None:
        self.repository = repository
        self.handler = handler
        self.logger = get_logger(self.__class__.__name__)

    def validate_dto(self, data: Mapping[str, Any] | BaseModel) -> DtoT:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=True)
        try:
            return self.handler.dto_model.model_validate(data)
        except PydanticValidationError as exc:
            errors = exc.errors(include_url=False)
            self.logger.info(
                "%s rejected with %d violation(s)",
                self.handler.dto_model.__name__,
                len(errors),
            )
            raise ValidationError(
                settings.validation_error_message, errors=errors
            ) from exc

    def build_options_to_filter(
        self, options: FilterOptions | Mapping[str, Any] | None
    ) -> FilterOptions | None:
        if options is None:
            return None
        if not isinstance(options, FilterOptions):
            try:
                options = FilterOptions.model_validate(options)
            except PydanticValidationError as exc:
                raise ValidationError(
                    settings.validation_error_message,
                    errors=exc.errors(include_url=False),
                ) from exc
        if not options.has_search:
            return options
        where = {field: IContains(options.search) for field in options.search_fields}
        return options.model_copy(update={"where": where, "search": None})

    def get(self, uuid: UUID | str) -> EntityT | None:
        if not is_uuid(uuid):
            self.logger.debug("Lookup skipped for malformed identifier %r", uuid)
            return None
        return self.repository.find_one_by(uuid=parse_uuid(uuid))

    def filter(
        self, options: FilterOptions | Mapping[str, Any] | None = None
    ) -> PaginatedResponse[EntityT]:
        opt = self.build_options_to_filter(options)
        data, total = self.repository.find_and_count(opt)
        self.logger.debug("filter matched %d row(s)", total)
        return PaginatedResponse(
            data=data,
            total=total,
            limit=opt.take if opt else None,
            offset=opt.skip if opt else None,
        )

    def save(self, model: EntityT) -> EntityT:
        return self.repository.save(model)

    def create(self, data: Mapping[str, Any] | BaseModel) -> EntityT:
        dto = self.validate_dto(data)
        self.handler.validate_before_create(dto)
        partial = self.handler.build_partial(dto)
        entity = self.repository.save(partial)
        self.logger.info("Created %s %s", type(entity).__name__, entity.uuid)
        return entity

    def edit(self, uuid: UUID | str, data: Mapping[str, Any] | BaseModel) -> EntityT:
        dto = self.validate_dto(data)
        identifier = self._parse_identifier(uuid)
        self.handler.validate_before_edit(identifier, dto)
        partial = dict(self.handler.build_partial(dto))
        partial["uuid"] = identifier
        entity = self.repository.save(partial)
        self.logger.info("Edited %s %s", type(entity).__name__, entity.uuid)
        return entity

    def remove(self, uuid: UUID | str) -> DeleteResult:
        if not is_uuid(uuid):
            return {"affected": 0}
        affected = self.repository.soft_delete(parse_uuid(uuid))
        self.logger.info("Soft-deleted %s (affected=%d)", uuid, affected)
        return {"affected": affected}

    def _parse_identifier(self, uuid: UUID | str) -> UUID:
        try:
            return parse_uuid(uuid)
        except ValueError as exc:
            raise ValidationError(
                settings.validation_error_message,
                errors=[
                    {
                        "type": "uuid_parsing",
                        "loc": ("uuid",),
                        "msg": str(exc),
                        "input": uuid,
                    }
                ],
            ) from exc
