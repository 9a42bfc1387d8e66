from .repository_service import (
    EntityHandler,
    EntityHooks,
    PartialEntity,
    RepositoryService,
)

__all__ = ["EntityHandler", "EntityHooks", "PartialEntity", "RepositoryService"]
