from .base import RepositoryPort
from .entity_repository import EntityRepository
from .predicates import Between, Equals, IContains, Predicate

__all__ = [
    "RepositoryPort",
    "EntityRepository",
    "Predicate",
    "Equals",
    "IContains",
    "Between",
]
