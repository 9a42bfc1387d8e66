from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


from crudkit.models.entity import RepositoryEntity, TimestampMixin  # noqa: E402

__all__ = ["Base", "RepositoryEntity", "TimestampMixin"]
