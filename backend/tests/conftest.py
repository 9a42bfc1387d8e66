from __future__ import annotations

# ruff: noqa: E402
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = PROJECT_ROOT / "backend"
for path in (PROJECT_ROOT, BACKEND_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest
from crudkit.core.db import create_schema, dispose_engine, drop_schema, get_session
from crudkit.core.settings import settings
from crudkit.repositories import EntityRepository
from crudkit.services import RepositoryService
from sqlalchemy.orm import Session

from backend.tests.utils.entities import Customer, CustomerHandler


@pytest.fixture(scope="session", autouse=True)
def configure_test_database(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Point settings.database_url to a throwaway SQLite file for tests."""

    original_url = settings.database_url
    db_file = tmp_path_factory.mktemp("db") / "crudkit_test.db"
    settings.database_url = f"sqlite+pysqlite:///{db_file}"
    dispose_engine()
    yield settings.database_url
    dispose_engine()
    settings.database_url = original_url


@pytest.fixture(autouse=True)
def fresh_schema(configure_test_database: str) -> None:
    """Rebuild every registered table so each test starts empty."""

    drop_schema()
    create_schema()
    yield


@pytest.fixture()
def db_session() -> Session:
    session = get_session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture()
def customer_repository(db_session: Session) -> EntityRepository[Customer]:
    return EntityRepository(db_session, Customer)


@pytest.fixture()
def customer_handler(db_session: Session) -> CustomerHandler:
    return CustomerHandler(db_session)


@pytest.fixture()
def customer_service(
    customer_repository: EntityRepository[Customer],
    customer_handler: CustomerHandler,
) -> RepositoryService:
    return RepositoryService(customer_repository, customer_handler)
