"""
Shared pytest fixtures.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from user_graphql.config import Settings
from user_graphql.database import Database, create_database
from user_graphql.handler.utils import UserRepository, UserService
from user_graphql.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'users.db'}", sql_echo=False, seed_demo_users=0)


@pytest.fixture
def database(settings: Settings) -> Generator[Database, None, None]:
    database = create_database(settings)
    yield database
    database.dispose()


@pytest.fixture
def db(database: Database) -> Generator[Session, None, None]:
    with database.session() as session:
        yield session


@pytest.fixture
def repository(db: Session) -> UserRepository:
    return UserRepository(db)


@pytest.fixture
def service(repository: UserRepository) -> UserService:
    return UserService(repository)


@pytest.fixture
def context(service: UserService) -> dict:
    """GraphQL context as built per request by the application."""
    return {"users": service}


@pytest.fixture
def client(database: Database, settings: Settings) -> TestClient:
    return TestClient(create_app(database, settings))
