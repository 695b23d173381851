"""
Test Configuration and Fixtures

Shared fixtures: operators, in-memory ports for service tests, and an
in-memory SQLite ledger for repository tests.
"""

from collections.abc import Generator

import pytest
from sqlalchemy import Engine
from sqlmodel import Session

from presstrack.core.config import Settings
from presstrack.core.db import create_db_engine, get_session, init_db
from presstrack.domain.tooling.entities.user import User
from presstrack.domain.tooling.services import PressCycleService, RegenerationService
from presstrack.domain.tooling.value_objects.enums import Position
from presstrack.infrastructure.database.repositories import (
    SQLCycleRepository,
    SQLRegenerationRepository,
    SQLToolRepository,
    SQLUserRepository,
)
from presstrack.tests.factories import ToolFactory
from presstrack.tests.in_memory import (
    InMemoryCycleRepository,
    InMemoryRegenerationRepository,
    InMemoryToolDirectory,
    InMemoryUserDirectory,
)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        VALID_PRESS_NUMBERS=[0, 2, 3, 4, 5],
        TOOL_CYCLE_WARNING=800_000,
        TOOL_CYCLE_ERROR=1_000_000,
    )


@pytest.fixture
def operator() -> User:
    return User(user_id=4711, name="Anna")


# In-memory ports


@pytest.fixture
def cycle_repository() -> InMemoryCycleRepository:
    return InMemoryCycleRepository()


@pytest.fixture
def regeneration_repository(cycle_repository) -> InMemoryRegenerationRepository:
    return InMemoryRegenerationRepository(cycle_repository)


@pytest.fixture
def tool_directory() -> InMemoryToolDirectory:
    return InMemoryToolDirectory(
        [
            ToolFactory.create(tool_id=1, position=Position.TOP, code="G01"),
            ToolFactory.create(tool_id=2, position=Position.BOTTOM, code="G02"),
            ToolFactory.create(tool_id=3, position=Position.TOP, code="G03", press=0),
            ToolFactory.create(tool_id=4, position=Position.TOP_CASSETTE, code="C01"),
        ]
    )


@pytest.fixture
def user_directory(operator) -> InMemoryUserDirectory:
    return InMemoryUserDirectory([operator, User(user_id=815, name="Jonas")])


@pytest.fixture
def regeneration_service(
    cycle_repository, regeneration_repository, tool_directory
) -> RegenerationService:
    return RegenerationService(cycle_repository, regeneration_repository, tool_directory)


@pytest.fixture
def press_cycle_service(
    cycle_repository,
    regeneration_repository,
    tool_directory,
    user_directory,
    test_settings,
) -> PressCycleService:
    return PressCycleService(
        cycle_repository,
        regeneration_repository,
        tool_directory,
        user_directory,
        config=test_settings,
    )


# SQLite ledger


@pytest.fixture
def db_engine(test_settings) -> Generator[Engine, None, None]:
    """Fresh in-memory database per test."""
    engine = create_db_engine("sqlite://", config=test_settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    with get_session(db_engine) as session:
        yield session


@pytest.fixture
def sql_cycles(db_session) -> SQLCycleRepository:
    return SQLCycleRepository(db_session)


@pytest.fixture
def sql_regenerations(db_session) -> SQLRegenerationRepository:
    return SQLRegenerationRepository(db_session)


@pytest.fixture
def sql_tools(db_session) -> SQLToolRepository:
    return SQLToolRepository(db_session)


@pytest.fixture
def sql_users(db_session, operator) -> SQLUserRepository:
    repository = SQLUserRepository(db_session)
    repository.add(operator)
    return repository
