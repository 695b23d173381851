import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from presstrack.core.config import Settings, settings
from presstrack.shared.exceptions import DatabaseInitializationError

# make sure all SQLModel tables are imported before initializing the DB
from presstrack.infrastructure.database import models  # noqa: F401

logger = logging.getLogger(__name__)


def create_db_engine(url: str | None = None, config: Settings | None = None) -> Engine:
    """
    Build the SQL engine for the ledger.

    SQLite connections may be shared across threads; in-memory SQLite uses a
    single static connection. Remote databases verify connections before use
    and bound every statement by the configured timeout.
    """
    config = config or settings
    url = url or config.SQLALCHEMY_DATABASE_URI

    engine_kwargs: dict = {}
    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        timeout_ms = config.DB_STATEMENT_TIMEOUT_SECONDS * 1000
        engine_kwargs.update(
            {
                "pool_pre_ping": config.DB_POOL_PRE_PING,
                "pool_recycle": 3600,  # Recycle connections every hour
                "connect_args": {
                    "connect_timeout": config.DB_STATEMENT_TIMEOUT_SECONDS,
                    "options": f"-c statement_timeout={timeout_ms}",
                    "application_name": config.PROJECT_NAME,
                },
            }
        )

    return create_engine(url, **engine_kwargs)


def init_db(engine: Engine) -> None:
    """
    Create all ledger and directory tables.

    Raises:
        DatabaseInitializationError: If the schema cannot be created
    """
    try:
        SQLModel.metadata.create_all(engine)
    except SQLAlchemyError as e:
        logger.error("Database initialization failed: %s", e)
        raise DatabaseInitializationError(
            f"Failed to create tables on {engine.url.render_as_string(hide_password=True)}: {str(e)}"
        ) from e
    logger.info("Database initialized: %s", engine.url.render_as_string(hide_password=True))


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session
