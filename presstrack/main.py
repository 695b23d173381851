import logging

from sqlalchemy import Engine

from presstrack.core.config import Settings, settings
from presstrack.core.db import create_db_engine, init_db
from presstrack.core.observability import setup_structured_logging

logger = logging.getLogger(__name__)


def initialize(config: Settings | None = None) -> Engine:
    """
    Process bootstrap: logging, engine and schema.

    Raises:
        DatabaseInitializationError: If the tables cannot be created
    """
    config = config or settings
    setup_structured_logging(config)

    logger.info(
        "Starting %s (environment=%s, presses=%s)",
        config.PROJECT_NAME,
        config.ENVIRONMENT,
        list(config.press_numbers),
    )
    engine = create_db_engine(config=config)
    init_db(engine)
    return engine
