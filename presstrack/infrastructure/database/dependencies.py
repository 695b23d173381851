"""
Service wiring.

Builds the cycle engine and the regeneration tracker over SQL repositories
sharing one session. Repositories validate press numbers against the same
settings the services use.
"""

from sqlmodel import Session

from presstrack.core.config import Settings, settings
from presstrack.domain.tooling.services import PressCycleService, RegenerationService

from .repositories import (
    SQLCycleRepository,
    SQLRegenerationRepository,
    SQLToolRepository,
    SQLUserRepository,
)


def get_press_cycle_service(
    session: Session, config: Settings | None = None
) -> PressCycleService:
    """
    Get a PressCycleService over the given session.

    Args:
        session: Database session shared by all repositories
        config: Settings override, defaults to the module settings

    Returns:
        PressCycleService: Service instance
    """
    config = config or settings
    return PressCycleService(
        SQLCycleRepository(session, config.press_numbers),
        SQLRegenerationRepository(session),
        SQLToolRepository(session, config.press_numbers),
        SQLUserRepository(session),
        config=config,
    )


def get_regeneration_service(
    session: Session, config: Settings | None = None
) -> RegenerationService:
    """
    Get a RegenerationService over the given session.

    Sessions are not thread safe; build one service per thread. Starts and
    aborts on the same tool are still serialized across instances.
    """
    config = config or settings
    return RegenerationService(
        SQLCycleRepository(session, config.press_numbers),
        SQLRegenerationRepository(session),
        SQLToolRepository(session, config.press_numbers),
    )
