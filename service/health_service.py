"""Health service: liveness plus a database round-trip"""
import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from service.dto import HealthResponseDTO

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def get_health(session_factory: Callable[[], Session]) -> HealthResponseDTO:
    """
    Report service health.

    The API stays up when the database is down (analyses are still
    returned, only unsaved), so ``ok`` is True either way and the
    database state is reported separately.

    Returns:
        HealthResponseDTO: Health check result
    """
    database = "ok"
    try:
        with session_factory() as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database ping failed: {e}")
        database = "unavailable"

    return HealthResponseDTO(
        ok=True,
        database=database,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=API_VERSION
    )
