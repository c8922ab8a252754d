"""
Dependency construction.

Factory functions that wire settings, the connection guard and the
repository together. Callers own the returned instances; nothing here is
cached, so one process should build its guard once and reuse it.

Dependencies: debitor_store.configs, debitor_store.boundary
System role: Composition root for the data-access core
"""

import logging

from debitor_store.boundary.db.CRUD import DebitorRepository
from debitor_store.boundary.db.guard import ConnectionGuard, TripCallback
from debitor_store.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def build_connection_guard(
    settings: Settings | None = None,
    on_trip: TripCallback | None = None,
) -> ConnectionGuard:
    """
    Build the long-lived connection guard.

    Args:
        settings: Application settings (cached settings when omitted)
        on_trip: Called once when the database is first found unreachable,
            e.g. to show the user a notice

    Returns:
        ConnectionGuard: Guard with the configured timeout classification
    """
    settings = settings or get_settings()
    return ConnectionGuard.from_settings(settings.database, on_trip=on_trip)


def build_debitor_repository(
    guard: ConnectionGuard,
    settings: Settings | None = None,
) -> DebitorRepository:
    """
    Build a debitor repository bound to the configured database.

    Args:
        guard: Shared connection guard
        settings: Application settings (cached settings when omitted)

    Returns:
        DebitorRepository: Repository using the Oracle URL, or the SQLite
        fallback when none is configured
    """
    settings = settings or get_settings()
    if settings.database.is_sqlite_fallback:
        logger.info(
            "No Oracle connection configured; using SQLite fallback",
            extra={"sqlite_path": settings.database.sqlite_path},
        )
    return DebitorRepository(settings.database.connection_string, guard=guard)
