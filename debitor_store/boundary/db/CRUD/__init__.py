"""
Repositories for database records.

Usage:
    from debitor_store.boundary.db.CRUD import DebitorRepository

    repository = DebitorRepository(settings.database.connection_string, guard)
    debitors = repository.search_and_filter("acme")
"""

from debitor_store.boundary.db.CRUD.debitor_repository import DebitorRepository

__all__ = ["DebitorRepository"]
