"""
Database boundary layer: connection guard, engines, schema and repositories.

Exports:
  - ConnectionGuard, ConnectionState: Fail-once gate around SQL execution
  - GuardResult, GuardStatus, SqlCommand: Values crossing the guard boundary
  - get_engine(): Engine per connection string
  - create_tables(), drop_tables(): Schema bootstrap for the debitoren table
  - DebitorRepository: Debitor persistence operations

Dependencies: sqlalchemy, debitor_store.configs
System role: Database adapter for debitor records
"""

from debitor_store.boundary.db.connection import get_engine
from debitor_store.boundary.db.guard import ConnectionGuard, ConnectionState
from debitor_store.boundary.db.results import GuardResult, GuardStatus, SqlCommand
from debitor_store.boundary.db.schema import create_tables, drop_tables
from debitor_store.boundary.db.CRUD import DebitorRepository

__all__ = [
    # Connection
    "get_engine",
    "ConnectionGuard",
    "ConnectionState",
    # Results
    "GuardResult",
    "GuardStatus",
    "SqlCommand",
    # Schema
    "create_tables",
    "drop_tables",
    # Repositories
    "DebitorRepository",
]
