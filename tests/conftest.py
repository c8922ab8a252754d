"""
Shared test fixtures and configuration for entire test suite.

Provides: Fake engine/connection doubles that record I/O, connection guard
fixtures, temp-file SQLite database with the debitoren table
Dependencies: pytest, sqlalchemy
System role: Test infrastructure and fixture management
"""

from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import MagicMock

import pytest

from debitor_store.boundary.db.connection import get_engine
from debitor_store.boundary.db.guard import ConnectionGuard, ConnectionState
from debitor_store.boundary.db.schema import create_tables


class FakeResult:
    """Stand-in for a SQLAlchemy CursorResult."""

    def __init__(self, rows: list[dict[str, Any]], rowcount: int) -> None:
        self._rows = rows
        self.rowcount = rowcount

    def mappings(self) -> Iterator[dict[str, Any]]:
        return iter(self._rows)


class FakeConnection:
    """Connection double recording statements, commits and close calls."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        rowcount: int = 0,
        execute_error: Exception | None = None,
    ) -> None:
        self.rows = rows or []
        self.rowcount = rowcount
        self.execute_error = execute_error
        self.executed: list[tuple[str, dict[str, Any]]] = []
        self.commit_calls = 0
        self.close_calls = 0

    def __enter__(self) -> "FakeConnection":
        return self

    def __exit__(self, *exc_info: Any) -> bool:
        self.close()
        return False

    def execute(self, statement: Any, parameters: dict[str, Any] | None = None) -> FakeResult:
        self.executed.append((str(statement), dict(parameters or {})))
        if self.execute_error is not None:
            raise self.execute_error
        return FakeResult(self.rows, self.rowcount)

    def commit(self) -> None:
        self.commit_calls += 1

    def close(self) -> None:
        self.close_calls += 1


class FakeEngine:
    """Engine double handing out one FakeConnection."""

    def __init__(
        self,
        connection: FakeConnection | None = None,
        connect_error: Exception | None = None,
    ) -> None:
        self.connection = connection or FakeConnection()
        self.connect_error = connect_error
        self.connect_calls = 0

    def connect(self) -> FakeConnection:
        self.connect_calls += 1
        if self.connect_error is not None:
            raise self.connect_error
        return self.connection


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    """
    Provide a factory for fake engines.

    Returns:
        Callable: make_engine(rows=..., rowcount=..., execute_error=..., connect_error=...)
    """

    def _make(
        rows: list[dict[str, Any]] | None = None,
        rowcount: int = 0,
        execute_error: Exception | None = None,
        connect_error: Exception | None = None,
    ) -> FakeEngine:
        connection = FakeConnection(rows=rows, rowcount=rowcount, execute_error=execute_error)
        return FakeEngine(connection, connect_error=connect_error)

    return _make


@pytest.fixture
def fake_connection() -> FakeConnection:
    """Provide an empty fake connection."""
    return FakeConnection()


@pytest.fixture
def fake_engine(fake_connection: FakeConnection) -> FakeEngine:
    """Provide a fake engine wrapping fake_connection."""
    return FakeEngine(fake_connection)


@pytest.fixture
def engine_factory(fake_engine: FakeEngine) -> MagicMock:
    """Provide an engine factory returning fake_engine."""
    return MagicMock(return_value=fake_engine)


@pytest.fixture
def guard(engine_factory: MagicMock) -> ConnectionGuard:
    """Provide a fresh guard backed by the fake engine."""
    return ConnectionGuard(state=ConnectionState(), engine_factory=engine_factory)


@pytest.fixture
def sqlite_url(tmp_path) -> Iterator[str]:
    """
    Create a temp-file SQLite database with the debitoren table.

    Yields:
        str: SQLAlchemy URL of the database
    """
    url = f"sqlite:///{tmp_path / 'debitoren.db'}"
    engine = get_engine(url)
    create_tables(engine)

    yield url

    engine.dispose()
    get_engine.cache_clear()
