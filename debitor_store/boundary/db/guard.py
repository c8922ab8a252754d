"""
Connection guard: fail-once circuit breaker around raw SQL execution.

Every database call of the core goes through a ConnectionGuard. The guard
opens a connection per call, runs a literal SQL statement with named
parameters, classifies failures and trips its ConnectionState latch on any
of them. Once tripped, the latch stays tripped for the lifetime of the
state object and every later call returns SHORT_CIRCUITED without touching
the database. There is no reconnection and no timed reset.

Failures are absorbed here and returned as a tagged GuardResult. This
includes exceptions raised by caller-supplied callbacks (row handler,
parameter binder): they trip the latch like any other failure, after the
connection has been released.

Dependencies: sqlalchemy, debitor_store.configs
System role: Single gate for database access
"""

import logging
import threading
from collections.abc import Collection
from typing import Callable

from sqlalchemy import text
from sqlalchemy.engine import Engine

from debitor_store.boundary.db.classification import (
    DEFAULT_TIMEOUT_CODES,
    DEFAULT_TIMEOUT_MARKERS,
    classify_failure,
)
from debitor_store.boundary.db.connection import get_engine
from debitor_store.boundary.db.results import (
    GuardResult,
    ParameterBinder,
    RowHandler,
    SqlCommand,
)
from debitor_store.configs import DatabaseSettings
from debitor_store.core.exceptions import FailureKind
from debitor_store.observability.log_utils import log_with_context, sql_preview

logger = logging.getLogger(__name__)

EngineFactory = Callable[[str], Engine]
TripCallback = Callable[[GuardResult], None]


class ConnectionState:
    """
    Process-wide "connection is unusable" latch.

    All reads and writes happen under one lock. The flag only ever goes from
    False to True.
    """

    def __init__(self) -> None:
        self._failed = False
        self._lock = threading.Lock()

    @property
    def failed(self) -> bool:
        with self._lock:
            return self._failed

    def trip(self) -> bool:
        """
        Mark the connection as failed.

        Returns:
            bool: True only for the call that performed the transition
        """
        with self._lock:
            if self._failed:
                return False
            self._failed = True
            return True


class ConnectionGuard:
    """
    Gate for query and non-query execution behind a fail-once latch.

    Create one guard per process (or per backing store) and hand it to every
    repository that talks to that store.
    """

    def __init__(
        self,
        state: ConnectionState | None = None,
        engine_factory: EngineFactory = get_engine,
        timeout_error_codes: Collection[int] = DEFAULT_TIMEOUT_CODES,
        timeout_message_markers: Collection[str] = DEFAULT_TIMEOUT_MARKERS,
        on_trip: TripCallback | None = None,
    ) -> None:
        """
        Initialize the guard.

        Args:
            state: Latch to use; a fresh untripped one when omitted
            engine_factory: Returns the Engine for a connection string
            timeout_error_codes: Vendor codes classified as connection timeouts
            timeout_message_markers: Message fragments classified as timeouts
            on_trip: Called once, with the failing result, when the latch trips
        """
        self.state = state if state is not None else ConnectionState()
        self._engine_factory = engine_factory
        self._timeout_codes = frozenset(timeout_error_codes)
        self._timeout_markers = tuple(timeout_message_markers)
        self._on_trip = on_trip

    @classmethod
    def from_settings(
        cls,
        settings: DatabaseSettings,
        on_trip: TripCallback | None = None,
    ) -> "ConnectionGuard":
        """Build a guard using the timeout classification from settings."""
        return cls(
            timeout_error_codes=settings.timeout_error_codes,
            timeout_message_markers=settings.timeout_message_markers,
            on_trip=on_trip,
        )

    def is_tripped(self) -> bool:
        """Thread-safe snapshot of the latch."""
        return self.state.failed

    def execute_query(
        self,
        connection_string: str,
        query: str,
        row_handler: RowHandler,
        parameter_binder: ParameterBinder | None = None,
        max_rows: int | None = None,
    ) -> GuardResult:
        """
        Run a read statement and stream its rows to row_handler.

        row_handler is called once per row, in the order the store returns
        them, while the cursor is open. Rows are RowMapping objects keyed by
        column name. An exception from row_handler or parameter_binder is
        treated like any other failure during execution: it trips the latch
        and comes back as an unclassified failure.

        Args:
            connection_string: SQLAlchemy database URL (opaque to the guard)
            query: SQL text with optional :name markers
            row_handler: Per-row callback
            parameter_binder: Optional callback binding values onto the command
            max_rows: Stop reading once this many rows were handled; all rows
                when None

        Returns:
            GuardResult: SUCCESS with rowcount = rows handled, SHORT_CIRCUITED,
            or FAILED with the classified failure
        """
        if self.is_tripped():
            return self._skip("query", query)

        command = SqlCommand(query)
        handled = 0
        try:
            if parameter_binder is not None:
                parameter_binder(command)
            engine = self._engine_factory(connection_string)
            with engine.connect() as conn:
                result = conn.execute(text(command.text), command.parameters)
                for row in result.mappings():
                    row_handler(row)
                    handled += 1
                    if max_rows is not None and handled >= max_rows:
                        break
        except Exception as e:
            return self._fail("query", command.text, e)

        logger.debug(
            f"{__name__}:execute_query - Query executed",
            extra={"rows": handled, "statement": sql_preview(command.text)},
        )
        return GuardResult.success(handled)

    def execute_non_query(
        self,
        connection_string: str,
        command_text: str,
        parameter_binder: ParameterBinder | None = None,
    ) -> GuardResult:
        """
        Run a mutating statement (INSERT/UPDATE/DELETE) and commit it.

        Args:
            connection_string: SQLAlchemy database URL (opaque to the guard)
            command_text: SQL text with :name markers
            parameter_binder: Called exactly once, before execution, to bind
                the named parameters; an exception from it trips the latch

        Returns:
            GuardResult: SUCCESS with rowcount = affected rows, SHORT_CIRCUITED,
            or FAILED with the classified failure
        """
        if self.is_tripped():
            return self._skip("non_query", command_text)

        command = SqlCommand(command_text)
        try:
            if parameter_binder is not None:
                parameter_binder(command)
            engine = self._engine_factory(connection_string)
            with engine.connect() as conn:
                result = conn.execute(text(command.text), command.parameters)
                affected = result.rowcount
                conn.commit()
        except Exception as e:
            return self._fail("non_query", command.text, e)

        outcome = GuardResult.success(affected)
        logger.info(
            f"{__name__}:execute_non_query - {outcome.rowcount} rows affected",
            extra={"rows": outcome.rowcount, "statement": sql_preview(command.text)},
        )
        return outcome

    def _skip(self, operation: str, statement: str) -> GuardResult:
        logger.debug(
            f"{__name__}:{operation} - Database connection already failed; skipping",
            extra={"statement": sql_preview(statement)},
        )
        return GuardResult.short_circuited()

    def _fail(self, operation: str, statement: str, error: Exception) -> GuardResult:
        failure = classify_failure(error, self._timeout_codes, self._timeout_markers)
        result = GuardResult.failed(failure)

        if failure.kind is FailureKind.TIMEOUT:
            summary = "Timed out connecting to the database"
        elif failure.kind is FailureKind.VENDOR_ERROR:
            summary = "Database error"
            if failure.vendor_code is not None:
                summary = f"Database error {failure.vendor_code}"
        else:
            summary = f"Unexpected {type(error).__name__}"

        log_with_context(
            logger,
            logging.ERROR,
            f"{__name__}:{operation} - {summary}: {failure.message}",
            operation=operation,
            failure_kind=failure.kind.value,
            vendor_code=failure.vendor_code,
            error_msg=failure.message,
            statement=sql_preview(statement),
        )

        if self.state.trip():
            logger.warning(
                f"{__name__}:{operation} - Cannot reach the database; "
                "further database calls are skipped"
            )
            if self._on_trip is not None:
                try:
                    self._on_trip(result)
                except Exception as e:
                    logger.error(f"{__name__}:on_trip - {type(e).__name__}: {e}")

        return result
