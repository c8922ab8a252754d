"""
Debitor repository.

Provides list, lookup, create and search operations for debitors on top of
the ConnectionGuard, using literal SQL with named parameters.

Dependencies: debitor_store.boundary.db.guard, debitor_store.models
System role: Debitor persistence operations
"""

import logging
from typing import Any

from debitor_store.boundary.db.guard import ConnectionGuard
from debitor_store.boundary.db.results import SqlCommand
from debitor_store.core.exceptions import DataAccessError, ValidationError
from debitor_store.models.debitor import Debitor

logger = logging.getLogger(__name__)

SELECT_ALL = "SELECT id, name, email FROM debitoren ORDER BY name"
SELECT_BY_ID = "SELECT id, name, email FROM debitoren WHERE id = :id"
INSERT_DEBITOR = "INSERT INTO debitoren (name, email) VALUES (:name, :email)"


class DebitorRepository:
    """
    Parameterized CRUD on the debitoren table.

    The repository never sees driver exceptions: store failures are absorbed
    by the guard, which trips its latch. Check connection_failed to tell an
    empty result from an unreachable store.
    """

    def __init__(self, connection_string: str, guard: ConnectionGuard | None = None) -> None:
        """
        Initialize repository.

        Args:
            connection_string: SQLAlchemy database URL
            guard: Shared connection guard; a private one when omitted

        Raises:
            ValidationError: If connection_string is empty or blank
        """
        if not connection_string or not connection_string.strip():
            raise ValidationError(
                "Connection string must not be empty", field="connection_string"
            )
        self.connection_string = connection_string
        self.guard = guard if guard is not None else ConnectionGuard()

    @property
    def connection_failed(self) -> bool:
        """True once the guard has given up on the database."""
        return self.guard.is_tripped()

    def get_all(self) -> list[Debitor]:
        """
        Load all debitors ordered by name.

        Returns an empty list when the guard short-circuits, and the rows mapped
        so far when it absorbs a failure (including a row that cannot be
        mapped).

        Returns:
            list[Debitor]: Debitors in store order (name ascending)

        Raises:
            DataAccessError: If the guard call itself raised unexpectedly
        """
        debitors: list[Debitor] = []
        try:
            self.guard.execute_query(
                self.connection_string,
                SELECT_ALL,
                lambda row: debitors.append(Debitor.from_row(row)),
            )
        except Exception as e:
            logger.error(
                "Failed to load debitors",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            raise DataAccessError(
                "Failed to load debitors from the database", operation="get_all"
            ) from e

        logger.info("Debitors loaded", extra={"count": len(debitors)})
        return debitors

    def get_by_id(self, debitor_id: Any) -> Debitor | None:
        """
        Look up a debitor by its identifier.

        Args:
            debitor_id: Positive integer id

        Returns:
            Debitor | None: The first matching debitor, None if there is none
            or the lookup failed

        Raises:
            ValidationError: If debitor_id is not a positive int
        """
        if isinstance(debitor_id, bool) or not isinstance(debitor_id, int):
            raise ValidationError(
                f"Debitor id must be an integer, got {type(debitor_id).__name__}",
                field="id",
            )
        if debitor_id <= 0:
            raise ValidationError("Debitor id must be greater than 0", field="id")

        found: list[Debitor] = []
        try:
            self.guard.execute_query(
                self.connection_string,
                SELECT_BY_ID,
                lambda row: found.append(Debitor.from_row(row)),
                lambda command: command.bind(":id", debitor_id),
                max_rows=1,
            )
        except Exception as e:
            logger.error(
                "Failed to look up debitor",
                extra={"error": str(e), "debitor_id": debitor_id},
            )
            return None

        return found[0] if found else None

    def create(self, debitor: Debitor | None) -> bool:
        """
        Insert a new debitor; the database assigns the id.

        Args:
            debitor: Record to insert; its id is ignored

        Returns:
            bool: True if the insert completed without a reported error

        Raises:
            ValidationError: If debitor is None or its name is blank
        """
        if debitor is None:
            raise ValidationError("Debitor must not be None", field="debitor")
        if not debitor.name or not debitor.name.strip():
            raise ValidationError("Debitor name must not be empty", field="name")

        def bind(command: SqlCommand) -> None:
            command.bind(":name", debitor.name)
            command.bind(":email", debitor.email or "")

        try:
            result = self.guard.execute_non_query(
                self.connection_string, INSERT_DEBITOR, bind
            )
        except Exception as e:
            logger.error(
                "Failed to create debitor",
                extra={"error": str(e), "debitor_name": debitor.name},
            )
            return False

        if result.ok:
            logger.info("Debitor created", extra={"debitor_name": debitor.name})
        return result.ok

    def search_and_filter(self, term: str = "") -> list[Debitor]:
        """
        Filter debitors by a search term and sort them by name.

        A non-empty term keeps debitors whose name or e-mail contains it,
        ignoring case. Any failure yields an empty list; use connection_failed
        to tell that apart from "no matches".

        Args:
            term: Search term; empty keeps every debitor

        Returns:
            list[Debitor]: Matching debitors sorted by name ascending
        """
        try:
            debitors = self.get_all()
            matches = [d for d in debitors if not term or d.matches(term)]
            matches.sort(key=lambda d: d.name)
        except Exception as e:
            logger.error(
                "Debitor search failed",
                extra={"error": str(e), "search_term": term},
            )
            return []

        logger.info(
            "Debitor search finished",
            extra={"matched": len(matches), "total": len(debitors)},
        )
        return matches
