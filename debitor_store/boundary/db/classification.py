"""
Failure classification for guarded database calls.

Maps an exception raised while opening a connection or executing a
statement onto one of the latch-tripping failure kinds.

Dependencies: sqlalchemy
System role: Error taxonomy at the driver boundary
"""

import re
from collections.abc import Collection

from sqlalchemy import exc as sa_exc

from debitor_store.core.exceptions import (
    ConnectionTimeoutError,
    StoreError,
    StoreFailure,
    UnclassifiedStoreError,
)

# TNS connect timeout, TNS operation timed out, TNS no listener
DEFAULT_TIMEOUT_CODES: frozenset[int] = frozenset({12170, 12535, 12541})
DEFAULT_TIMEOUT_MARKERS: tuple[str, ...] = ("ORA-50000",)

_ORA_CODE = re.compile(r"\bORA-(\d{5})\b")


def _driver_error(exc: BaseException) -> BaseException | None:
    if isinstance(exc, sa_exc.DBAPIError):
        return exc.orig
    return exc


def driver_message(exc: BaseException) -> str:
    """Return the driver's own message, without SQLAlchemy's statement suffix."""
    orig = _driver_error(exc)
    if orig is None:
        return str(exc)
    return str(orig) or type(orig).__name__


def extract_vendor_code(exc: BaseException) -> int | str | None:
    """
    Pull the vendor error code out of a driver exception.

    Looks at the DBAPI exception wrapped by SQLAlchemy, trying the shapes used
    by common drivers: oracledb/cx_Oracle (args[0].code), MySQL drivers
    (integer args[0]), psycopg (pgcode) and sqlite3 (sqlite_errorcode). Falls
    back to an ORA-NNNNN code in the message.

    Args:
        exc: Exception raised during open/execute

    Returns:
        int | str | None: Vendor code, or None if the driver reports none
    """
    orig = _driver_error(exc)
    if orig is None:
        return None

    if orig.args:
        first = orig.args[0]
        code = getattr(first, "code", None)
        if isinstance(code, int) and not isinstance(code, bool):
            return code
        if isinstance(first, int) and not isinstance(first, bool):
            return first

    for attr in ("pgcode", "sqlite_errorcode"):
        value = getattr(orig, attr, None)
        if value is not None:
            return value

    match = _ORA_CODE.search(str(orig))
    if match:
        return int(match.group(1))
    return None


def classify_failure(
    exc: BaseException,
    timeout_codes: Collection[int] = DEFAULT_TIMEOUT_CODES,
    timeout_markers: Collection[str] = DEFAULT_TIMEOUT_MARKERS,
) -> StoreFailure:
    """
    Classify an exception into a latch-tripping failure.

    Args:
        exc: Exception raised while resolving the engine, opening, executing
            or fetching
        timeout_codes: Vendor codes meaning "store unreachable in time"
        timeout_markers: Message fragments with the same meaning

    Returns:
        StoreFailure: ConnectionTimeoutError, StoreError or
        UnclassifiedStoreError, chained to exc
    """
    message = driver_message(exc)
    vendor_code = extract_vendor_code(exc)

    if (
        isinstance(exc, (sa_exc.TimeoutError, TimeoutError))
        or vendor_code in timeout_codes
        or any(marker in message for marker in timeout_markers)
    ):
        failure: StoreFailure = ConnectionTimeoutError(message, vendor_code=vendor_code)
    elif isinstance(exc, sa_exc.DBAPIError):
        failure = StoreError(message, vendor_code=vendor_code)
    else:
        failure = UnclassifiedStoreError(
            message, vendor_code=vendor_code, details={"error_type": type(exc).__name__}
        )

    failure.__cause__ = exc
    return failure
