"""
Guard call results and the parameter-binding command.

GuardResult is the tagged outcome of every ConnectionGuard call, so callers
can tell a short-circuited call from a failed one and from an empty result.
SqlCommand collects named parameters from a caller-supplied binder.

Dependencies: debitor_store.core.exceptions
System role: Value objects crossing the guard boundary
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from debitor_store.core.exceptions import (
    FailureKind,
    ShortCircuitedError,
    StoreFailure,
    ValidationError,
)

BindValue = str | int | None


class GuardStatus(str, Enum):
    """Outcome of a guarded database call."""

    SUCCESS = "success"
    SHORT_CIRCUITED = "short_circuited"
    FAILED = "failed"


@dataclass(frozen=True)
class GuardResult:
    """
    Tagged result of a ConnectionGuard call.

    Attributes:
        status: SUCCESS, SHORT_CIRCUITED or FAILED
        rowcount: Rows handed to the row handler (queries) or rows affected
            (non-queries); 0 unless status is SUCCESS
        failure: The classified failure when status is FAILED
    """

    status: GuardStatus
    rowcount: int = 0
    failure: StoreFailure | None = None

    @classmethod
    def success(cls, rowcount: int = 0) -> "GuardResult":
        return cls(status=GuardStatus.SUCCESS, rowcount=max(rowcount, 0))

    @classmethod
    def short_circuited(cls) -> "GuardResult":
        return cls(status=GuardStatus.SHORT_CIRCUITED)

    @classmethod
    def failed(cls, failure: StoreFailure) -> "GuardResult":
        return cls(status=GuardStatus.FAILED, failure=failure)

    @property
    def ok(self) -> bool:
        return self.status is GuardStatus.SUCCESS

    @property
    def is_short_circuited(self) -> bool:
        return self.status is GuardStatus.SHORT_CIRCUITED

    @property
    def is_failed(self) -> bool:
        return self.status is GuardStatus.FAILED

    @property
    def failure_kind(self) -> FailureKind | None:
        return self.failure.kind if self.failure is not None else None

    def raise_for_status(self) -> "GuardResult":
        """
        Raise the absorbed outcome for callers that want propagation.

        Returns:
            GuardResult: self, when the call succeeded

        Raises:
            ShortCircuitedError: If the call was skipped by the tripped latch
            StoreFailure: The classified failure if the call failed
        """
        if self.status is GuardStatus.SHORT_CIRCUITED:
            raise ShortCircuitedError()
        if self.failure is not None:
            raise self.failure
        return self


@dataclass
class SqlCommand:
    """
    SQL text plus the named parameters bound onto it.

    Values are passed to the driver separately from the statement and are
    never rendered into the text.
    """

    text: str
    parameters: dict[str, BindValue] = field(default_factory=dict)

    def bind(self, name: str, value: Any) -> "SqlCommand":
        """
        Bind a value to a named marker.

        Args:
            name: Marker name, with or without the leading ':'
            value: str, int or None (bool is rejected)

        Returns:
            SqlCommand: self, for chaining

        Raises:
            ValidationError: If the name is blank or the value type is unsupported
        """
        key = name[1:] if name.startswith(":") else name
        if not key or not key.isidentifier():
            raise ValidationError(f"Invalid parameter name: {name!r}", field="name")
        if isinstance(value, bool) or not isinstance(value, (str, int, type(None))):
            raise ValidationError(
                f"Unsupported value type for parameter :{key}: {type(value).__name__}",
                field=key,
            )
        self.parameters[key] = value
        return self


RowHandler = Callable[[Any], None]
ParameterBinder = Callable[[SqlCommand], None]
