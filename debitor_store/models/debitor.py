"""
Debitor domain model.

Business record for a debitor plus the defensive mapping from result rows.

Dependencies: pydantic
System role: Debitor data contract between repository and callers
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Debitor(BaseModel):
    """
    A single debitor record.

    Attributes:
        id: Identifier assigned by the database (0 until persisted)
        name: Display name, used as the default sort and search key
        email: Optional contact address, secondary search key ("" when absent)
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(default=0, description="Database-assigned identifier")
    name: str = Field(default="", description="Debitor name")
    email: str = Field(default="", description="Contact e-mail, empty when unknown")

    @field_validator("name", "email", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Debitor":
        """
        Build a Debitor from a result row, mapping NULL columns to defaults.

        Args:
            row: Result row keyed by column name (id, name, email)

        Returns:
            Debitor: Record with id 0 and empty strings in place of NULLs
        """
        raw_id = row.get("id")
        raw_name = row.get("name")
        raw_email = row.get("email")
        return cls(
            id=0 if raw_id is None else int(raw_id),
            name="" if raw_name is None else str(raw_name),
            email="" if raw_email is None else str(raw_email),
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive containment check on name and (non-empty) email."""
        needle = term.casefold()
        if needle in self.name.casefold():
            return True
        return bool(self.email) and needle in self.email.casefold()
