"""Domain models for the debitor store."""

from debitor_store.models.debitor import Debitor

__all__ = ["Debitor"]
