"""
Table definition for debitor storage.

Declares the debitoren table with SQLAlchemy Core so it can be created on a
fresh database. Queries never go through this object; the repository runs
literal SQL against the same column names.

Dependencies: sqlalchemy
System role: Schema bootstrap for local SQLite databases and tests

Usage:
    python -m debitor_store.boundary.db.schema
    # Or in code:
    create_tables(get_engine(settings.database.connection_string))
"""

from sqlalchemy import Column, Identity, Index, Integer, MetaData, String, Table, text
from sqlalchemy.engine import Engine

NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255

metadata = MetaData()

debitoren = Table(
    "debitoren",
    metadata,
    Column("id", Integer, Identity(), primary_key=True),
    Column("name", String(NAME_MAX_LENGTH), nullable=False),
    Column("email", String(EMAIL_MAX_LENGTH), nullable=True),
)

# Oracle stores '' as NULL, so a plain unique index already skips missing
# e-mails there; SQLite and PostgreSQL need the empty string excluded.
Index(
    "uq_debitoren_email",
    debitoren.c.email,
    unique=True,
    sqlite_where=text("email <> ''"),
    postgresql_where=text("email <> ''"),
)


def create_tables(engine: Engine) -> None:
    """
    Create the debitoren table if it does not exist.

    Idempotent: existing tables are left unchanged.

    Args:
        engine: Engine bound to the target database
    """
    metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """
    Drop the debitoren table and its data.

    Args:
        engine: Engine bound to the target database
    """
    metadata.drop_all(bind=engine)


if __name__ == "__main__":
    from debitor_store.boundary.db.connection import get_engine
    from debitor_store.configs import get_settings
    from debitor_store.observability import configure_logging, get_logger

    settings = get_settings()
    configure_logging(settings.log_level)
    create_tables(get_engine(settings.database.connection_string))
    get_logger(__name__).info("debitoren table created")
