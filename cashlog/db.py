"""Connecting to the ledger database and seeding defaults."""

import logging
import os
import time

from sqlalchemy import create_engine, select
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cashlog.constants import PROTECTED_CATEGORIES, PROTECTED_TRANSACTION_TYPES
from cashlog.models import Base, Category, TransactionType

log = logging.getLogger(__name__)


class DatabaseError(Exception):
    """The database cannot be configured, reached or migrated."""


class Database:
    """A handle on the ledger database."""

    def __init__(self, url):
        self.url = make_url(url)
        self.engine = create_engine(self.url)

    def migrate(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            raise DatabaseError(f"Failed to auto migrate: {exc}") from exc

    def session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)


def build_url(environ=None) -> URL:
    """The database URL from CASHLOG_DB_* settings; CASHLOG_DB_URL wins if set."""
    env = os.environ if environ is None else environ
    if env.get("CASHLOG_DB_URL"):
        return make_url(env["CASHLOG_DB_URL"])
    port_text = env.get("CASHLOG_DB_PORT", "")
    try:
        port = int(port_text)
    except ValueError:
        raise DatabaseError(f"Invalid CASHLOG_DB_PORT: {port_text!r}") from None
    return URL.create(
        "postgresql",
        username=env.get("CASHLOG_DB_USER") or None,
        password=env.get("CASHLOG_DB_PASS") or None,
        host=env.get("CASHLOG_DB_HOST") or None,
        port=port,
        database=env.get("CASHLOG_DB_NAME") or None,
        query={"sslmode": "disable"},
    )


def connect(environ=None, attempts=5, delay=5.0) -> Database:
    """Connect to the configured database, retrying a few times."""
    database = Database(build_url(environ))
    error = None
    for attempt in range(1, attempts + 1):
        try:
            with database.engine.connect():
                return database
        except SQLAlchemyError as exc:
            error = exc
            database.engine.dispose()
            log.warning("DB connection failed. Retrying in %ss (%d/%d)...", delay, attempt, attempts)
            if attempt < attempts:
                time.sleep(delay)
    raise DatabaseError(f"Failed to connect to database after {attempts} attempts: {error}") from error


def seed_defaults(database: Database) -> None:
    """Make sure the protected types and categories exist."""
    rows = [(TransactionType, {"name": name}) for name in PROTECTED_TRANSACTION_TYPES]
    rows += [
        (Category, {"name": name, "type": type_name})
        for type_name, names in PROTECTED_CATEGORIES.items()
        for name in names
    ]
    with database.session() as session:
        for model, attributes in rows:
            if session.scalars(select(model).filter_by(**attributes)).first() is None:
                session.add(model(**attributes))
                session.flush()
        session.commit()