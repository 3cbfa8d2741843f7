import pytest
from sqlalchemy import func, inspect, select

from cashlog.constants import PROTECTED_CATEGORIES, PROTECTED_TRANSACTION_TYPES
from cashlog.db import Database, DatabaseError, build_url, connect, seed_defaults
from cashlog.models import Category, TransactionType


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'ledger.db'}")
    db.migrate()
    yield db
    db.engine.dispose()


def _env(**overrides):
    password = "password"
    env = {
        "CASHLOG_DB_HOST": "db.example.com",
        "CASHLOG_DB_USER": "user",
        "CASHLOG_DB_PASS": password,
        "CASHLOG_DB_NAME": "ledger",
        "CASHLOG_DB_PORT": "5432",
    }
    env.update(overrides)
    return env


def test_build_url_uses_environment_values():
    url = build_url(_env())
    assert url.drivername == "postgresql"
    assert url.host == "db.example.com"
    assert url.username == "user"
    assert url.password == "password"
    assert url.database == "ledger"
    assert url.port == int(_env()["CASHLOG_DB_PORT"])
    assert url.query["sslmode"] == "disable"


@pytest.mark.parametrize("port", ["", "abc", "54x"])
def test_build_url_rejects_bad_port(port):
    with pytest.raises(DatabaseError):
        build_url(_env(CASHLOG_DB_PORT=port))


def test_build_url_rejects_missing_port():
    env = _env()
    del env["CASHLOG_DB_PORT"]
    with pytest.raises(DatabaseError):
        build_url(env)


def test_build_url_override_wins(tmp_path):
    target = f"sqlite:///{tmp_path / 'x.db'}"
    url = build_url({"CASHLOG_DB_URL": target, "CASHLOG_DB_PORT": "bad"})
    assert url.drivername == "sqlite"
    assert url.database == str(tmp_path / "x.db")


def test_connect_returns_working_database(tmp_path):
    target = f"sqlite:///{tmp_path / 'ok.db'}"
    db = connect({"CASHLOG_DB_URL": target}, attempts=1, delay=0)
    try:
        assert db.url.database == str(tmp_path / "ok.db")
    finally:
        db.engine.dispose()


def test_connect_gives_up_after_attempts(tmp_path):
    target = f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}"
    with pytest.raises(DatabaseError, match="after 2 attempts"):
        connect({"CASHLOG_DB_URL": target}, attempts=2, delay=0)


def test_migrate_creates_tables(database):
    names = set(inspect(database.engine).get_table_names())
    assert {"transactions", "categories", "transaction_types"} <= names


def test_seed_defaults_inserts_protected_rows(database):
    seed_defaults(database)
    with database.session() as session:
        types = set(session.scalars(select(TransactionType.name)))
        categories = {(c.type, c.name) for c in session.scalars(select(Category))}
    assert types == set(PROTECTED_TRANSACTION_TYPES)
    expected = {(t, name) for t, names in PROTECTED_CATEGORIES.items() for name in names}
    assert categories == expected


def test_seed_defaults_is_idempotent(database):
    seed_defaults(database)
    with database.session() as session:
        first = (
            session.scalar(select(func.count()).select_from(TransactionType)),
            session.scalar(select(func.count()).select_from(Category)),
        )
    seed_defaults(database)
    with database.session() as session:
        second = (
            session.scalar(select(func.count()).select_from(TransactionType)),
            session.scalar(select(func.count()).select_from(Category)),
        )
    assert first == second


def test_seed_keeps_existing_custom_rows(database):
    with database.session() as session:
        session.add(TransactionType(name="transfer"))
        session.commit()
    seed_defaults(database)
    with database.session() as session:
        types = set(session.scalars(select(TransactionType.name)))
    assert types == set(PROTECTED_TRANSACTION_TYPES) | {"transfer"}