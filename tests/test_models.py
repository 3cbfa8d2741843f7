from datetime import datetime

import pytest
from sqlalchemy import create_engine, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cashlog.models import (
    Base,
    Category,
    MonthlySummary,
    ReportFilter,
    Transaction,
    TransactionType,
)


@pytest.fixture
def session(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'models.db'}")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


def test_summary_balance_is_income_minus_expense():
    summary = MonthlySummary(year=2025, month=3, income=120.5, expense=20.25)
    assert summary.balance + summary.expense == pytest.approx(summary.income)


def test_summary_balance_negative_when_spending_exceeds_income():
    summary = MonthlySummary(year=2025, month=3, income=10.0, expense=30.0)
    assert summary.balance < 0


def test_summary_label_pads_month():
    assert MonthlySummary(year=2025, month=3).label == "2025-03"
    assert MonthlySummary(year=2024, month=11).label.endswith("-11")


def test_report_filter_defaults_mean_unrestricted():
    report_filter = ReportFilter()
    assert (report_filter.year, report_filter.month, report_filter.week) == (0, 0, 0)
    assert report_filter.start_date == report_filter.end_date == ""


def test_tables_are_created(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'tables.db'}")
    Base.metadata.create_all(engine)
    names = set(inspect(engine).get_table_names())
    engine.dispose()
    assert {
        Transaction.__tablename__,
        Category.__tablename__,
        TransactionType.__tablename__,
    } <= names


def test_transaction_gets_id_and_timestamps(session):
    before = datetime.now()
    entry = Transaction(amount=12.5, category="Rent", description="march", type="expense")
    session.add(entry)
    session.commit()
    after = datetime.now()

    stored = session.scalars(select(Transaction)).one()
    assert stored.id == entry.id
    assert stored.amount == 12.5
    assert before <= stored.created_at <= after
    assert before <= stored.updated_at <= after


def test_category_names_are_unique(session):
    session.add(Category(name="Rent", type="expense"))
    session.commit()
    session.add(Category(name="Rent", type="income"))
    with pytest.raises(IntegrityError):
        session.commit()


def test_transaction_type_names_are_unique(session):
    session.add(TransactionType(name="transfer"))
    session.commit()
    session.add(TransactionType(name="transfer"))
    with pytest.raises(IntegrityError):
        session.commit()