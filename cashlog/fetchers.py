"""Lookups of category and transaction type names."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from cashlog.models import Category, TransactionType


def fetch_categories_by_type(session: Session, type_name: str) -> list[str]:
    """Names of the categories of one type, in alphabetical order."""
    query = select(Category.name).where(Category.type == type_name).order_by(Category.name.asc())
    return list(session.scalars(query))


def fetch_all_categories(session: Session) -> list[str]:
    """Names of all categories, in alphabetical order."""
    return list(session.scalars(select(Category.name).order_by(Category.name.asc())))


def fetch_types(session: Session) -> list[str]:
    """Names of all transaction types, in the order they were created."""
    return list(session.scalars(select(TransactionType.name).order_by(TransactionType.id)))