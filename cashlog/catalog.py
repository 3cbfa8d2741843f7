"""Managing the transaction types and categories of the ledger."""

import re
from itertools import groupby

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from cashlog.constants import is_protected_category, is_protected_type
from cashlog.fetchers import fetch_categories_by_type, fetch_types
from cashlog.models import Category, Transaction, TransactionType
from cashlog.prompts import prompt_input, select as select_item

_INTEGER = re.compile(r"[+-]?\d+")


class CatalogError(Exception):
    """A type or category cannot be added or removed."""


def _first_or_create(session, model, what, **attributes):
    row = session.scalars(select(model).filter_by(**attributes)).first()
    if row is None:
        row = model(**attributes)
        session.add(row)
        try:
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise CatalogError(f"Failed to add {what}: {exc}") from exc
    return row


def add_category(session, name, type_name):
    """The category of that name and type, created if needed."""
    return _first_or_create(session, Category, "category", name=name, type=type_name)


def add_type(session, name):
    """The transaction type of that name, created if needed."""
    return _first_or_create(session, TransactionType, "type", name=name)


def _usage(session, *conditions):
    return int(session.scalar(select(func.count()).select_from(Transaction).where(*conditions)) or 0)


def type_usage(session, type_name):
    """Number of transactions of the given type."""
    return _usage(session, Transaction.type == type_name)


def category_usage(session, category, type_name):
    """Number of transactions under the given category and type."""
    return _usage(session, Transaction.category == category, Transaction.type == type_name)


def _delete(session, model, what, **attributes):
    row = session.scalars(select(model).filter_by(**attributes)).first()
    if row is None:
        raise CatalogError(f"{what} not found: {attributes['name']}")
    session.delete(row)
    session.commit()


def remove_type(session, name):
    """Delete an unprotected, unused transaction type."""
    if is_protected_type(name):
        raise CatalogError("⚠️  This transaction type is protected and cannot be deleted.")
    count = type_usage(session, name)
    if count:
        raise CatalogError(f"⚠️  Cannot delete '{name}' transaction type. It is used in {count} transaction(s)")
    _delete(session, TransactionType, "Transaction type", name=name)


def remove_category(session, name, type_name):
    """Delete an unprotected, unused category of the given type."""
    if is_protected_category(type_name, name):
        raise CatalogError("⚠️  This category is protected and cannot be deleted.")
    count = category_usage(session, name, type_name)
    if count:
        raise CatalogError(f"⚠️  Cannot delete '{name}' category. It is used in {count} transaction(s)")
    _delete(session, Category, "Category", name=name, type=type_name)


def format_info(session):
    """All transaction types and the categories of each type."""
    lines = ["", "📂 Available Transaction Types:"]
    lines += [f" - {name}" for name in session.scalars(select(TransactionType.name).order_by(TransactionType.name))]
    lines += ["", "🏷️ Categories by Type:"]
    categories = session.scalars(select(Category).order_by(Category.type, Category.name))
    for type_name, members in groupby(categories, key=lambda category: category.type):
        lines.append(f" [{type_name}]:")
        lines += [f"   - {category.name}" for category in members]
    return "\n".join(lines)


def interactive_add_category(session):
    name = prompt_input("Enter new category name: ")
    add_category(session, name, select_item("Select transaction type", fetch_types(session)))
    print("Category added successfully.")


def interactive_add_type(session):
    add_type(session, prompt_input("Enter new transaction type: "))
    print("Transaction type added successfully.")


def interactive_remove_type(session):
    type_name = select_item("Select transaction type", fetch_types(session))
    try:
        remove_type(session, type_name)
    except CatalogError as exc:
        print(exc)
    else:
        print("Transaction type deleted successfully.")


def interactive_remove_category(session):
    type_name = select_item("Select transaction type", fetch_types(session))
    categories = fetch_categories_by_type(session, type_name)
    if not categories:
        print(f"No categories found for type: {type_name}")
        return
    print("Choose a category:")
    for number, category in enumerate(categories, start=1):
        print(f"[{number}] {category}")
    answer = prompt_input("Enter category number: ")
    if not _INTEGER.fullmatch(answer) or not 1 <= int(answer) <= len(categories):
        print("Invalid selection.")
        return
    try:
        remove_category(session, categories[int(answer) - 1], type_name)
    except CatalogError as exc:
        print(exc)
    else:
        print("Category deleted successfully.")


def show_info(session):
    print(format_info(session))