"""Adding, editing, deleting transactions and totalling the balance."""

import re
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cashlog.models import Transaction
from cashlog.prompts import prompt_input
from cashlog.selectors import (
    SelectionError,
    prompt_select_category_by_type,
    prompt_select_transaction_type,
)

_INTEGER = re.compile(r"[+-]?\d+")


@dataclass
class Balance:
    """Total income and expenses over all transactions."""

    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        """Income minus expenses."""
        return self.income - self.expense


def add_transaction(
    session: Session, amount: float, category: str, description: str, type_name: str
) -> Transaction:
    """Store a new transaction and return it."""
    transaction = Transaction(
        amount=amount, category=category, description=description, type=type_name
    )
    session.add(transaction)
    session.commit()
    return transaction


def get_transaction(session: Session, transaction_id: int) -> Transaction:
    """Return the transaction with the given id; LookupError if there is none."""
    transaction = session.get(Transaction, transaction_id)
    if transaction is None:
        raise LookupError("Transaction not found")
    return transaction


def delete_transaction(session: Session, transaction_id: int) -> Transaction:
    """Delete the transaction with the given id and return it."""
    transaction = get_transaction(session, transaction_id)
    session.delete(transaction)
    session.commit()
    return transaction


def _total(session: Session, type_name: str) -> float:
    query = select(func.coalesce(func.sum(Transaction.amount), 0.0)).where(
        Transaction.type == type_name
    )
    return float(session.scalar(query) or 0.0)


def compute_balance(session: Session) -> Balance:
    """Sum the income and expense transactions."""
    return Balance(income=_total(session, "income"), expense=_total(session, "expense"))


def format_balance(balance: Balance) -> str:
    """Render the balance sheet box."""
    rule = "├──────────────────────────────┤"
    lines = [
        "┌──────────────────────────────┐",
        "│        💰 Balance Sheet       │",
        rule,
        f"│ {'Total Income:':<20} {balance.income:8.2f} │",
        f"│ {'Total Expenses:':<20} {balance.expense:8.2f} │",
        rule,
        f"│ {'Net Balance:':<20} {balance.net:8.2f} │",
        "└──────────────────────────────┘",
    ]
    return "\n".join(lines)


def _read_id(prompt: str) -> int | None:
    answer = prompt_input(prompt)
    if not _INTEGER.fullmatch(answer):
        print("Invalid ID")
        return None
    return int(answer)


def interactive_add(session: Session) -> None:
    """Ask for the fields of a new transaction and store it."""
    type_name = prompt_select_transaction_type(session)
    try:
        category = prompt_select_category_by_type(session, type_name)
    except SelectionError as exc:
        print(exc)
        return

    try:
        amount = float(prompt_input("Enter amount: "))
    except ValueError:
        print("Invalid amount")
        return

    description = prompt_input("Enter description: ")
    add_transaction(session, amount, category, description, type_name)
    print("Transaction added successfully.")


def interactive_delete(session: Session) -> None:
    """Ask for a transaction id and delete it after confirmation."""
    transaction_id = _read_id("Enter transaction ID to delete: ")
    if transaction_id is None:
        return
    try:
        get_transaction(session, transaction_id)
    except LookupError as exc:
        print(exc)
        return

    confirm = prompt_input("Are you sure you want to delete this transaction? (yes/no): ")
    if confirm.lower() == "yes":
        delete_transaction(session, transaction_id)
        print("Transaction deleted.")
    else:
        print("Deletion cancelled.")


def interactive_edit(session: Session) -> None:
    """Ask for a transaction id and new values for its fields."""
    transaction_id = _read_id("Enter transaction ID to edit: ")
    if transaction_id is None:
        return
    try:
        transaction = get_transaction(session, transaction_id)
    except LookupError as exc:
        print(exc)
        return

    print("Leave field empty to keep current value")

    amount_text = prompt_input(f"Amount ({transaction.amount:.2f}): ")
    if amount_text:
        try:
            transaction.amount = float(amount_text)
        except ValueError:
            pass

    type_name = prompt_select_transaction_type(session)
    if type_name:
        transaction.type = type_name

    try:
        category = prompt_select_category_by_type(session, type_name)
    except SelectionError as exc:
        session.rollback()
        print(exc)
        return
    if category:
        transaction.category = category

    description = prompt_input(f"Description ({transaction.description}): ")
    if description:
        transaction.description = description

    transaction.updated_at = datetime.now()
    session.commit()
    print("Transaction updated.")


def view_balance(session: Session) -> None:
    """Print the balance sheet."""
    print()
    print(format_balance(compute_balance(session)))