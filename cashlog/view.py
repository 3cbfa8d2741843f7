"""Browsing the transaction history page by page."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from cashlog.fetchers import fetch_categories_by_type, fetch_types
from cashlog.models import Transaction
from cashlog.prompts import prompt_input, select as select_item
from cashlog.selectors import SelectionError
from cashlog.transactions import Balance

ALL = "All"

_INTEGER = re.compile(r"[+-]?\d+")
_DAY = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIMESTAMP = "%Y-%m-%d %H:%M:%S"


@dataclass
class ViewOptions:
    """Filters, search, ordering and page size of the history view."""

    type_name: str = ALL
    category: str = ALL
    search_field: str = ""
    search_query: str = ""
    sort_field: str = "created_at"
    sort_order: str = "desc"
    page_size: int = 5


def _search_condition(options: ViewOptions):
    field, query = options.search_field, options.search_query
    if not field or not query:
        return None
    if field in ("category", "description"):
        return getattr(Transaction, field).ilike(f"%{query}%")
    if field == "amount":
        try:
            return Transaction.amount == float(query)
        except ValueError:
            print("Invalid amount for search, ignoring.")
            return None
    if field == "date":
        try:
            if not _DAY.fullmatch(query):
                raise ValueError(query)
            day = datetime.strptime(query, "%Y-%m-%d")
        except ValueError:
            print("Invalid date format, ignoring.")
            return None
        return (Transaction.created_at >= day) & (Transaction.created_at < day + timedelta(days=1))
    print("Unknown search field, ignoring.")
    return None


def query_transactions(session: Session, options: ViewOptions, page: int) -> list[Transaction]:
    """Return one page (counted from 1) of the transactions matching the options."""
    columns = Transaction.__table__.c
    if options.sort_field not in columns:
        raise ValueError(f"Unknown sort field: {options.sort_field}")
    sort_column = columns[options.sort_field]
    ordering = sort_column.asc() if options.sort_order == "asc" else sort_column.desc()

    query = select(Transaction)
    if options.type_name != ALL:
        query = query.where(Transaction.type == options.type_name)
    if options.category != ALL:
        query = query.where(Transaction.category == options.category)
    condition = _search_condition(options)
    if condition is not None:
        query = query.where(condition)

    query = (
        query.order_by(ordering, Transaction.id)
        .limit(options.page_size)
        .offset((page - 1) * options.page_size)
    )
    return list(session.scalars(query))


def summarize(transactions) -> Balance:
    """Total the income and expense transactions of a page."""
    balance = Balance()
    for transaction in transactions:
        if transaction.type == "income":
            balance.income += transaction.amount
        elif transaction.type == "expense":
            balance.expense += transaction.amount
    return balance


def format_page(transactions, page: int) -> str:
    """Render one page of transactions followed by its summary."""
    lines = [
        "",
        f"--- Transaction History (Page {page}) ---",
        f"{'ID':<4} {'Amount':<10} {'Type':<10} {'Category':<15} "
        f"{'Description':<30} {'Created At':<25} {'UpdatedAt':<25}",
        "-" * 125,
    ]
    updated_text = ""
    for transaction in transactions:
        if transaction.updated_at is not None:
            updated_text = transaction.updated_at.strftime(_TIMESTAMP)
        created_text = transaction.created_at.strftime(_TIMESTAMP)
        lines.append(
            f"{transaction.id:<4d} {transaction.amount:<10.2f} {transaction.type:<10} "
            f"{transaction.category:<15} {transaction.description:<30} "
            f"{created_text:<25} {updated_text:<25}"
        )

    lines.extend(["", "--- Summary ---"])
    totals = summarize(transactions)
    has_income = totals.income > 0
    has_expense = totals.expense > 0
    if has_income and not has_expense:
        lines.append(f"{'Total Income':<15}: {totals.income:.2f}")
    elif has_expense and not has_income:
        lines.append(f"{'Total Expense':<15}: {totals.expense:.2f}")
    else:
        lines.append(f"{'Total Income':<15}: {totals.income:.2f}")
        lines.append(f"{'Total Expense':<15}: {totals.expense:.2f}")
        lines.append(f"{'Balance':<15}: {totals.net:.2f}")
    return "\n".join(lines)


def _choose_category(session: Session, type_name: str) -> str | None:
    if type_name == ALL:
        return ALL
    categories = fetch_categories_by_type(session, type_name)
    if not categories:
        print("No categories found for this type.")
        return ALL
    choices = [ALL, *categories]
    print("Choose a category:")
    for number, category in enumerate(choices, start=1):
        print(f"[{number}] {category}")
    answer = prompt_input("Enter category number: ")
    if not _INTEGER.fullmatch(answer) or not 1 <= int(answer) <= len(choices):
        print("Invalid selection.")
        return None
    return choices[int(answer) - 1]


def interactive_view(session: Session) -> None:
    """Ask for filters and ordering, then page through the matching transactions."""
    try:
        type_name = select_item("Select transaction type", [ALL, *fetch_types(session)])
    except (EOFError, ValueError) as exc:
        raise SelectionError(f"prompt failed: {exc}") from exc

    category = _choose_category(session, type_name)
    if category is None:
        return

    search_field = prompt_input("Search field (category/description/amount/date/leave empty): ")
    search_query = prompt_input("Enter search query: ") if search_field else ""

    sort_field = prompt_input("Sort by (amount/category/created_at): ") or "created_at"
    sort_order = prompt_input("Sort order (asc/desc): ")
    if sort_order != "asc":
        sort_order = "desc"

    page_size = 5
    page_size_text = prompt_input("Enter page size (default 5): ")
    if page_size_text:
        if _INTEGER.fullmatch(page_size_text) and int(page_size_text) > 0:
            page_size = int(page_size_text)
        else:
            print("Invalid page size, using default 5.")

    options = ViewOptions(
        type_name=type_name,
        category=category,
        search_field=search_field,
        search_query=search_query,
        sort_field=sort_field,
        sort_order=sort_order,
        page_size=page_size,
    )

    page = 1
    while True:
        transactions = query_transactions(session, options, page)
        if not transactions:
            print("No more transactions.")
            break
        print(format_page(transactions, page))
        answer = prompt_input("\nEnter 'n' for next page, 'q' to quit: ")
        if answer.lower() != "n":
            break
        page += 1