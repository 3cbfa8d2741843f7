"""Interactive choice of a transaction type and a category."""

import re

from sqlalchemy.orm import Session

from cashlog.fetchers import fetch_categories_by_type, fetch_types
from cashlog.prompts import prompt_input, select

_INTEGER = re.compile(r"[+-]?\d+")


class SelectionError(Exception):
    """Raised when the user's choice cannot be made or is not valid."""


def _parse_choice(answer: str, count: int) -> int:
    if not _INTEGER.fullmatch(answer):
        raise SelectionError("invalid selection")
    number = int(answer)
    if not 1 <= number <= count:
        raise SelectionError("invalid selection")
    return number - 1


def prompt_select_transaction_type(session: Session) -> str:
    """Ask the user to pick one of the known transaction types."""
    types = fetch_types(session)
    try:
        return select("Select transaction type", types)
    except (EOFError, ValueError) as exc:
        raise SelectionError(f"prompt failed: {exc}") from exc


def prompt_select_category_by_type(session: Session, type_name: str) -> str:
    """Ask the user to pick a category of the given type by its number."""
    categories = fetch_categories_by_type(session, type_name)
    if not categories:
        raise SelectionError(f"no categories found for type: {type_name}")

    print("Choose a category:")
    for number, category in enumerate(categories, start=1):
        print(f"[{number}] {category}")

    answer = prompt_input("Enter category number: ")
    return categories[_parse_choice(answer, len(categories))]


def prompt_select_type_and_category(session: Session) -> tuple[str, str]:
    """Ask for a transaction type, then for one of its categories."""
    type_name = prompt_select_transaction_type(session)
    category = prompt_select_category_by_type(session, type_name)
    return type_name, category