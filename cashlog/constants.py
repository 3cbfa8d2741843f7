"""Transaction types and categories that ship with every ledger and cannot be removed."""

PROTECTED_TRANSACTION_TYPES: tuple[str, ...] = ("income", "expense")

PROTECTED_CATEGORIES: dict[str, tuple[str, ...]] = {
    "income": ("Salary", "Freelance"),
    "expense": ("Grocery", "Rent"),
}


def is_protected_type(type_name: str) -> bool:
    """Return True if the transaction type may not be deleted."""
    return type_name in PROTECTED_TRANSACTION_TYPES


def is_protected_category(type_name: str, category: str) -> bool:
    """Return True if the category of the given type may not be deleted."""
    return category in PROTECTED_CATEGORIES.get(type_name, ())