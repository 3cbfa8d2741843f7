"""Database tables and value objects of the ledger."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all ledger tables."""


class Transaction(Base):
    """A single income or expense entry."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    amount: Mapped[float] = mapped_column(default=0.0)
    category: Mapped[str] = mapped_column(String, default="")
    description: Mapped[str] = mapped_column(String, default="")
    type: Mapped[str] = mapped_column(String, default="")
    created_at: Mapped[datetime] = mapped_column(default=datetime.now)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.now, onupdate=datetime.now)


class Category(Base):
    """A category that transactions of one type are filed under."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String, unique=True)
    type: Mapped[str] = mapped_column(String)


class TransactionType(Base):
    """A kind of transaction, such as income or expense."""

    __tablename__ = "transaction_types"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String, unique=True)


@dataclass
class ReportFilter:
    """Restrictions on a monthly report; zero or empty means none."""

    year: int = 0
    month: int = 0
    week: int = 0
    start_date: str = ""
    end_date: str = ""


@dataclass
class MonthlySummary:
    """Income and expense totals of one month."""

    year: int
    month: int
    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        return self.income - self.expense

    @property
    def label(self) -> str:
        return f"{self.year}-{self.month:02d}"