"""Monthly income and expense report."""

import re
from datetime import datetime

from sqlalchemy import case, extract, func, select
from sqlalchemy.orm import Session

from cashlog.models import MonthlySummary, ReportFilter, Transaction
from cashlog.prompts import prompt_input

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RESET = "\033[0m"

_INTEGER = re.compile(r"[+-]?\d+")


def _parse_day(text: str) -> datetime:
    try:
        return datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise ValueError(f"Invalid date: {text!r}") from None


def monthly_summaries(session: Session, report_filter: ReportFilter) -> list[MonthlySummary]:
    """Total income and expense per month, newest month first."""
    year = extract("year", Transaction.created_at)
    month = extract("month", Transaction.created_at)
    income = func.sum(case((Transaction.type == "income", Transaction.amount), else_=0.0))
    expense = func.sum(case((Transaction.type == "expense", Transaction.amount), else_=0.0))

    conditions = []
    if report_filter.year != 0:
        conditions.append(year == report_filter.year)
    if report_filter.month != 0:
        conditions.append(month == report_filter.month)
    if report_filter.start_date:
        conditions.append(Transaction.created_at >= _parse_day(report_filter.start_date))
    if report_filter.end_date:
        conditions.append(Transaction.created_at <= _parse_day(report_filter.end_date))

    query = select(year, month, income, expense)
    if conditions:
        query = query.where(*conditions)
    query = query.group_by(year, month).order_by(year.desc(), month.desc())

    return [
        MonthlySummary(
            year=int(row_year),
            month=int(row_month),
            income=float(row_income or 0.0),
            expense=float(row_expense or 0.0),
        )
        for row_year, row_month, row_income, row_expense in session.execute(query)
    ]


def format_report(summaries: list[MonthlySummary]) -> str:
    """Render the monthly summary table with coloured figures."""
    lines = [
        "",
        "📊 Monthly Finance Summary",
        "=" * 60,
        f"| {'Year-Month':<10} | {'Income':>12} | {'Expense':>12} | {'Balance':>12} |",
        "-" * 60,
    ]
    lines.extend(
        f"| {summary.label:<10} "
        f"| {GREEN}{summary.income:12.2f}{RESET} "
        f"| {RED}{summary.expense:12.2f}{RESET} "
        f"| {YELLOW}{summary.balance:12.2f}{RESET} |"
        for summary in summaries
    )
    lines.append("=" * 60)
    return "\n".join(lines)


def monthly_report(session: Session, report_filter: ReportFilter) -> None:
    """Print the monthly report for the given filter."""
    print(format_report(monthly_summaries(session, report_filter)))


def _read_int(prompt: str) -> int:
    answer = prompt_input(prompt)
    if not answer:
        return 0
    if not _INTEGER.fullmatch(answer):
        print("Invalid number, ignoring.")
        return 0
    return int(answer)


def interactive_report(session: Session) -> None:
    """Ask for report filters and print the report."""
    year = _read_int("Enter year (e.g. 2025) or leave empty: ")
    month = _read_int("Enter month (1-12) or leave empty: ")
    start_date = prompt_input("Enter start date (YYYY-MM-DD) or leave empty: ")
    end_date = prompt_input("Enter end date (YYYY-MM-DD) or leave empty: ")
    report_filter = ReportFilter(
        year=year, month=month, start_date=start_date, end_date=end_date
    )
    monthly_report(session, report_filter)