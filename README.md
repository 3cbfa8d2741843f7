# cashlog

A small command-line tool for keeping a log of your money: record income
and expenses by type and category, page through your history, check your
balance and print month-by-month summaries. It can also remind you every
day to log what you spent.

## Installation

```
pip install .
```

This installs the `cash-log` command.

## Database

Transactions are kept in a SQL database reached through SQLAlchemy. The
connection is read from the environment. If `CASHLOG_DB_URL` is set, it is
used as the full SQLAlchemy database URL, for example:

```
export CASHLOG_DB_URL=sqlite:///cashlog.db
```

Otherwise a PostgreSQL URL (with `sslmode=disable`) is built from these
variables:

| Variable           | Meaning                       |
|--------------------|-------------------------------|
| `CASHLOG_DB_HOST`  | database host                 |
| `CASHLOG_DB_PORT`  | database port (required, an integer) |
| `CASHLOG_DB_USER`  | user name                     |
| `CASHLOG_DB_PASS`  | password                      |
| `CASHLOG_DB_NAME`  | database name                 |

For example:

```
export CASHLOG_DB_HOST=localhost
export CASHLOG_DB_PORT=5432
export CASHLOG_DB_USER=user
export CASHLOG_DB_PASS=password
export CASHLOG_DB_NAME=cashlog
```

The package does not install a PostgreSQL driver; to use PostgreSQL,
install one that SQLAlchemy's `postgresql` dialect can use (such as
psycopg2) yourself.

If `CASHLOG_ENV` is `development` or `dev`, variables are also loaded from
a `.env` file in the current directory.

The connection is tried up to five times, five seconds apart, before giving
up. On start the tables are created if needed and the default types and
categories are added.

## Usage

```
cash-log <command>
```

Commands:

- `add` – pick a type and category, then enter amount and description
- `view` – browse transactions, filtered by type, category or a search on
  category, description, amount or date (`YYYY-MM-DD`), sorted by a column
  such as `amount`, `category` or `created_at`, ascending or descending,
  and paged (five per page unless you say otherwise)
- `balance` – total income, total expenses and net balance
- `edit` – change a transaction by its ID; leave a field empty to keep it
- `delete` – delete a transaction by its ID after typing `yes` to confirm
- `report` – monthly income, expense and balance, newest month first,
  optionally limited by year, month or a date range (`YYYY-MM-DD`)
- `add-category`, `remove-category` – manage categories for a type
- `add-type`, `remove-type` – manage transaction types
- `info` – list all types and the categories under each
- `remind` – run in the foreground and show a reminder every day at 15:00
  and 21:00 (printed, and shown with `notify-send` on Linux or `osascript`
  on macOS); stop it with Ctrl-C

Where a list of types is offered, answer with the number or the name.

Run `cash-log` with no or an unknown command to see the list, and
`cash-log --version` to print the version. The command exits with status 1
and prints the reason when the database cannot be reached, a selection is
invalid, a type or category cannot be changed, or input ends early.

## Protected entries

The types `income` and `expense`, and the categories `Salary`, `Freelance`
(income) and `Grocery`, `Rent` (expense), are always present and cannot be
removed. A type or category still used by any transaction cannot be removed
either.

## Tests

```
pip install .[test]
pytest
```