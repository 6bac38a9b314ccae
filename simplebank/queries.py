"""Database access for accounts, entries and transfers, backed by SQLite."""

import sqlite3
from datetime import datetime, timezone

from .models import Account, Entry, Transfer

_SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner TEXT NOT NULL,
    balance INTEGER NOT NULL,
    currency TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS accounts_owner_idx ON accounts (owner);

CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS entries_account_id_idx ON entries (account_id);

CREATE TABLE IF NOT EXISTS transfers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    from_account_id INTEGER NOT NULL REFERENCES accounts (id),
    to_account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS transfers_from_idx ON transfers (from_account_id);
CREATE INDEX IF NOT EXISTS transfers_to_idx ON transfers (to_account_id);
"""

_ACCOUNT_COLUMNS = "id, owner, balance, currency, created_at"
_ENTRY_COLUMNS = "id, account_id, amount, created_at"
_TRANSFER_COLUMNS = "id, from_account_id, to_account_id, amount, created_at"


class NoRowsError(LookupError):
    """Raised when a query that must return one row finds none."""


def open_database(path):
    """Open the database at path, with the schema in place.

    The connection runs in autocommit mode; transactions are opened explicitly.
    """
    conn = sqlite3.connect(
        path, isolation_level=None, check_same_thread=False, timeout=30
    )
    conn.execute("PRAGMA foreign_keys = ON")
    create_schema(conn)
    return conn


def create_schema(conn):
    """Create the bank's tables and indexes if they do not exist yet."""
    conn.executescript(_SCHEMA)


def _now():
    return datetime.now(timezone.utc).isoformat()


def _account(row):
    account_id, owner, balance, currency, created_at = row
    return Account(account_id, owner, balance, currency, datetime.fromisoformat(created_at))


def _entry(row):
    entry_id, account_id, amount, created_at = row
    return Entry(entry_id, account_id, amount, datetime.fromisoformat(created_at))


def _transfer(row):
    transfer_id, from_id, to_id, amount, created_at = row
    return Transfer(transfer_id, from_id, to_id, amount, datetime.fromisoformat(created_at))


class Queries:
    """Typed queries run over one database connection."""

    def __init__(self, conn):
        self.conn = conn

    def with_connection(self, conn):
        """Return queries that run over another connection, such as one inside a transaction."""
        return Queries(conn)

    def _one(self, sql, params, convert):
        row = self.conn.execute(sql, params).fetchone()
        if row is None:
            raise NoRowsError("no rows in result set")
        return convert(row)

    def _many(self, sql, params, convert):
        return [convert(row) for row in self.conn.execute(sql, params)]

    # Accounts

    def add_account_balance(self, account_id, amount):
        """Add amount to an account's balance and return the updated account."""
        cursor = self.conn.execute(
            "UPDATE accounts SET balance = balance + ? WHERE id = ?",
            (amount, account_id),
        )
        if cursor.rowcount == 0:
            raise NoRowsError("no rows in result set")
        return self.get_account(account_id)

    def create_account(self, owner, balance, currency):
        """Insert a new account and return it."""
        cursor = self.conn.execute(
            "INSERT INTO accounts (owner, balance, currency, created_at) VALUES (?, ?, ?, ?)",
            (owner, balance, currency, _now()),
        )
        return self.get_account(cursor.lastrowid)

    def delete_account(self, account_id):
        """Delete an account; deleting a missing account is not an error."""
        self.conn.execute("DELETE FROM accounts WHERE id = ?", (account_id,))

    def get_account(self, account_id):
        """Return the account with the given id."""
        return self._one(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE id = ? LIMIT 1",
            (account_id,),
            _account,
        )

    def get_account_for_update(self, account_id):
        """Return an account that is about to be changed.

        SQLite locks the whole database for writing transactions, so this reads
        the row like get_account.
        """
        return self.get_account(account_id)

    def list_accounts(self, limit, offset):
        """Return a page of accounts ordered by id."""
        return self._many(
            f"SELECT {_ACCOUNT_COLUMNS} FROM accounts ORDER BY id LIMIT ? OFFSET ?",
            (limit, offset),
            _account,
        )

    def update_account(self, account_id, balance):
        """Set an account's balance and return the updated account."""
        cursor = self.conn.execute(
            "UPDATE accounts SET balance = ? WHERE id = ?", (balance, account_id)
        )
        if cursor.rowcount == 0:
            raise NoRowsError("no rows in result set")
        return self.get_account(account_id)

    # Entries

    def create_entry(self, account_id, amount):
        """Insert a balance entry for an account and return it."""
        cursor = self.conn.execute(
            "INSERT INTO entries (account_id, amount, created_at) VALUES (?, ?, ?)",
            (account_id, amount, _now()),
        )
        return self.get_entry(cursor.lastrowid)

    def get_entry(self, entry_id):
        """Return the entry with the given id."""
        return self._one(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE id = ? LIMIT 1",
            (entry_id,),
            _entry,
        )

    def list_entries(self, account_id, limit, offset):
        """Return a page of one account's entries ordered by id."""
        return self._many(
            f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE account_id = ? "
            "ORDER BY id LIMIT ? OFFSET ?",
            (account_id, limit, offset),
            _entry,
        )

    # Transfers

    def create_transfer(self, from_account_id, to_account_id, amount):
        """Insert a transfer record and return it."""
        cursor = self.conn.execute(
            "INSERT INTO transfers (from_account_id, to_account_id, amount, created_at) "
            "VALUES (?, ?, ?, ?)",
            (from_account_id, to_account_id, amount, _now()),
        )
        return self.get_transfer(cursor.lastrowid)

    def get_transfer(self, transfer_id):
        """Return the transfer with the given id."""
        return self._one(
            f"SELECT {_TRANSFER_COLUMNS} FROM transfers WHERE id = ? LIMIT 1",
            (transfer_id,),
            _transfer,
        )

    def list_transfers(self, from_account_id, to_account_id, limit, offset):
        """Return a page of transfers leaving one account or reaching another, ordered by id."""
        return self._many(
            f"SELECT {_TRANSFER_COLUMNS} FROM transfers "
            "WHERE from_account_id = ? OR to_account_id = ? "
            "ORDER BY id LIMIT ? OFFSET ?",
            (from_account_id, to_account_id, limit, offset),
            _transfer,
        )