"""Transactions over the bank database, including money transfers between accounts."""

import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass

from .models import Account, Entry, Transfer
from .queries import Queries


@dataclass
class TransferTxResult:
    """Everything a transfer transaction created or changed."""

    transfer: Transfer
    from_account: Account
    to_account: Account
    from_entry: Entry
    to_entry: Entry

    def to_dict(self):
        """Return the result as a JSON-ready dictionary."""
        return {
            "transfer": self.transfer.to_dict(),
            "from_account": self.from_account.to_dict(),
            "to_account": self.to_account.to_dict(),
            "from_entry": self.from_entry.to_dict(),
            "to_entry": self.to_entry.to_dict(),
        }


class Store(Queries):
    """All database queries, plus operations that run inside one transaction.

    Transactions on the shared connection are serialised by a lock, so the
    store can be used from several threads at once.
    """

    def __init__(self, conn):
        super().__init__(conn)
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self):
        """Run the enclosed block in a transaction, yielding queries bound to it.

        The transaction is committed when the block finishes and rolled back
        when it raises.
        """
        with self._lock:
            self.conn.execute("BEGIN IMMEDIATE")
            try:
                yield self.with_connection(self.conn)
            except BaseException as exc:
                try:
                    self.conn.execute("ROLLBACK")
                except sqlite3.Error as rollback_error:
                    raise RuntimeError(
                        f"tx err: {exc}, rb err: {rollback_error}"
                    ) from exc
                raise
            self.conn.execute("COMMIT")

    def transfer_tx(self, from_account_id, to_account_id, amount):
        """Move amount from one account to another in a single transaction.

        Creates the transfer record and both account entries, and updates both
        balances. Balances are updated in order of account id so that
        concurrent transfers in opposite directions cannot deadlock.
        """
        with self.transaction() as q:
            transfer = q.create_transfer(from_account_id, to_account_id, amount)
            from_entry = q.create_entry(from_account_id, -amount)
            to_entry = q.create_entry(to_account_id, amount)

            if from_account_id < to_account_id:
                from_account = q.add_account_balance(from_account_id, -amount)
                to_account = q.add_account_balance(to_account_id, amount)
            else:
                to_account = q.add_account_balance(to_account_id, amount)
                from_account = q.add_account_balance(from_account_id, -amount)

        return TransferTxResult(
            transfer=transfer,
            from_account=from_account,
            to_account=to_account,
            from_entry=from_entry,
            to_entry=to_entry,
        )