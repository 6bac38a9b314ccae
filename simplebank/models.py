"""Records stored by the bank: accounts, balance entries and transfers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    """A bank account holding a balance in one currency."""

    id: int
    owner: str
    balance: int
    currency: str
    created_at: datetime

    def to_dict(self):
        """Return the account as a JSON-ready dictionary."""
        return {
            "id": self.id,
            "owner": self.owner,
            "balance": self.balance,
            "currency": self.currency,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Entry:
    """A change to one account's balance; the amount may be negative or positive."""

    id: int
    account_id: int
    amount: int
    created_at: datetime

    def to_dict(self):
        """Return the entry as a JSON-ready dictionary."""
        return {
            "id": self.id,
            "account_id": self.account_id,
            "amount": self.amount,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Transfer:
    """A movement of money between two accounts; the amount must be positive."""

    id: int
    from_account_id: int
    to_account_id: int
    amount: int
    created_at: datetime

    def to_dict(self):
        """Return the transfer as a JSON-ready dictionary."""
        return {
            "id": self.id,
            "from_account_id": self.from_account_id,
            "to_account_id": self.to_account_id,
            "amount": self.amount,
            "created_at": self.created_at.isoformat(),
        }