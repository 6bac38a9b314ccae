"""A small bank ledger of accounts, entries and transfers stored in SQLite."""

__version__ = "0.1.0"
__all__ = ["models", "queries", "random", "store"]