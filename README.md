# simplebank

A small bank ledger kept in an SQLite database. It stores three kinds of records:

- **accounts**: an owner, a balance and a currency;
- **entries**: changes to one account's balance, positive or negative;
- **transfers**: money moved from one account to another.

A transfer runs as one database transaction. It writes the transfer record and two
entries, then updates both balances. The balances are updated in ascending order of
account id.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

```python
from simplebank.queries import Queries, open_database
from simplebank.store import Store

conn = open_database("bank.db")

queries = Queries(conn)
alice = queries.create_account("alice", 100, "EUR")
bob = queries.create_account("bob", 50, "EUR")

store = Store(conn)
result = store.transfer_tx(alice.id, bob.id, 10)

print(result.from_account.balance)  # 90
print(result.to_account.balance)    # 60
print(result.from_entry.amount)     # -10
print(result.to_dict()["transfer"]["amount"])  # 10
```

### Opening a database

`open_database(path)` opens an SQLite connection in autocommit mode with foreign keys
switched on, creates the tables and indexes if they are missing, and returns the
connection. The connection may be used from several threads. `create_schema(conn)`
creates the tables and indexes on a connection opened some other way.

### Queries

`Queries(conn)` gives one method for each statement:

| Records   | Methods |
|-----------|---------|
| accounts  | `create_account`, `get_account`, `get_account_for_update`, `list_accounts`, `update_account`, `add_account_balance`, `delete_account` |
| entries   | `create_entry`, `get_entry`, `list_entries` |
| transfers | `create_transfer`, `get_transfer`, `list_transfers` |

- The `get_*` methods, `update_account` and `add_account_balance` raise `NoRowsError`
  (a `LookupError`) when no row has the given id.
- `delete_account` does nothing if the account does not exist.
- `get_account_for_update` reads the row just like `get_account`, because SQLite locks
  the whole database for a writing transaction.
- The list methods take `limit` and `offset` and return records ordered by id.
  `list_entries` returns one account's entries; `list_transfers` returns the transfers
  that leave `from_account_id` or arrive at `to_account_id`.
- New records get their `created_at` time in UTC.
- `with_connection(conn)` returns a new `Queries` that runs on another connection.

### Records

`Account`, `Entry` and `Transfer` from `simplebank.models` are dataclasses for the rows
returned by queries. Each has `to_dict()`, which returns the fields by name (`id`,
`owner`, `balance`, `currency`, `account_id`, `from_account_id`, `to_account_id`,
`amount`, `created_at`, whichever the record has), with `created_at` as an ISO 8601
string.

### Transactions

`Store(conn)` offers every `Queries` method as well. It expects a connection in
autocommit mode, such as one from `open_database`. `Store.transaction()` is a context
manager. It starts a transaction with `BEGIN IMMEDIATE` and yields a `Queries` bound to
it. The transaction commits when the block ends and rolls back if the block raises.
If the rollback itself fails, a `RuntimeError` names both errors. Transactions on one
store are serialised by a lock, so several threads can share the store:

```python
with store.transaction() as q:
    q.add_account_balance(alice.id, -5)
    q.add_account_balance(bob.id, 5)
```

`Store.transfer_tx(from_account_id, to_account_id, amount)` runs a whole transfer in one
transaction and returns a `TransferTxResult` with `transfer`, `from_account`,
`to_account`, `from_entry` and `to_entry`, plus `to_dict()`.

### Random sample data

`simplebank.random` generates sample values:

- `random_int(min_value, max_value)`: both ends included; `ValueError` for an empty range;
- `random_string(n)`: `n` lowercase letters; `ValueError` if `n` is negative;
- `random_owner()`: six lowercase letters;
- `random_money()`: 0 to 1000;
- `random_currency()`: one of `EUR`, `USD`, `CAD`.

## What it does not do

simplebank is a library only. It has no command-line program and no network API, and it
stores data only in SQLite; there are no schema migrations beyond creating the tables.
It does not check amounts or currencies: a transfer is recorded whatever its amount and
even if it leaves a balance negative.