"""Ledger persistence backends."""

from rent_ledger.store.base import LedgerStore
from rent_ledger.store.json_file import JsonFileLedgerStore
from rent_ledger.store.memory import InMemoryLedgerStore
from rent_ledger.store.postgres import PostgresLedgerStore
from rent_ledger.store.seed import build_seed_ledger

__all__ = [
    "InMemoryLedgerStore",
    "JsonFileLedgerStore",
    "LedgerStore",
    "PostgresLedgerStore",
    "build_seed_ledger",
]
