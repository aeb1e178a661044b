"""PostgreSQL ledger store: one ``jsonb`` row per ledger."""

from typing import Any, Callable

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb

from rent_ledger.exceptions import StorageIOError
from rent_ledger.models import Ledger
from rent_ledger.store.base import LedgerStore
from rent_ledger.store.seed import build_seed_ledger

CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS {table} (
    ledger_key TEXT PRIMARY KEY,
    document JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

SELECT_DOCUMENT = "SELECT document FROM {table} WHERE ledger_key = %s"

UPSERT_DOCUMENT = """
INSERT INTO {table} (ledger_key, document, updated_at)
VALUES (%s, %s, now())
ON CONFLICT (ledger_key)
DO UPDATE SET document = EXCLUDED.document, updated_at = EXCLUDED.updated_at
"""


class PostgresLedgerStore(LedgerStore):
    """Store the ledger document in a PostgreSQL table.

    Parameters
    ----------
    conninfo : str
        libpq connection string.
    table : str
        Table holding ledger documents; created on first use.
    ledger_key : str
        Row key, so several ledgers can share a table.
    """

    def __init__(
        self,
        conninfo: str,
        table: str = "rent_ledger",
        ledger_key: str = "default",
        seed_factory: Callable[[], Ledger] = build_seed_ledger,
    ) -> None:
        super().__init__(seed_factory)
        self.conninfo = conninfo
        self.table = table
        self.ledger_key = ledger_key

    def _query(self, template: str) -> sql.Composed:
        return sql.SQL(template).format(table=sql.Identifier(self.table))

    def _read(self) -> Any | None:
        try:
            with psycopg.connect(self.conninfo) as conn:
                conn.execute(self._query(CREATE_TABLE))
                row = conn.execute(self._query(SELECT_DOCUMENT), (self.ledger_key,)).fetchone()
        except psycopg.Error as exc:
            raise StorageIOError(f"Cannot read ledger {self.ledger_key!r}: {exc}") from exc
        return None if row is None else row[0]

    def _write(self, document: dict[str, Any]) -> None:
        try:
            with psycopg.connect(self.conninfo) as conn:
                conn.execute(self._query(CREATE_TABLE))
                conn.execute(self._query(UPSERT_DOCUMENT), (self.ledger_key, Jsonb(document)))
        except psycopg.Error as exc:
            raise StorageIOError(f"Cannot write ledger {self.ledger_key!r}: {exc}") from exc
