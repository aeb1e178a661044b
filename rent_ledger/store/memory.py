"""In-memory ledger store."""

import json
from typing import Any, Callable

from rent_ledger.models import Ledger
from rent_ledger.store.base import LedgerStore
from rent_ledger.store.seed import build_seed_ledger


class InMemoryLedgerStore(LedgerStore):
    """Keeps the ledger as a JSON string so loads never share objects."""

    def __init__(self, seed_factory: Callable[[], Ledger] = build_seed_ledger) -> None:
        super().__init__(seed_factory)
        self._document: str | None = None

    def _read(self) -> Any | None:
        if self._document is None:
            return None
        return json.loads(self._document)

    def _write(self, document: dict[str, Any]) -> None:
        self._document = json.dumps(document, ensure_ascii=False)

    def clear(self) -> None:
        """Forget the stored document."""
        self._document = None
