"""Whole-document ledger store contract."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from rent_ledger.models import Ledger
from rent_ledger.store.seed import build_seed_ledger
from rent_ledger.store.serialization import ledger_from_dict, ledger_to_dict

logger = logging.getLogger(__name__)


class LedgerStore(ABC):
    """Persists and retrieves the entire ledger as one document.

    Subclasses only move raw documents in and out of their medium; the
    conversion to and from ``Ledger`` happens here.

    Parameters
    ----------
    seed_factory : Callable[[], Ledger]
        Builds the ledger returned while nothing has been persisted yet.
    """

    def __init__(self, seed_factory: Callable[[], Ledger] = build_seed_ledger) -> None:
        self.seed_factory = seed_factory

    @abstractmethod
    def _read(self) -> Any | None:
        """Return the raw stored document, or ``None`` if there is none."""

    @abstractmethod
    def _write(self, document: dict[str, Any]) -> None:
        """Replace the stored document."""

    def exists(self) -> bool:
        """Whether a ledger document has been persisted."""
        return self._read() is not None

    def load(self) -> Ledger:
        """Load the ledger, falling back to the seed when none is stored."""
        document = self._read()
        if document is None:
            logger.debug("No stored ledger; using seed document")
            return self.seed_factory()
        ledger = ledger_from_dict(document)
        logger.debug("Loaded ledger: %s", ledger.summary())
        return ledger

    def save(self, ledger: Ledger) -> None:
        """Persist the whole ledger."""
        self._write(ledger_to_dict(ledger))
        logger.debug("Saved ledger with %d units", len(ledger.units))

    def seed_if_absent(self) -> bool:
        """Install the seed document unless a ledger already exists.

        Returns
        -------
        bool
            True if the seed was written.
        """
        if self.exists():
            return False
        self.save(self.seed_factory())
        logger.info("Installed seed ledger")
        return True
